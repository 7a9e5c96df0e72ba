"""Code emitter, explainer, wireframe renderer and version store."""

import pytest

from app.services.codegen import generate_code, used_components
from app.services.explainer import explain_plan
from app.services.renderer import render_summary, render_svg
from app.services.version_store import VersionStore
from uiplan.errors import ForbiddenProp, UnknownComponent
from uiplan.planner import plan_from_intent
from uiplan.schema import ComponentWhitelist, ComponentNode, Plan


def test_code_imports_used_components(complex_plan):
    code = generate_code(complex_plan)
    assert "import { Card, Chart, ColumnLayout, Navbar, RowLayout, Sidebar, Table } from '@/components/system';" in code
    assert "export default function GeneratedUI()" in code
    assert '<Navbar title="Dashboard" />' in code
    assert "<Sidebar width={250} />" in code
    assert "className" not in code and "style=" not in code


def test_code_accepts_wire_form(complex_plan):
    assert generate_code(complex_plan.to_dict()) == generate_code(complex_plan)


def test_code_serializes_booleans_and_escapes_strings():
    modal = plan_from_intent("Show a modal").plan
    assert "isOpen={false}" in generate_code(modal)

    plan = Plan.from_dict({
        "modificationType": "create",
        "root": {
            "id": "root", "component": "ColumnLayout", "props": {},
            "children": [{"id": "root_Card_0", "component": "Card", "props": {"title": 'Say "hi"'}}],
        },
    })
    assert '<Card title="Say \\"hi\\"" />' in generate_code(plan)


def test_code_rejects_forbidden_props():
    bad = {
        "modificationType": "create",
        "root": {
            "id": "root", "component": "ColumnLayout", "props": {},
            "children": [{"id": "root_Card_0", "component": "Card", "props": {"style": "color: red"}}],
        },
    }
    with pytest.raises(ForbiddenProp):
        generate_code(bad)


def test_code_respects_restricted_whitelist(complex_plan):
    with pytest.raises(UnknownComponent):
        generate_code(complex_plan, ComponentWhitelist.restricted_to(["RowLayout", "ColumnLayout", "Card"]))


def test_used_components(complex_plan):
    assert "Sidebar" in used_components(complex_plan.root)


def test_explanation_sections(complex_plan, edited_plan):
    text = explain_plan(edited_plan, complex_plan)
    assert text.startswith("**Layout Structure:**")
    assert "**Components Used:**" in text
    assert "- Removed: root, root_Sidebar_0" in text
    assert "root_ColumnLayout_0_Modal_0" in text
    assert "Modal dialogs provide focused interactions" in text


def test_explanation_without_changes_for_create(complex_plan):
    text = explain_plan(complex_plan)
    assert "**Changes:**" not in text
    assert "horizontal row structure" in text


def test_explanation_is_deterministic(complex_plan, edited_plan):
    assert explain_plan(edited_plan, complex_plan) == explain_plan(edited_plan, complex_plan)


def test_render_svg_boxes(complex_plan):
    svg = render_svg(complex_plan)
    assert svg.startswith("<svg")
    assert svg.endswith("</svg>")
    for node_id in ("root", "root_Sidebar_0", "root_ColumnLayout_0_RowLayout_0_Card_1_Table_0"):
        assert f'data-node-id="{node_id}"' in svg
    assert "Navbar: Dashboard" in svg


def test_render_rejects_unknown_kind():
    plan = Plan(
        modification_type="create",
        root={
            "id": "root", "component": "ColumnLayout", "props": {},
            "children": [ComponentNode(id="root_Widget_0", kind="Widget", props={})],
        },
    )
    with pytest.raises(UnknownComponent):
        render_svg(plan)


def test_render_summary_counts(complex_plan):
    assert render_summary(complex_plan)["counts"]["Card"] == 2


def test_version_store_lifecycle(complex_plan, edited_plan):
    store = VersionStore()
    first = store.add(complex_plan, "code-1", "first")
    second = store.add(edited_plan, "code-2", "second")
    assert [v.id for v in store.list()] == [first, second] == ["v1", "v2"]
    assert store.current().id == second

    assert store.set_current(first)
    assert store.current().id == first
    assert not store.set_current("missing")

    assert store.delete(first)
    assert store.current().id == second
    assert store.get(first) is None
    assert store.get(second).to_dict()["plan"] == edited_plan.to_dict()

    store.clear()
    assert store.list() == []
    assert store.current() is None


def test_code_rejects_attribute_injection_through_prop_key():
    bad = {
        "modificationType": "create",
        "root": {
            "id": "root", "component": "ColumnLayout", "props": {},
            "children": [{
                "id": "root_Button_0", "component": "Button",
                "props": {'onClick={() => fetch("//evil")} label': "Go"},
            }],
        },
    }
    with pytest.raises(ForbiddenProp):
        generate_code(bad)


def test_code_has_no_unused_state(complex_plan):
    code = generate_code(complex_plan)
    assert "useState" not in code
    assert "import React from 'react';" in code
