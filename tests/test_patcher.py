"""Edit directives and copy-on-write patching."""

import pytest

from uiplan.content import TemplateContent
from uiplan.patcher import apply_edit, parse_edit_directives, remove_kind
from uiplan.planner import plan_from_intent


def ids(node):
    out = [node.id]
    for child in node.children or []:
        out.extend(ids(child))
    return out


@pytest.fixture
def navbar_plan():
    return plan_from_intent("An app with a navbar").plan


def test_parse_removal_and_addition():
    d = parse_edit_directives("Remove the sidebar and add a settings modal with two inputs.")
    assert d.removals == ("Sidebar",)
    assert d.add_modal
    assert d.modal_title == "Settings"
    assert d.add_inputs
    assert not d.add_chart and not d.add_table


def test_removal_phrase_stops_at_next_verb():
    d = parse_edit_directives("Delete the navbar, then add a chart")
    assert d.removals == ("Navbar",)
    assert d.add_chart


def test_removal_of_several_concepts():
    d = parse_edit_directives("remove the chart and the table")
    assert set(d.removals) == {"Chart", "Table"}


def test_removal_wins_over_addition():
    d = parse_edit_directives("Remove the chart. Add a chart")
    assert d.removals == ("Chart",)
    assert not d.add_chart


def test_addition_needs_add_verb():
    d = parse_edit_directives("Update the modal")
    assert d.is_empty


def test_modal_title_defaults():
    d = parse_edit_directives("add a modal")
    assert d.add_modal
    assert d.modal_title is None


def test_edit_appends_to_root_with_fresh_ids(navbar_plan):
    edited = apply_edit("add a chart and a table", navbar_plan)
    assert [c.kind for c in edited.root.children] == ["Navbar", "Card", "Card", "Card"]
    assert [c.id for c in edited.root.children[2:]] == ["root_Card_1", "root_Card_2"]
    assert edited.root.children[2].children[0].id == "root_Card_1_Chart_0"
    assert edited.root.children[3].children[0].kind == "Table"


def test_fresh_id_skips_ids_in_use(navbar_plan):
    once = apply_edit("add a chart", navbar_plan)
    twice = apply_edit("add a chart", once)
    all_ids = ids(twice.root)
    assert len(all_ids) == len(set(all_ids))


def test_no_match_returns_prior_tree(navbar_plan):
    edited = apply_edit("change the colour", navbar_plan)
    assert edited.modification_type == "edit"
    assert edited.root is navbar_plan.root


def test_remove_kind_shares_untouched_subtrees(complex_plan):
    pruned = remove_kind(complex_plan.root, "Table")
    before_column = complex_plan.root.children[1]
    after_column = pruned.children[1]
    assert pruned is not complex_plan.root
    assert pruned.children[0] is complex_plan.root.children[0]
    assert after_column.children[0] is before_column.children[0]
    assert "Table" not in [n.kind for n in after_column.children[1].children[1].children]


def test_remove_missing_kind_is_identity(complex_plan):
    assert remove_kind(complex_plan.root, "Modal") is complex_plan.root


def test_navbar_removal_keeps_wrapper(complex_plan):
    # The root's two children survive, so nothing collapses.
    edited = apply_edit("remove the navbar", complex_plan)
    assert edited.root.id == "root"
    assert [c.kind for c in edited.root.children[1].children] == ["RowLayout"]


def test_configured_modal_input_count(complex_plan):
    content = TemplateContent(settings_input_count=3)
    edited = apply_edit("Remove the sidebar and add a settings modal with inputs", complex_plan, content)
    modal = edited.root.children[-1]
    assert [c.props["label"] for c in modal.children] == ["Setting 1", "Setting 2", "Setting 3"]


def test_remove_top_bar():
    previous = plan_from_intent("An app with a top bar").plan
    assert [c.kind for c in previous.root.children] == ["Navbar", "Card"]

    assert parse_edit_directives("Remove the top bar").removals == ("Navbar",)
    result = plan_from_intent("Remove the top bar", previous)
    assert result.error is None
    assert [c.kind for c in result.plan.root.children] == ["Card"]
