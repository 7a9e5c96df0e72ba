# app/services/explainer.py
# Deterministic plain-text explanation of a plan (and of an edit, given the prior plan).
from typing import List, Optional

from uiplan.diff import diff_plans, flatten_node
from uiplan.schema import Plan

LAYOUT_DESCRIPTIONS = {
    "ColumnLayout": "The layout uses a vertical column structure, stacking components from top to bottom.",
    "RowLayout": "The layout uses a horizontal row structure, placing components side-by-side.",
    "GridLayout": "The layout uses a grid structure, arranging components in evenly sized cells.",
}

MANY_COMPONENTS = 5


def _purpose(node) -> str:
    props = node.props
    kind = node.kind
    if kind == "Button":
        return "Interactive button" + (f' labeled "{props["label"]}"' if props.get("label") else "")
    if kind == "Card":
        return "Container card" + (f' with title "{props["title"]}"' if props.get("title") else "")
    if kind == "Input":
        return "Text input" + (f' for "{props["label"]}"' if props.get("label") else "")
    if kind == "Table":
        return "Data table displaying structured information"
    if kind == "Modal":
        return "Modal dialog" + (f' titled "{props["title"]}"' if props.get("title") else "")
    if kind == "Sidebar":
        return "Navigation sidebar"
    if kind == "Navbar":
        return "Top navigation bar" + (f' titled "{props["title"]}"' if props.get("title") else "")
    if kind == "Chart":
        return "Data visualization" + (f' showing "{props["title"]}"' if props.get("title") else "")
    return "Layout container"


def describe_layout(plan: Plan) -> str:
    count = len(flatten_node(plan.root))
    text = LAYOUT_DESCRIPTIONS.get(plan.root.kind, "")
    return f"**Layout Structure:**\n{text} The layout contains {count} components arranged hierarchically."


def describe_components(plan: Plan) -> str:
    lines = [f"- **{n.id}** ({n.kind}): {_purpose(n)}" for n in flatten_node(plan.root)]
    return "**Components Used:**\n" + "\n".join(lines)


def describe_changes(previous: Plan, current: Plan) -> str:
    diff = diff_plans(previous, current)
    sections = []
    for diff_type, label in (("added", "Added"), ("removed", "Removed"), ("updated", "Modified")):
        ids = [d.node_id for d in diff.of_type(diff_type)]
        if ids:
            sections.append(f"- {label}: {', '.join(ids)}")
    if not sections:
        return ""
    return "**Changes:**\n" + "\n".join(sections)


def describe_tradeoffs(plan: Plan) -> str:
    nodes = flatten_node(plan.root)
    kinds = {n.kind for n in nodes}
    tradeoffs: List[str] = []
    if len(nodes) > MANY_COMPONENTS:
        tradeoffs.append("Complex layout with many components, which may impact initial load time")
    if "Modal" in kinds:
        tradeoffs.append("Modal dialogs provide focused interactions but may hide background content")
    if "Table" in kinds:
        tradeoffs.append("Tables display data efficiently but may need adjustments on smaller screens")
    if not tradeoffs:
        return "**Tradeoffs:**\nThis layout provides a good balance between functionality and simplicity."
    return "**Tradeoffs:**\n- " + "\n- ".join(tradeoffs)


def explain_plan(plan: Plan, previous: Optional[Plan] = None) -> str:
    sections = [describe_layout(plan), describe_components(plan)]
    if previous is not None and plan.modification_type == "edit":
        sections.append(describe_changes(previous, plan))
    sections.append(describe_tradeoffs(plan))
    return "\n\n".join(s for s in sections if s)
