# uiplan/patcher.py
# Edit mode: apply removals and additions to a prior plan without
# rebuilding it. Untouched subtrees are shared with the prior plan.
import logging
import re
from dataclasses import dataclass
from typing import List, Optional, Set, Tuple

from uiplan.blueprint import Blueprint, build_node, component
from uiplan.content import DEFAULT_CONTENT, TemplateContent
from uiplan.diff import all_node_ids, diff_plans
from uiplan.intent import mentioned
from uiplan.schema import LayoutNode, Plan, make_node_id

logger = logging.getLogger(__name__)

# concept -> (node kind, keywords)
CONCEPTS = {
    "sidebar": ("Sidebar", ("sidebar", "side bar")),
    "navbar": ("Navbar", ("navbar", "nav bar", "top bar", "navigation")),
    "chart": ("Chart", ("chart", "graph")),
    "table": ("Table", ("table",)),
    "modal": ("Modal", ("modal", "dialog")),
}

REMOVE_PHRASE_RE = re.compile(
    r"\b(?:remove|delete)\b(.*?)(?=[.;!?]|\b(?:add|then|but|also|with)\b|$)", re.I | re.S
)
ADD_PHRASE_RE = re.compile(
    r"\b(?:add|include|insert)\b(.*?)(?=[.;!?]|\b(?:remove|delete|then|but)\b|$)", re.I | re.S
)
MODAL_TITLE_RE = re.compile(r"([A-Za-z][\w-]*)\s+(?:modal|dialog)\b", re.I)
INPUTS_RE = re.compile(r"\b(?:inputs?|fields?)\b", re.I)
_NOT_A_TITLE = {"a", "an", "the", "new", "one", "add", "include", "insert"}


@dataclass(frozen=True)
class EditDirectives:
    removals: Tuple[str, ...] = ()
    add_modal: bool = False
    modal_title: Optional[str] = None
    add_inputs: bool = False
    add_chart: bool = False
    add_table: bool = False

    @property
    def is_empty(self) -> bool:
        return not (self.removals or self.add_modal or self.add_chart or self.add_table)


def _concepts_in(phrase: str) -> List[str]:
    return [name for name, (_, keywords) in CONCEPTS.items() if any(mentioned(k, phrase) for k in keywords)]


def parse_edit_directives(text: str) -> EditDirectives:
    removed: List[str] = []
    for phrase in REMOVE_PHRASE_RE.findall(text):
        for concept in _concepts_in(phrase):
            if concept not in removed:
                removed.append(concept)

    add_phrases = ADD_PHRASE_RE.findall(text)
    added: Set[str] = set()
    for phrase in add_phrases:
        added.update(_concepts_in(phrase))
    # Removal wins when a concept is both removed and added.
    added -= set(removed)

    modal_title = None
    add_inputs = False
    if "modal" in added:
        for phrase in add_phrases:
            if "modal" not in _concepts_in(phrase):
                continue
            match = MODAL_TITLE_RE.search(phrase)
            if match and match.group(1).lower() not in _NOT_A_TITLE and modal_title is None:
                modal_title = match.group(1).title()
            add_inputs = add_inputs or INPUTS_RE.search(phrase) is not None

    return EditDirectives(
        removals=tuple(CONCEPTS[c][0] for c in removed),
        add_modal="modal" in added,
        modal_title=modal_title,
        add_inputs=add_inputs,
        add_chart="chart" in added,
        add_table="table" in added,
    )


# === Copy-on-write tree operations ===
def remove_kind(node, kind: str):
    """Drop every descendant of the given kind. Returns the same object when nothing changed."""
    children = node.children
    if not children:
        return node

    kept = []
    changed = False
    for child in children:
        if child.kind == kind:
            changed = True
            continue
        new_child = remove_kind(child, kind)
        # A nested layout emptied by the removal goes with it.
        if isinstance(new_child, LayoutNode) and not new_child.children:
            changed = True
            continue
        changed = changed or new_child is not child
        kept.append(new_child)

    if not changed:
        return node
    return node.model_copy(update={"children": kept})


def fresh_id(parent, kind: str, taken: Set[str]) -> str:
    ordinal = sum(1 for c in parent.children or [] if c.kind == kind)
    node_id = make_node_id(parent.id, kind, ordinal)
    while node_id in taken:
        ordinal += 1
        node_id = make_node_id(parent.id, kind, ordinal)
    return node_id


def append_child(parent, blueprint: Blueprint, taken: Set[str]):
    node = build_node(blueprint, fresh_id(parent, blueprint.kind, taken))
    taken.update(all_node_ids(node))
    return parent.model_copy(update={"children": list(parent.children or []) + [node]})


def _elide_wrapper(previous: Plan, root: LayoutNode) -> LayoutNode:
    """Two-child root that lost one child to a removal and keeps a single layout: promote it."""
    if len(previous.root.children) != 2 or len(root.children) != 1:
        return root
    only = root.children[0]
    if not isinstance(only, LayoutNode):
        return root

    diff = diff_plans(previous, Plan(modification_type="edit", root=root))
    removed = [c for c in previous.root.children if diff.diffs[c.id].type == "removed"]
    if len(removed) != 1:
        return root
    logger.debug("Collapsing %s into its remaining child %s", root.id, only.id)
    return only


# === Additions ===
def settings_modal(title: str, with_inputs: bool, content: TemplateContent) -> Blueprint:
    inputs = []
    if with_inputs:
        inputs = [
            component("Input", label=f"Setting {n}", type="text", placeholder="Enter value")
            for n in range(1, content.settings_input_count + 1)
        ]
    return component("Modal", *inputs, isOpen=False, title=title)


def chart_card(content: TemplateContent) -> Blueprint:
    return component("Card", component("Chart", title="Performance", data=content.series("added")),
                     title="Chart", padding=16)


def table_card(content: TemplateContent) -> Blueprint:
    table = content.table("added")
    return component("Card", component("Table", columns=table["columns"], data=table["data"]),
                     title="Table", padding=16)


def apply_edit(text: str, previous: Plan, content: TemplateContent = DEFAULT_CONTENT) -> Plan:
    """Patch the prior plan in place of synthesizing a new one. Output is always tagged edit."""
    directives = parse_edit_directives(text)
    logger.debug("Edit directives: %s", directives)

    root = previous.root
    for kind in directives.removals:
        root = remove_kind(root, kind)
    if directives.removals:
        root = _elide_wrapper(previous, root)

    additions: List[Blueprint] = []
    if directives.add_modal:
        additions.append(settings_modal(directives.modal_title or content.settings_title,
                                        directives.add_inputs, content))
    if directives.add_chart:
        additions.append(chart_card(content))
    if directives.add_table:
        additions.append(table_card(content))

    if additions:
        # The root is always a layout, so additions land there.
        taken = set(all_node_ids(root))
        for blueprint in additions:
            root = append_child(root, blueprint, taken)

    if root is previous.root:
        logger.debug("Edit matched nothing; re-tagging prior plan")
        return previous.retagged("edit")
    return Plan(modification_type="edit", root=root)
