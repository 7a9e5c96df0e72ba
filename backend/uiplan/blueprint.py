# uiplan/blueprint.py
# Id-less node descriptions that templates and edits are written in.
from typing import Any, Dict, List, NamedTuple, Optional, Tuple

from uiplan.schema import LAYOUT_KINDS, ROOT_ID, ComponentNode, LayoutNode, make_node_id


class Blueprint(NamedTuple):
    kind: str
    props: Dict[str, Any]
    children: Optional[Tuple["Blueprint", ...]] = None


def layout(kind: str, *children: Blueprint, **props) -> Blueprint:
    return Blueprint(kind, props, tuple(children))


def component(kind: str, *children: Blueprint, **props) -> Blueprint:
    return Blueprint(kind, props, tuple(children) if children else None)


def container(kind: str, children: List[Blueprint], **props) -> Blueprint:
    """Component that always carries a children list, even an empty one."""
    return Blueprint(kind, props, tuple(children))


def child_ids(parent_id: str, kinds: List[str]) -> List[str]:
    """Ids for a run of siblings: the index counts earlier siblings of the same kind."""
    seen: Dict[str, int] = {}
    ids = []
    for kind in kinds:
        index = seen.get(kind, 0)
        seen[kind] = index + 1
        ids.append(make_node_id(parent_id, kind, index))
    return ids


def build_node(blueprint: Blueprint, node_id: str):
    """Materialize a blueprint, assigning ids root-down, siblings in order."""
    children = None
    if blueprint.children is not None:
        ids = child_ids(node_id, [c.kind for c in blueprint.children])
        children = [build_node(c, cid) for c, cid in zip(blueprint.children, ids)]

    if blueprint.kind in LAYOUT_KINDS:
        return LayoutNode(id=node_id, kind=blueprint.kind, props=dict(blueprint.props), children=children or [])
    return ComponentNode(id=node_id, kind=blueprint.kind, props=dict(blueprint.props), children=children)


def build_tree(blueprint: Blueprint) -> LayoutNode:
    return build_node(blueprint, ROOT_ID)
