# uiplan/diff.py
# Classified change-set between two plans, keyed by node id.
import json
from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from uiplan.schema import Plan, children_of


@dataclass(frozen=True)
class NodeDiff:
    type: str
    node_id: str
    kind: str
    old_props: Optional[Dict[str, Any]] = None
    new_props: Optional[Dict[str, Any]] = None

    def to_dict(self) -> Dict[str, Any]:
        data = {"type": self.type, "nodeId": self.node_id, "component": self.kind}
        if self.old_props is not None:
            data["oldProps"] = self.old_props
        if self.new_props is not None:
            data["newProps"] = self.new_props
        return data


@dataclass(frozen=True)
class PlanDiff:
    modification_type: str
    changed_node_ids: Tuple[str, ...] = ()
    diffs: Dict[str, NodeDiff] = field(default_factory=dict)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "modificationType": self.modification_type,
            "changedNodeIds": list(self.changed_node_ids),
            "diffs": {node_id: d.to_dict() for node_id, d in self.diffs.items()},
        }

    def of_type(self, diff_type: str) -> List[NodeDiff]:
        return [d for d in self.diffs.values() if d.type == diff_type]


def flatten_node(node) -> List[Any]:
    """Depth-first, parent before children."""
    result = [node]
    for child in children_of(node):
        result.extend(flatten_node(child))
    return result


def all_node_ids(node) -> List[str]:
    return [n.id for n in flatten_node(node)]


def _props_key(props: Dict[str, Any]) -> str:
    return json.dumps(props, sort_keys=True, separators=(",", ":"))


def diff_plans(previous: Optional[Plan], current: Plan) -> PlanDiff:
    if current.modification_type == "regenerate":
        return PlanDiff("regenerate", tuple(all_node_ids(current.root)), {})

    if previous is None:
        diffs = {
            n.id: NodeDiff("added", n.id, n.kind, new_props=dict(n.props))
            for n in flatten_node(current.root)
        }
        return PlanDiff("create", tuple(diffs), diffs)

    previous_nodes = {n.id: n for n in flatten_node(previous.root)}
    current_nodes = {n.id: n for n in flatten_node(current.root)}
    diffs: Dict[str, NodeDiff] = {}
    changed: List[str] = []

    for node_id, prev in previous_nodes.items():
        curr = current_nodes.get(node_id)
        if curr is None:
            diffs[node_id] = NodeDiff("removed", node_id, prev.kind, old_props=dict(prev.props))
            changed.append(node_id)
        elif _props_key(prev.props) != _props_key(curr.props):
            diffs[node_id] = NodeDiff(
                "updated", node_id, curr.kind, old_props=dict(prev.props), new_props=dict(curr.props)
            )
            changed.append(node_id)
        else:
            diffs[node_id] = NodeDiff("unchanged", node_id, curr.kind, new_props=dict(curr.props))

    for node_id, curr in current_nodes.items():
        if node_id not in previous_nodes:
            diffs[node_id] = NodeDiff("added", node_id, curr.kind, new_props=dict(curr.props))
            changed.append(node_id)

    return PlanDiff("edit", tuple(changed), diffs)


def changed_nodes(diff: PlanDiff) -> List[NodeDiff]:
    return [d for d in diff.diffs.values() if d.type != "unchanged"]


def is_node_changed(node_id: str, diff: PlanDiff) -> bool:
    return node_id in diff.changed_node_ids


def _plural(count: int, noun: str = "component") -> str:
    return f"{count} {noun}{'s' if count != 1 else ''}"


def summarize_diff(diff: PlanDiff) -> str:
    if diff.modification_type == "create":
        return f"Created UI with {_plural(len(diff.diffs))}"
    if diff.modification_type == "regenerate":
        return f"Regenerated UI ({len(diff.changed_node_ids)} total components)"

    parts = []
    for diff_type, verb in (("added", "Added"), ("removed", "Removed"), ("updated", "Updated")):
        count = len(diff.of_type(diff_type))
        if count:
            parts.append(f"{verb} {_plural(count)}")
    return ", ".join(parts) if parts else "No changes"
