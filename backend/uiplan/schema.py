# uiplan/schema.py
# Plan tree models, component catalogue and the deterministic id rule.
import re
from dataclasses import dataclass
from typing import Annotated, Any, Dict, FrozenSet, Iterable, List, Literal, Optional, Union

from pydantic import BaseModel, ConfigDict, Discriminator, Field, JsonValue, Tag, model_serializer

# === Component catalogue ===
LAYOUT_KINDS = ("ColumnLayout", "RowLayout", "GridLayout")
UI_KINDS = ("Button", "Card", "Input", "Table", "Modal", "Sidebar", "Navbar", "Chart")
LAYOUT_PROP_KEYS = frozenset({"gap", "padding", "columns"})

ROOT_ID = "root"
ModificationType = Literal["create", "edit", "regenerate"]


def make_node_id(parent_id: str, kind: str, index: int) -> str:
    """parent_kind_index, e.g. root_Card_0. Never random, never time-based."""
    return re.sub(r"[^a-zA-Z0-9_]", "_", f"{parent_id}_{kind}_{index}")


@dataclass(frozen=True)
class ComponentWhitelist:
    layouts: FrozenSet[str]
    components: FrozenSet[str]

    def allows(self, kind: str) -> bool:
        return kind in self.layouts or kind in self.components

    def is_layout(self, kind: str) -> bool:
        return kind in self.layouts

    @classmethod
    def restricted_to(cls, names: Iterable[str]) -> "ComponentWhitelist":
        """Narrow the catalogue. Kinds outside the catalogue cannot be introduced."""
        wanted = {n.strip() for n in names if n and n.strip()}
        unknown = wanted - set(LAYOUT_KINDS) - set(UI_KINDS)
        if unknown:
            raise ValueError(f"Unknown component kinds in whitelist: {', '.join(sorted(unknown))}")
        return cls(
            layouts=frozenset(k for k in LAYOUT_KINDS if k in wanted),
            components=frozenset(k for k in UI_KINDS if k in wanted),
        )


DEFAULT_WHITELIST = ComponentWhitelist(layouts=frozenset(LAYOUT_KINDS), components=frozenset(UI_KINDS))


# === Node models ===
_NODE_CONFIG = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")


class LayoutNode(BaseModel):
    model_config = _NODE_CONFIG

    id: str
    kind: str = Field(alias="component", min_length=1)
    props: Dict[str, JsonValue]
    children: List["Node"]


class ComponentNode(BaseModel):
    model_config = _NODE_CONFIG

    id: str
    kind: str = Field(alias="component", min_length=1)
    props: Dict[str, JsonValue]
    # Layouts are accepted here at the schema level so the structural check
    # can report them as LayoutNestedInComponent.
    children: Optional[List["Node"]] = None

    @model_serializer(mode="wrap")
    def _omit_missing_children(self, handler):
        data = handler(self)
        if self.children is None:
            data.pop("children", None)
        return data


def _node_tag(value: Any) -> str:
    if isinstance(value, dict):
        kind = value.get("component", value.get("kind"))
    else:
        kind = getattr(value, "kind", None)
    return "layout" if kind in LAYOUT_KINDS else "component"


Node = Annotated[
    Union[Annotated[LayoutNode, Tag("layout")], Annotated[ComponentNode, Tag("component")]],
    Discriminator(_node_tag),
]

LayoutNode.model_rebuild()
ComponentNode.model_rebuild()


class Plan(BaseModel):
    model_config = ConfigDict(frozen=True, populate_by_name=True, extra="forbid")

    modification_type: ModificationType = Field(alias="modificationType")
    root: LayoutNode

    def to_dict(self) -> Dict[str, Any]:
        return self.model_dump(by_alias=True, mode="json")

    @classmethod
    def from_dict(cls, data: Any) -> "Plan":
        return cls.model_validate(data)

    def retagged(self, modification_type: str) -> "Plan":
        return Plan(modification_type=modification_type, root=self.root)


def children_of(node) -> List[Any]:
    if isinstance(node, LayoutNode):
        return list(node.children)
    if isinstance(node, ComponentNode):
        return list(node.children or [])
    raise TypeError(f"Not a plan node: {type(node).__name__}")
