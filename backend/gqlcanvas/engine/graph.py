"""Graph data structures handed to the diagram renderer."""
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any

from graphql.language import DocumentNode


class NodeKind(str, Enum):
    OPERATION = "operation"
    FIELD = "field"
    FRAGMENT = "fragment"
    VARIABLE = "variable"
    FIELD_GROUP = "fieldGroup"


class LayoutMode(str, Enum):
    PRECOMPUTED = "precomputed"  # tree layout assigns every position
    DEFERRED = "deferred"        # renderer runs its own layout


# Keys the renderer may send back when a user edits a node in place
PATCHABLE_KEYS = frozenset({"label", "name", "value"})

_UNSET = object()


@dataclass
class Position:
    x: float = 0.0
    y: float = 0.0


@dataclass
class NodeData:
    name: str
    value: Any = _UNSET
    arguments: dict[str, Any] | None = None
    field_type: str | None = None
    is_root: bool | None = None
    fields: list[str] | None = None

    def has_value(self) -> bool:
        return self.value is not _UNSET

    def to_dict(self) -> dict[str, Any]:
        """Wire form with camelCase keys; unset keys are left out."""
        out: dict[str, Any] = {"name": self.name}
        if self.has_value():
            out["value"] = self.value
        if self.arguments is not None:
            out["arguments"] = self.arguments
        if self.field_type is not None:
            out["fieldType"] = self.field_type
        if self.is_root is not None:
            out["isRoot"] = self.is_root
        if self.fields is not None:
            out["fields"] = list(self.fields)
        return out


@dataclass
class GraphNode:
    id: str
    kind: NodeKind
    label: str
    position: Position
    data: NodeData


@dataclass
class GraphEdge:
    id: str
    source: str
    target: str
    kind: str | None = None  # "fragment" for spread edges, None for plain fields
    label: str | None = None

    @classmethod
    def connect(cls, source: str, target: str, kind: str | None = None) -> "GraphEdge":
        return cls(id=f"{source}-{target}", source=source, target=target, kind=kind)


@dataclass
class ParsedResult:
    operation_name: str | None
    variables: dict[str, Any]
    query: str
    ast: DocumentNode
    nodes: list[GraphNode] = field(default_factory=list)
    edges: list[GraphEdge] = field(default_factory=list)
    layout_mode: LayoutMode = LayoutMode.PRECOMPUTED

    def get_node(self, node_id: str) -> GraphNode:
        for node in self.nodes:
            if node.id == node_id:
                return node
        raise KeyError(f"Unknown node: {node_id}")


def apply_node_patch(result: ParsedResult, node_id: str, patch: dict[str, Any]) -> ParsedResult:
    """Merge a renderer edit into one node, returning a new result.

    Last write wins. Positions, edges and the captured query text are left
    alone; the layout is not recomputed.
    """
    unknown = set(patch) - PATCHABLE_KEYS
    if unknown:
        raise ValueError(f"Cannot patch node fields: {sorted(unknown)}")
    # A node always keeps a label and a name; only the value may be null
    cleared = sorted(k for k in ("label", "name") if k in patch and patch[k] is None)
    if cleared:
        raise ValueError(f"Node fields cannot be null: {cleared}")

    target = result.get_node(node_id)
    data_changes = {k: v for k, v in patch.items() if k in ("name", "value")}
    patched = replace(
        target,
        label=patch.get("label", target.label),
        data=replace(target.data, **data_changes),
    )
    nodes = [patched if n.id == node_id else n for n in result.nodes]
    return replace(result, nodes=nodes)
