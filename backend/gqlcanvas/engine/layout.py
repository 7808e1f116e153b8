"""Tree layout for the query diagram.

Positions are assigned level by level:
- Siblings form one row centered under their parent's x
- Each row sits a fixed node height below its parent
- A subtree reserves the width computed by the selection tree builder,
  so siblings never overlap within a row
"""
from __future__ import annotations

from dataclasses import dataclass, field

from .graph import GraphEdge, GraphNode, NodeData, NodeKind, Position


@dataclass(frozen=True)
class LayoutConfig:
    # Vertical distance between a parent row and its children
    node_height: float = 120
    # Horizontal space between neighbouring subtrees
    sibling_gap: float = 50
    # Narrowest footprint any node may claim
    min_node_width: float = 200
    # Width per leaf name inside a field group
    field_slot_width: float = 60
    # Operation root
    root_x: float = 250
    root_y: float = 50
    # First row under the root
    tree_start_y: float = 100
    # Variables are stacked in a column on the left
    variable_x: float = 50
    variable_start_y: float = 100
    variable_row_height: float = 60


DEFAULT_LAYOUT = LayoutConfig()


@dataclass
class TreeNode:
    """Intermediate node: kind, payload and the width its subtree needs."""
    kind: NodeKind
    data: NodeData
    width: float
    children: list[TreeNode] = field(default_factory=list)
    label: str | None = None  # overrides the derived label

    def display_label(self) -> str:
        if self.label is not None:
            return self.label
        if self.kind == NodeKind.FIELD_GROUP:
            return ", ".join(self.data.fields or [])
        return self.data.name


class IdCounter:
    """Node id source for one build; never shared between builds."""

    def __init__(self, prefix: str = "node"):
        self.prefix = prefix
        self.value = 0

    def next_id(self) -> str:
        node_id = f"{self.prefix}-{self.value}"
        self.value += 1
        return node_id


def row_width(children: list[TreeNode], gap: float) -> float:
    """Width of one row of siblings, gaps between them but not after the last."""
    if not children:
        return 0
    return sum(child.width + gap for child in children) - gap


def position_tree(
    children: list[TreeNode],
    center_x: float,
    start_y: float,
    parent_id: str | None,
    counter: IdCounter,
    nodes: list[GraphNode],
    edges: list[GraphEdge],
    config: LayoutConfig = DEFAULT_LAYOUT,
    precompute: bool = True,
) -> float:
    """Place ``children`` as one row under ``center_x`` and recurse.

    Appends to ``nodes``/``edges`` in pre-order and returns the largest y
    used by the placed subtrees. With ``precompute=False`` every node is
    left at the origin for the renderer to arrange.
    """
    if not children:
        return start_y

    current_x = center_x - row_width(children, config.sibling_gap) / 2
    max_y = start_y

    for child in children:
        node_id = counter.next_id()
        node_x = current_x + child.width / 2
        node_y = start_y

        nodes.append(GraphNode(
            id=node_id,
            kind=child.kind,
            label=child.display_label(),
            position=Position(node_x, node_y) if precompute else Position(),
            data=child.data,
        ))
        if parent_id is not None:
            kind = "fragment" if child.kind == NodeKind.FRAGMENT else None
            edges.append(GraphEdge.connect(parent_id, node_id, kind=kind))

        if child.children:
            child_max_y = position_tree(
                child.children, node_x, node_y + config.node_height,
                node_id, counter, nodes, edges, config, precompute,
            )
            max_y = max(max_y, child_max_y)
        else:
            max_y = max(max_y, node_y)

        current_x += child.width + config.sibling_gap

    return max_y
