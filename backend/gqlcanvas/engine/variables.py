"""Variable nodes: one per request variable, outside the selection tree."""
from typing import Any

from .graph import GraphNode, NodeData, NodeKind, Position
from .layout import DEFAULT_LAYOUT, LayoutConfig


def materialize_variables(
    variables: dict[str, Any],
    config: LayoutConfig = DEFAULT_LAYOUT,
    precompute: bool = True,
) -> list[GraphNode]:
    nodes: list[GraphNode] = []
    for index, (name, value) in enumerate(variables.items()):
        if precompute:
            position = Position(
                config.variable_x,
                config.variable_start_y + index * config.variable_row_height,
            )
        else:
            position = Position()
        nodes.append(GraphNode(
            id=f"var-{name}",
            kind=NodeKind.VARIABLE,
            label=f"${name}",
            position=position,
            data=NodeData(name=name, value=value, field_type="variable"),
        ))
    return nodes
