"""Graph assembly: request text in, positioned node/edge graph out."""
import json
import logging
from typing import Any

from graphql.language import OperationDefinitionNode

from .fragments import collect_fragments
from .graph import GraphEdge, GraphNode, LayoutMode, NodeData, NodeKind, ParsedResult, Position
from .layout import DEFAULT_LAYOUT, IdCounter, LayoutConfig, position_tree
from .parser import parse_request
from .tree import build_selection_tree
from .variables import materialize_variables

logger = logging.getLogger(__name__)

ANONYMOUS_OPERATION = "Anonymous"


def build_graph(
    text: str,
    layout_mode: LayoutMode = LayoutMode.PRECOMPUTED,
    config: LayoutConfig | None = None,
) -> ParsedResult:
    """Parse a GraphQL request body and lay it out as a diagram graph.

    Raises an InputError subclass when the body, or its query, cannot be
    parsed; nothing is produced in that case.
    """
    config = config or DEFAULT_LAYOUT
    precompute = layout_mode == LayoutMode.PRECOMPUTED
    request = parse_request(text)

    # Spreads may appear before their definitions
    fragments = collect_fragments(request.document)

    counter = IdCounter()
    nodes: list[GraphNode] = []
    edges: list[GraphEdge] = []

    for definition in request.document.definitions:
        if not isinstance(definition, OperationDefinitionNode):
            continue
        root = _operation_root(definition, counter.next_id(), config, precompute)
        nodes.append(root)

        tree = build_selection_tree(definition.selection_set, fragments, config)
        max_y = position_tree(
            tree.nodes, root.position.x, config.tree_start_y, root.id,
            counter, nodes, edges, config, precompute,
        )
        logger.debug("Operation %s laid out down to y=%s", root.label, max_y)

    nodes.extend(materialize_variables(request.variables, config, precompute))

    return ParsedResult(
        operation_name=request.operation_name,
        variables=request.variables,
        query=request.query,
        ast=request.document,
        nodes=nodes,
        edges=edges,
        layout_mode=layout_mode,
    )


def _operation_root(
    definition: OperationDefinitionNode,
    node_id: str,
    config: LayoutConfig,
    precompute: bool,
) -> GraphNode:
    operation = definition.operation.value
    name = definition.name.value if definition.name else ANONYMOUS_OPERATION
    return GraphNode(
        id=node_id,
        kind=NodeKind.OPERATION,
        label=f"{operation}: {name}",
        position=Position(config.root_x, config.root_y) if precompute else Position(),
        data=NodeData(name=name, is_root=True, field_type=operation),
    )


def output_projection(result: ParsedResult) -> dict[str, Any]:
    """The request body to copy back out: query text as captured at parse time."""
    return {
        "operationName": result.operation_name,
        "variables": result.variables,
        "query": result.query,
    }


def render_output(result: ParsedResult) -> str:
    return json.dumps(output_projection(result), indent=2, ensure_ascii=False)
