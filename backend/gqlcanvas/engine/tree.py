"""Selection tree builder: turns selection sets into width-annotated TreeNodes."""
import logging
from dataclasses import dataclass, field

from graphql.language import (
    FieldNode,
    FragmentDefinitionNode,
    FragmentSpreadNode,
    InlineFragmentNode,
    SelectionSetNode,
)

from .graph import NodeData, NodeKind
from .layout import DEFAULT_LAYOUT, LayoutConfig, TreeNode
from .values import arguments_to_python

logger = logging.getLogger(__name__)

UNKNOWN_FRAGMENT_LABEL = "Unknown Fragment"
RECURSIVE_FRAGMENT_LABEL = "Recursive Fragment"
FIELD_GROUP_NAME = "Fields"


@dataclass
class TreeLayout:
    nodes: list[TreeNode] = field(default_factory=list)
    total_width: float = 0


def build_selection_tree(
    selection_set: SelectionSetNode,
    fragments: dict[str, FragmentDefinitionNode],
    config: LayoutConfig = DEFAULT_LAYOUT,
    expanding: frozenset[str] = frozenset(),
) -> TreeLayout:
    """Build the tree for one selection set.

    Output order is fixed: the leaf field group, then fields with their own
    selection sets, then fragments, each bucket in source order.
    ``expanding`` holds the names of the fragments enclosing this selection
    set; a spread of one of them is not expanded again.
    """
    leaf_fields: list[FieldNode] = []
    nested_fields: list[FieldNode] = []
    fragment_selections: list = []

    for selection in selection_set.selections:
        if isinstance(selection, FieldNode):
            if selection.selection_set:
                nested_fields.append(selection)
            else:
                leaf_fields.append(selection)
        elif isinstance(selection, (FragmentSpreadNode, InlineFragmentNode)):
            fragment_selections.append(selection)

    nodes: list[TreeNode] = []

    if leaf_fields:
        nodes.append(_field_group(leaf_fields, config))

    for selection in nested_fields:
        child_layout = build_selection_tree(selection.selection_set, fragments, config, expanding)
        nodes.append(TreeNode(
            kind=NodeKind.FIELD,
            data=NodeData(
                name=selection.name.value,
                field_type="field",
                arguments=arguments_to_python(selection.arguments),
            ),
            width=max(config.min_node_width, child_layout.total_width),
            children=child_layout.nodes,
        ))

    for selection in fragment_selections:
        nodes.append(_fragment(selection, fragments, config, expanding))

    total_width = sum(node.width + config.sibling_gap for node in nodes)
    return TreeLayout(nodes=nodes, total_width=max(total_width, config.min_node_width))


def _field_group(leaf_fields: list[FieldNode], config: LayoutConfig) -> TreeNode:
    names = [f.name.value for f in leaf_fields]
    # Only leaves that take arguments are listed, keyed by response name
    arguments = {
        (f.alias or f.name).value: arguments_to_python(f.arguments)
        for f in leaf_fields if f.arguments
    }
    return TreeNode(
        kind=NodeKind.FIELD_GROUP,
        data=NodeData(
            name=FIELD_GROUP_NAME,
            field_type="fieldGroup",
            fields=names,
            arguments=arguments or None,
        ),
        width=max(config.min_node_width, len(names) * config.field_slot_width),
    )


def _fragment(
    selection,
    fragments: dict[str, FragmentDefinitionNode],
    config: LayoutConfig,
    expanding: frozenset[str],
) -> TreeNode:
    if isinstance(selection, InlineFragmentNode):
        condition = selection.type_condition
        name = f"... on {condition.name.value}" if condition else "..."
        body = selection.selection_set
    else:
        name = selection.name.value
        definition = fragments.get(name)
        body = definition.selection_set if definition else None
        if body is not None and name in expanding:
            logger.warning("Fragment '%s' spreads itself; not expanded again", name)
            return TreeNode(
                kind=NodeKind.FRAGMENT,
                data=NodeData(name=name, field_type="fragment"),
                width=config.min_node_width,
                label=RECURSIVE_FRAGMENT_LABEL,
            )
        expanding = expanding | {name}

    if body is None:
        logger.warning("Fragment spread '...%s' has no definition", name)
        return TreeNode(
            kind=NodeKind.FRAGMENT,
            data=NodeData(name=name, field_type="fragment"),
            width=config.min_node_width,
            label=UNKNOWN_FRAGMENT_LABEL,
        )

    child_layout = build_selection_tree(body, fragments, config, expanding)
    return TreeNode(
        kind=NodeKind.FRAGMENT,
        data=NodeData(name=name, field_type="fragment"),
        width=max(config.min_node_width, child_layout.total_width),
        children=child_layout.nodes,
    )
