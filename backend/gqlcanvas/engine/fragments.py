"""Fragment definition lookup, built before any selection set is walked."""
import logging

from graphql.language import DocumentNode, FragmentDefinitionNode, Visitor, visit

logger = logging.getLogger(__name__)


class FragmentCollector(Visitor):
    def __init__(self):
        super().__init__()
        self.fragments: dict[str, FragmentDefinitionNode] = {}

    def enter_fragment_definition(self, node: FragmentDefinitionNode, *_args):
        name = node.name.value
        if name in self.fragments:
            logger.warning("Fragment '%s' defined more than once; keeping the last", name)
        self.fragments[name] = node
        # Fragment bodies cannot contain definitions
        return self.SKIP


def collect_fragments(document: DocumentNode) -> dict[str, FragmentDefinitionNode]:
    """Map fragment name to definition. A repeated name keeps its last definition."""
    collector = FragmentCollector()
    visit(document, collector)
    return collector.fragments
