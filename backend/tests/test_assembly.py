"""Tests for graph assembly: roots, variables, layout modes and output."""
import json

import pytest

from gqlcanvas.engine.assembly import build_graph, output_projection, render_output
from gqlcanvas.engine.graph import LayoutMode, NodeKind
from gqlcanvas.engine.parser import InvalidGraphQLSyntax, InvalidInputFormat


def _by_id(result):
    return {n.id: n for n in result.nodes}


def _incoming(result, node_id):
    return [e for e in result.edges if e.target == node_id]


def _outgoing(result, node_id):
    return [e for e in result.edges if e.source == node_id]


def _roots(result):
    return [n for n in result.nodes if n.data.is_root]


class TestBuildGraph:
    def test_leaf_only_query(self, leaf_only_body):
        result = build_graph(leaf_only_body)
        assert [n.kind for n in result.nodes] == [NodeKind.OPERATION, NodeKind.FIELD_GROUP]
        root, group = result.nodes
        assert root.data.is_root is True
        assert root.label == "query: Anonymous"
        assert (root.position.x, root.position.y) == (250, 50)
        assert group.data.fields == ["a", "b"]
        assert (group.position.x, group.position.y) == (250, 100)
        assert [e.id for e in result.edges] == ["node-0-node-1"]
        assert result.variables == {}

    def test_nested_positions(self, nested_body):
        result = build_graph(nested_body)
        positions = {n.id: (n.position.x, n.position.y) for n in result.nodes}
        assert positions == {
            "node-0": (250, 50),
            "node-1": (100, 100),
            "node-2": (100, 220),
            "node-3": (400, 100),
            "node-4": (400, 220),
        }
        nodes = _by_id(result)
        assert nodes["node-1"].label == "user"
        assert nodes["node-3"].label == "posts"
        assert nodes["node-0"].label == "query: Feed"
        assert [e.id for e in result.edges] == [
            "node-0-node-1", "node-1-node-2", "node-0-node-3", "node-3-node-4",
        ]

    def test_fragment_graph(self, fragment_body):
        result = build_graph(fragment_body)
        nodes = _by_id(result)
        assert nodes["node-1"].data.arguments == {"id": "$id"}
        assert nodes["node-1"].position.x == 250
        assert nodes["node-2"].label == "UserFields"
        assert (nodes["node-2"].position.x, nodes["node-2"].position.y) == (125, 220)
        assert nodes["node-3"].data.fields == ["id", "email"]
        assert (nodes["node-4"].position.x, nodes["node-4"].position.y) == (250, 340)
        assert (nodes["node-5"].position.x, nodes["node-5"].position.y) == (250, 460)
        assert nodes["node-6"].label == "Unknown Fragment"
        assert (nodes["node-6"].position.x, nodes["node-6"].position.y) == (550, 220)
        assert [(e.id, e.kind) for e in result.edges] == [
            ("node-0-node-1", None),
            ("node-1-node-2", "fragment"),
            ("node-2-node-3", None),
            ("node-2-node-4", None),
            ("node-4-node-5", None),
            ("node-1-node-6", "fragment"),
        ]
        assert _outgoing(result, "node-6") == []

    def test_single_root_and_unique_ids(self, fragment_body):
        result = build_graph(fragment_body)
        assert len(_roots(result)) == 1
        ids = [n.id for n in result.nodes]
        assert len(ids) == len(set(ids))

    def test_every_non_root_tree_node_has_one_parent(self, fragment_body):
        result = build_graph(fragment_body)
        for node in result.nodes:
            incoming = _incoming(result, node.id)
            if node.data.is_root or node.kind == NodeKind.VARIABLE:
                assert incoming == []
            else:
                assert len(incoming) == 1

    def test_field_groups_are_leaves(self, fragment_body):
        result = build_graph(fragment_body)
        groups = [n for n in result.nodes if n.kind == NodeKind.FIELD_GROUP]
        assert groups
        assert all(_outgoing(result, g.id) == [] for g in groups)

    def test_one_root_per_operation(self, body):
        result = build_graph(body("query A { a } mutation B { b }"))
        roots = _roots(result)
        assert [r.label for r in roots] == ["query: A", "mutation: B"]
        assert [r.data.field_type for r in roots] == ["query", "mutation"]

    def test_ids_restart_per_build(self, leaf_only_body):
        first = build_graph(leaf_only_body)
        second = build_graph(leaf_only_body)
        assert [n.id for n in first.nodes] == [n.id for n in second.nodes]

    def test_invalid_query_raises(self, body):
        with pytest.raises(InvalidGraphQLSyntax):
            build_graph(body("invalid{{{"))

    def test_invalid_json_raises(self):
        with pytest.raises(InvalidInputFormat):
            build_graph("not json")


class TestVariables:
    def test_variable_nodes(self, body):
        result = build_graph(body("query Q($x: Int) { f(arg: 1) }", {"x": 5}))
        variables = [n for n in result.nodes if n.kind == NodeKind.VARIABLE]
        assert len(variables) == 1
        var = variables[0]
        assert var.id == "var-x"
        assert var.label == "$x"
        assert var.data.name == "x"
        assert var.data.value == 5
        assert _incoming(result, "var-x") == []
        group = next(n for n in result.nodes if n.kind == NodeKind.FIELD_GROUP)
        assert group.data.fields == ["f"]
        assert group.data.arguments == {"f": {"arg": 1}}

    def test_variables_stacked_in_order(self, body):
        result = build_graph(body("{ a }", {"b": {"nested": [1, 2]}, "a": None, "c": "s"}))
        variables = [n for n in result.nodes if n.kind == NodeKind.VARIABLE]
        assert [v.id for v in variables] == ["var-b", "var-a", "var-c"]
        assert [(v.position.x, v.position.y) for v in variables] == [(50, 100), (50, 160), (50, 220)]
        assert variables[0].data.value == {"nested": [1, 2]}
        assert variables[1].data.has_value()
        assert variables[1].data.to_dict()["value"] is None


class TestLayoutModes:
    def test_deferred_matches_precomputed_structure(self, fragment_body):
        precomputed = build_graph(fragment_body)
        deferred = build_graph(fragment_body, LayoutMode.DEFERRED)
        assert [n.id for n in deferred.nodes] == [n.id for n in precomputed.nodes]
        assert [n.label for n in deferred.nodes] == [n.label for n in precomputed.nodes]
        assert [e.id for e in deferred.edges] == [e.id for e in precomputed.edges]
        assert all((n.position.x, n.position.y) == (0, 0) for n in deferred.nodes)
        assert deferred.layout_mode == LayoutMode.DEFERRED


class TestOutput:
    def test_round_trip(self, body):
        variables = {"x": 5, "filter": {"tags": ["a"]}}
        result = build_graph(body("query Q($x: Int) { f(arg: $x) }", variables, "Q"))
        decoded = json.loads(render_output(result))
        assert decoded == {"operationName": "Q", "variables": variables, "query": result.query}

    def test_pretty_printed_with_two_spaces(self, leaf_only_body):
        text = render_output(build_graph(leaf_only_body))
        assert text.splitlines()[1] == '  "operationName": null,'

    def test_projection_keys(self, leaf_only_body):
        assert list(output_projection(build_graph(leaf_only_body))) == [
            "operationName", "variables", "query",
        ]
