"""Shared test fixtures for GraphQL Canvas backend tests."""
import json
import sys
from pathlib import Path

import pytest

# Ensure gqlcanvas package is importable
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))


def make_body(query: str, variables=None, operation_name=None) -> str:
    body = {"query": query}
    if variables is not None:
        body["variables"] = variables
    if operation_name is not None:
        body["operationName"] = operation_name
    return json.dumps(body)


@pytest.fixture
def leaf_only_body():
    return make_body("{ a b }")


@pytest.fixture
def nested_body():
    """user { id name } posts { title }: two sibling subtrees."""
    return make_body("query Feed { user { id name } posts { title } }", operation_name="Feed")


@pytest.fixture
def fragment_body():
    """Spread used before its definition, plus one unresolved spread."""
    query = """
    query Profile($id: ID!) {
      user(id: $id) {
        ...UserFields
        ...Missing
      }
    }
    fragment UserFields on User {
      id
      email
      avatar { url }
    }
    """
    return make_body(query, variables={"id": "u1"}, operation_name="Profile")


@pytest.fixture
def body():
    """Factory building a JSON request body from query, variables and operation name."""
    return make_body
