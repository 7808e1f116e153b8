"""Request body parsing: JSON envelope first, then GraphQL query text."""
import json
import logging
from dataclasses import dataclass, field
from typing import Any

from graphql import GraphQLError, parse
from graphql.language import DocumentNode

logger = logging.getLogger(__name__)


class InputError(Exception):
    """A submission that cannot be turned into a graph."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class InvalidInputFormat(InputError):
    pass


class MissingQueryField(InputError):
    pass


class InvalidGraphQLSyntax(InputError):
    pass


def _reject_constant(name: str):
    # NaN and Infinity are accepted by json.loads but are not JSON
    raise ValueError(f"Non-standard JSON constant: {name}")


@dataclass
class RequestBody:
    query: str
    document: DocumentNode
    operation_name: str | None = None
    variables: dict[str, Any] = field(default_factory=dict)


def parse_request(text: str) -> RequestBody:
    """Parse a GraphQL HTTP request body into its parts and the query AST.

    Raises InvalidInputFormat, MissingQueryField or InvalidGraphQLSyntax.
    """
    try:
        payload = json.loads(text, parse_constant=_reject_constant)
    except (ValueError, TypeError) as e:
        raise InvalidInputFormat("Invalid JSON format") from e
    if not isinstance(payload, dict):
        raise InvalidInputFormat("Invalid JSON format")

    query = payload.get("query")
    if not query or not isinstance(query, str):
        raise MissingQueryField('Missing or invalid "query" field')

    variables = payload.get("variables")
    if variables is None:
        variables = {}
    elif not isinstance(variables, dict):
        raise InvalidInputFormat("Invalid JSON format")

    try:
        document = parse(query)
    except GraphQLError as e:
        raise InvalidGraphQLSyntax(f"Invalid GraphQL query: {e.message}") from e

    operation_name = payload.get("operationName") or None
    if operation_name is not None and not isinstance(operation_name, str):
        raise InvalidInputFormat("Invalid JSON format")
    logger.debug("Parsed query with %d definitions", len(document.definitions))
    return RequestBody(
        query=query,
        document=document,
        operation_name=operation_name,
        variables=variables,
    )
