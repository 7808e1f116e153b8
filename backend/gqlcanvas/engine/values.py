"""Argument literal values as a tagged union over the GraphQL value grammar."""
from dataclasses import dataclass
from enum import Enum
from typing import Any

from graphql.language import (
    BooleanValueNode,
    EnumValueNode,
    FloatValueNode,
    IntValueNode,
    ListValueNode,
    NullValueNode,
    ObjectValueNode,
    StringValueNode,
    ValueNode,
    VariableNode,
)


class ValueKind(str, Enum):
    INT = "int"
    FLOAT = "float"
    STRING = "string"
    BOOLEAN = "boolean"
    NULL = "null"
    ENUM = "enum"
    LIST = "list"
    OBJECT = "object"
    VARIABLE = "variable"


@dataclass(frozen=True)
class ArgumentValue:
    """One argument value.

    ``value`` holds a Python scalar for scalar kinds, the symbol name for
    ENUM and VARIABLE, a list of ArgumentValue for LIST and a dict of
    ArgumentValue for OBJECT.
    """
    kind: ValueKind
    value: Any = None

    def to_python(self) -> Any:
        if self.kind == ValueKind.LIST:
            return [item.to_python() for item in self.value]
        if self.kind == ValueKind.OBJECT:
            return {key: item.to_python() for key, item in self.value.items()}
        if self.kind == ValueKind.VARIABLE:
            return f"${self.value}"
        return self.value


def value_from_ast(node: ValueNode) -> ArgumentValue:
    if isinstance(node, IntValueNode):
        return ArgumentValue(ValueKind.INT, int(node.value))
    if isinstance(node, FloatValueNode):
        return ArgumentValue(ValueKind.FLOAT, float(node.value))
    if isinstance(node, StringValueNode):
        return ArgumentValue(ValueKind.STRING, node.value)
    if isinstance(node, BooleanValueNode):
        return ArgumentValue(ValueKind.BOOLEAN, node.value)
    if isinstance(node, NullValueNode):
        return ArgumentValue(ValueKind.NULL, None)
    if isinstance(node, EnumValueNode):
        return ArgumentValue(ValueKind.ENUM, node.value)
    if isinstance(node, ListValueNode):
        return ArgumentValue(ValueKind.LIST, [value_from_ast(v) for v in node.values])
    if isinstance(node, ObjectValueNode):
        return ArgumentValue(
            ValueKind.OBJECT,
            {f.name.value: value_from_ast(f.value) for f in node.fields},
        )
    if isinstance(node, VariableNode):
        return ArgumentValue(ValueKind.VARIABLE, node.name.value)
    raise TypeError(f"Unsupported argument value node: {type(node).__name__}")


def arguments_to_python(arguments) -> dict[str, Any]:
    """Collapse a field's argument nodes into ``{name: python value}``."""
    return {arg.name.value: value_from_ast(arg.value).to_python() for arg in arguments or ()}
