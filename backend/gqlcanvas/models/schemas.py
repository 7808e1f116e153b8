"""Pydantic schemas for API request/response models."""
from typing import Any

from pydantic import BaseModel, ConfigDict, Field


class PositionSchema(BaseModel):
    x: float
    y: float


class NodeSchema(BaseModel):
    id: str
    type: str
    label: str
    position: PositionSchema
    data: dict[str, Any] = {}


class EdgeSchema(BaseModel):
    id: str
    source: str
    target: str
    type: str | None = None
    label: str | None = None


class ParseResponse(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    result_id: str
    operation_name: str | None = Field(default=None, alias="operationName")
    variables: dict[str, Any] = {}
    query: str
    layout_mode: str = Field(alias="layoutMode")
    nodes: list[NodeSchema]
    edges: list[EdgeSchema]
    output: str


class NodePatch(BaseModel):
    """Edit forwarded by the renderer. Only the keys the user touched are sent."""
    label: str | None = None
    name: str | None = None
    value: Any = None


class OutputResponse(BaseModel):
    output: str
