"""REST API routes."""
import logging
import uuid

from fastapi import APIRouter, HTTPException, Request

from ..config import settings
from ..engine.assembly import build_graph, render_output
from ..engine.graph import LayoutMode, ParsedResult, apply_node_patch
from ..engine.parser import InputError
from ..models.schemas import (
    EdgeSchema, NodePatch, NodeSchema, OutputResponse,
    ParseResponse, PositionSchema,
)

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api")

# In-memory store, oldest entries evicted past settings.max_results
_results: dict[str, ParsedResult] = {}


def _node_to_schema(node) -> NodeSchema:
    return NodeSchema(
        id=node.id,
        type=node.kind.value,
        label=node.label,
        position=PositionSchema(x=node.position.x, y=node.position.y),
        data=node.data.to_dict(),
    )


def _result_to_response(result_id: str, result: ParsedResult) -> ParseResponse:
    return ParseResponse(
        result_id=result_id,
        operation_name=result.operation_name,
        variables=result.variables,
        query=result.query,
        layout_mode=result.layout_mode.value,
        nodes=[_node_to_schema(n) for n in result.nodes],
        edges=[
            EdgeSchema(id=e.id, source=e.source, target=e.target, type=e.kind, label=e.label)
            for e in result.edges
        ],
        output=render_output(result),
    )


def _get_result(result_id: str) -> ParsedResult:
    if result_id not in _results:
        raise HTTPException(status_code=404, detail="Result not found")
    return _results[result_id]


@router.get("/health")
async def health():
    return {"status": "ok", "app": settings.app_name}


@router.post("/parse", response_model=ParseResponse)
async def parse(request: Request, layout_mode: LayoutMode | None = None):
    """Parse a raw GraphQL request body into a diagram graph.

    The body is taken verbatim, so malformed JSON is reported the same way
    as a malformed query instead of by request validation.
    """
    raw = await request.body()
    try:
        text = raw.decode("utf-8")
        result = build_graph(text, layout_mode or settings.layout_mode)
    except UnicodeDecodeError:
        raise HTTPException(status_code=400, detail="Invalid JSON format")
    except InputError as e:
        logger.info("Rejected submission: %s", e.message)
        raise HTTPException(status_code=400, detail=e.message)

    while len(_results) >= settings.max_results:
        _results.pop(next(iter(_results)))
    result_id = str(uuid.uuid4())
    _results[result_id] = result
    return _result_to_response(result_id, result)


@router.get("/results/{result_id}", response_model=ParseResponse)
async def get_result(result_id: str):
    return _result_to_response(result_id, _get_result(result_id))


@router.patch("/results/{result_id}/nodes/{node_id}", response_model=NodeSchema)
async def patch_node(result_id: str, node_id: str, patch: NodePatch):
    """Merge a renderer edit into a stored result without re-running layout."""
    result = _get_result(result_id)
    try:
        updated = apply_node_patch(result, node_id, patch.model_dump(exclude_unset=True))
    except KeyError:
        raise HTTPException(status_code=404, detail="Node not found")
    except ValueError as e:
        raise HTTPException(status_code=400, detail=str(e))
    _results[result_id] = updated
    return _node_to_schema(updated.get_node(node_id))


@router.get("/results/{result_id}/output", response_model=OutputResponse)
async def get_output(result_id: str):
    return OutputResponse(output=render_output(_get_result(result_id)))


@router.delete("/results/{result_id}")
async def delete_result(result_id: str):
    _get_result(result_id)
    del _results[result_id]
    return {"status": "deleted"}
