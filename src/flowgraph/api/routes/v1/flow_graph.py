from typing import Any, Dict

from fastapi import APIRouter, Body, Depends, HTTPException, Query
from loguru import logger

from src.flowgraph._config import MapperSettings, get_settings
from src.flowgraph.api.helpers.response_formatter import ResponseType, format_response
from src.flowgraph.mapper.data_mapper import map_snapshot
from src.flowgraph.protocol import MalformedSnapshotError, get_chain_ids

flow_graph_router = APIRouter(prefix="/v1/flow-graph", tags=["flow-graph"])


@flow_graph_router.get("/health")
async def health():
    return {"status": "ok"}


@flow_graph_router.post("/{chain}/map")
def map_flow_graph(
    chain: int,
    snapshot: Dict[str, Any] = Body(..., description="Subgraph query result with all relevant entities"),
    response_type: ResponseType = Query(ResponseType.json),
    settings: MapperSettings = Depends(get_settings),
):
    logger.debug(f"Mapping snapshot for chain {chain}")
    if chain not in get_chain_ids():
        logger.warning(f"Chain {chain} is not a known chain, mapping anyway")

    try:
        graph = map_snapshot(chain, snapshot, settings)
    except MalformedSnapshotError as e:
        raise HTTPException(status_code=422, detail=str(e))

    return format_response(graph.to_json_dict(), response_type)
