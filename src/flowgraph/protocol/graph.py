from datetime import datetime
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PlainSerializer, field_serializer
from pydantic.alias_generators import to_camel

from src.flowgraph.protocol import EDGE_TYPE_FLOATING, NODE_TYPE_CUSTOM
from src.flowgraph.protocol.snapshot import TokenRef

# Largest integer a JavaScript number holds exactly
MAX_SAFE_INTEGER = 2 ** 53 - 1


def serialize_safe_int(value: int) -> Union[int, str]:
    if abs(value) > MAX_SAFE_INTEGER:
        return str(value)
    return value


SafeInt = Annotated[int, PlainSerializer(serialize_safe_int, return_type=Union[int, str], when_used="json")]


class GraphModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        frozen=True
    )


class Position(GraphModel):
    x: float = 0
    y: float = 0


class NodeData(GraphModel):
    chain: SafeInt
    address: str
    label: str
    is_pool: bool = False
    is_super_app: bool = False
    is_selected: bool = False
    created_at_block_number: SafeInt
    created_at_timestamp: SafeInt
    updated_at_block_number: SafeInt
    updated_at_timestamp: SafeInt


class Node(GraphModel):
    id: str
    type: str = NODE_TYPE_CUSTOM
    position: Position = Field(default_factory=Position)
    data: NodeData


class ParallelEdges(GraphModel):
    """How many edges join the same two nodes (either direction) and where this one sits among them."""
    length: int
    index: int


class EdgeData(GraphModel):
    flow_rate: int
    token: TokenRef
    parallel: ParallelEdges

    @field_serializer("flow_rate", when_used="json")
    def serialize_flow_rate(self, flow_rate: int) -> str:
        return str(flow_rate)


class Edge(GraphModel):
    id: str
    source: str
    target: str
    animated: bool = True
    type: str = EDGE_TYPE_FLOATING
    data: EdgeData


class LatestBlock(GraphModel):
    number: SafeInt
    timestamp: datetime


class MappedGraph(GraphModel):
    nodes: List[Node] = []
    edges: List[Edge] = []
    latest_block: Optional[LatestBlock] = None

    def to_json_dict(self) -> Dict[str, Any]:
        """JSON-safe rendering for the frontend: camelCase keys, flow rates as strings,
        other integers as strings only past the JavaScript safe range."""
        return self.model_dump(mode="json", by_alias=True, exclude_none=True)
