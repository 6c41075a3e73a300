from datetime import datetime, timezone
from typing import Any, Dict, Optional, Union

from loguru import logger

from src.flowgraph._config import MapperSettings, get_settings
from src.flowgraph.mapper.edge_transformer import EdgeGraphTransformer
from src.flowgraph.mapper.node_transformer import NodeGraphTransformer
from src.flowgraph.protocol import MalformedSnapshotError
from src.flowgraph.protocol.graph import LatestBlock, MappedGraph
from src.flowgraph.protocol.snapshot import Meta, Snapshot, load_snapshot


def map_latest_block(meta: Optional[Meta]) -> Optional[LatestBlock]:
    if meta is None:
        return None

    try:
        timestamp = datetime.fromtimestamp(meta.block.timestamp, tz=timezone.utc)
    except (OverflowError, OSError, ValueError) as e:
        raise MalformedSnapshotError(f"Block timestamp out of range: {meta.block.timestamp}") from e
    return LatestBlock(number=meta.block.number, timestamp=timestamp)


def map_snapshot(
        chain: int,
        snapshot: Union[Snapshot, Dict[str, Any]],
        settings: Optional[MapperSettings] = None,
) -> MappedGraph:
    """
    Map a subgraph snapshot into the nodes and edges of a flow diagram.

    Nodes and edges are built independently from the same snapshot. Positions are left at
    the origin for a later layout pass. Raises MalformedSnapshotError on invalid ids or numbers.
    """
    settings = settings or get_settings()

    try:
        snapshot = load_snapshot(snapshot)
        node_transformer = NodeGraphTransformer(
            chain,
            label_hex_length=settings.LABEL_HEX_LENGTH,
            include_selected_pools=settings.INCLUDE_SELECTED_POOL_NODES,
        )
        nodes = node_transformer.transform_result(snapshot)
        edges = EdgeGraphTransformer().transform_result(snapshot)
        latest_block = map_latest_block(snapshot.meta)
    except MalformedSnapshotError as e:
        logger.error(f"Rejected snapshot for chain {chain}: {e}")
        raise

    logger.info(f"Mapped snapshot for chain {chain}: {len(nodes)} nodes, {len(edges)} edges")
    return MappedGraph(nodes=nodes, edges=edges, latest_block=latest_block)
