from dataclasses import dataclass, replace
from typing import Dict, List, Tuple

from loguru import logger

from src.flowgraph.mapper import BaseGraphTransformer
from src.flowgraph.mapper.grouping import group_by, truncating_div, unordered_pair_key
from src.flowgraph.protocol.graph import Edge, EdgeData, ParallelEdges
from src.flowgraph.protocol.snapshot import PoolDistributor, PoolMember, Snapshot, Stream, TokenRef


@dataclass(frozen=True)
class EdgeCandidate:
    id: str
    source: str
    target: str
    token: TokenRef
    flow_rate: int


def member_flow_rate(member: PoolMember) -> int:
    """
    Share of the pool's outflow attributed to a member: pool flow rate * total units / member units.

    Uses the pool's current total units even when the membership is older. A member without units gets 0.
    """
    if member.units <= 0:
        return 0
    return truncating_div(member.pool.flow_rate * member.pool.total_units, member.units)


def merge_edge_candidates(candidates: List[EdgeCandidate]) -> EdgeCandidate:
    """Keep the first candidate's endpoints and token; the flow rate is the sum over the group."""
    if not candidates:
        raise ValueError("Cannot merge an empty group of edge candidates")

    root = candidates[0]
    if len(candidates) == 1:
        return root
    return replace(root, flow_rate=sum(c.flow_rate for c in candidates))


def _distributor_candidate(distributor: PoolDistributor) -> EdgeCandidate:
    pool = distributor.pool
    return EdgeCandidate(
        id=f"{pool.token.id}-{distributor.account.id}-{pool.id}",
        source=distributor.account.id,
        target=pool.id,
        token=pool.token,
        flow_rate=distributor.flow_rate,
    )


def _member_candidate(member: PoolMember) -> EdgeCandidate:
    pool = member.pool
    return EdgeCandidate(
        id=f"{pool.token.id}-{pool.id}-{member.account.id}",
        source=pool.id,
        target=member.account.id,
        token=pool.token,
        flow_rate=member_flow_rate(member),
    )


def _stream_candidate(stream: Stream) -> EdgeCandidate:
    return EdgeCandidate(
        id=f"{stream.token.id}-{stream.sender.id}-{stream.receiver.id}",
        source=stream.sender.id,
        target=stream.receiver.id,
        token=stream.token,
        flow_rate=stream.current_flow_rate,
    )


class EdgeGraphTransformer(BaseGraphTransformer):
    def transform_result(self, snapshot: Snapshot) -> List[Edge]:
        """Build one edge per (token, source, target), summing flow rates, annotated for parallel drawing."""
        candidates = self.collect_candidates(snapshot)
        edges = [merge_edge_candidates(group) for group in group_by(candidates, lambda c: c.id).values()]
        logger.debug(f"Merged {len(candidates)} edge candidates into {len(edges)} edges")

        positions = self.parallel_positions(edges)
        return [self.finalize(edge, positions[edge.id]) for edge in edges]

    def collect_candidates(self, snapshot: Snapshot) -> List[EdgeCandidate]:
        candidates = [_member_candidate(member) for member in snapshot.all_pool_members()]
        candidates += [_stream_candidate(stream) for stream in snapshot.streams]
        candidates += [_distributor_candidate(distributor) for distributor in snapshot.all_pool_distributors()]
        return candidates

    @staticmethod
    def parallel_positions(edges: List[EdgeCandidate]) -> Dict[str, Tuple[int, int]]:
        """Map edge id to (edges sharing its unordered endpoint pair, its index among them)."""
        positions = {}
        for siblings in group_by(edges, lambda e: unordered_pair_key(e.source, e.target)).values():
            for index, edge in enumerate(siblings):
                positions[edge.id] = (len(siblings), index)
        return positions

    @staticmethod
    def finalize(edge: EdgeCandidate, position: Tuple[int, int]) -> Edge:
        length, index = position
        return Edge(
            id=edge.id,
            source=edge.source,
            target=edge.target,
            data=EdgeData(
                flow_rate=edge.flow_rate,
                token=edge.token,
                parallel=ParallelEdges(length=length, index=index),
            ),
        )
