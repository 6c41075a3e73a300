from dataclasses import dataclass
from typing import List, Optional

from loguru import logger

from src.flowgraph.mapper import BaseGraphTransformer, shorten_hex, to_checksum_address
from src.flowgraph.mapper.grouping import group_by
from src.flowgraph.protocol.graph import Node, NodeData
from src.flowgraph.protocol.snapshot import AccountRef, PoolRef, SelectedAccount, Snapshot, Timestamped


@dataclass(frozen=True)
class NodeCandidate:
    """One sighting of an address. Flags left as None were not reported by the source relation."""
    id: str
    created_at_block_number: int
    created_at_timestamp: int
    updated_at_block_number: int
    updated_at_timestamp: int
    is_pool: Optional[bool] = None
    is_super_app: Optional[bool] = None
    is_selected: Optional[bool] = None


def merge_node_candidates(candidates: List[NodeCandidate]) -> NodeCandidate:
    """Fold every sighting of one address: flags OR-ed, creation the earliest, update the latest."""
    if not candidates:
        raise ValueError("Cannot merge an empty group of node candidates")

    root = candidates[0]
    if len(candidates) == 1:
        return root

    return NodeCandidate(
        id=root.id,
        is_pool=any(bool(c.is_pool) for c in candidates),
        is_super_app=any(bool(c.is_super_app) for c in candidates),
        is_selected=any(bool(c.is_selected) for c in candidates),
        created_at_block_number=min(c.created_at_block_number for c in candidates),
        created_at_timestamp=min(c.created_at_timestamp for c in candidates),
        updated_at_block_number=max(c.updated_at_block_number for c in candidates),
        updated_at_timestamp=max(c.updated_at_timestamp for c in candidates),
    )


def _relation_candidate(id: str, relation: Timestamped, **flags) -> NodeCandidate:
    return NodeCandidate(
        id=id,
        created_at_block_number=relation.created_at_block_number,
        created_at_timestamp=relation.created_at_timestamp,
        updated_at_block_number=relation.updated_at_block_number,
        updated_at_timestamp=relation.updated_at_timestamp,
        **flags,
    )


def _pool_candidate(pool: PoolRef, is_selected: Optional[bool] = None) -> NodeCandidate:
    return _relation_candidate(pool.id, pool, is_pool=True, is_selected=is_selected)


def _account_candidate(account: AccountRef, relation: Timestamped) -> NodeCandidate:
    # the relation's own blocks, not the account's
    return _relation_candidate(account.id, relation, is_super_app=account.is_super_app)


def _selected_account_candidate(account: SelectedAccount) -> NodeCandidate:
    snapshots = account.account_token_snapshots
    if not snapshots:
        return _relation_candidate(account.id, account, is_super_app=account.is_super_app, is_selected=True)

    return NodeCandidate(
        id=account.id,
        is_super_app=account.is_super_app,
        is_selected=True,
        created_at_block_number=min(s.created_at_block_number for s in snapshots),
        created_at_timestamp=min(s.created_at_timestamp for s in snapshots),
        updated_at_block_number=max(s.updated_at_block_number for s in snapshots),
        updated_at_timestamp=max(s.updated_at_timestamp for s in snapshots),
    )


class NodeGraphTransformer(BaseGraphTransformer):
    def __init__(self, chain: int, label_hex_length: int = 4, include_selected_pools: bool = False):
        self.chain = chain
        self.label_hex_length = label_hex_length
        self.include_selected_pools = include_selected_pools

    def transform_result(self, snapshot: Snapshot) -> List[Node]:
        """Build one node per distinct address seen anywhere in the snapshot."""
        candidates = self.collect_candidates(snapshot)
        merged = [merge_node_candidates(group) for group in group_by(candidates, lambda c: c.id).values()]
        logger.debug(f"Merged {len(candidates)} node candidates into {len(merged)} nodes for chain {self.chain}")

        return [self.finalize(candidate) for candidate in merged]

    def collect_candidates(self, snapshot: Snapshot) -> List[NodeCandidate]:
        candidates = self.candidates_from_selected_accounts(snapshot)
        if self.include_selected_pools:
            candidates += self.candidates_from_selected_pools(snapshot)
        candidates += self.candidates_from_pool_members(snapshot)
        candidates += self.candidates_from_pool_distributors(snapshot)
        candidates += self.candidates_from_streams(snapshot)
        return candidates

    def candidates_from_selected_accounts(self, snapshot: Snapshot) -> List[NodeCandidate]:
        return [_selected_account_candidate(account) for account in snapshot.selected_accounts]

    def candidates_from_selected_pools(self, snapshot: Snapshot) -> List[NodeCandidate]:
        return [_pool_candidate(pool, is_selected=True) for pool in snapshot.selected_pools]

    def candidates_from_pool_members(self, snapshot: Snapshot) -> List[NodeCandidate]:
        candidates = []
        for member in snapshot.all_pool_members():
            candidates.append(_pool_candidate(member.pool))
            candidates.append(_account_candidate(member.account, member))
        return candidates

    def candidates_from_pool_distributors(self, snapshot: Snapshot) -> List[NodeCandidate]:
        candidates = []
        for distributor in snapshot.all_pool_distributors():
            candidates.append(_pool_candidate(distributor.pool))
            candidates.append(_account_candidate(distributor.account, distributor))
        return candidates

    def candidates_from_streams(self, snapshot: Snapshot) -> List[NodeCandidate]:
        candidates = []
        for stream in snapshot.streams:
            candidates.append(_account_candidate(stream.receiver, stream))
            candidates.append(_account_candidate(stream.sender, stream))
        return candidates

    def finalize(self, candidate: NodeCandidate) -> Node:
        address = to_checksum_address(candidate.id)
        return Node(
            id=candidate.id,
            data=NodeData(
                chain=self.chain,
                address=address,
                label=shorten_hex(address, self.label_hex_length),
                is_pool=bool(candidate.is_pool),
                is_super_app=bool(candidate.is_super_app),
                is_selected=bool(candidate.is_selected),
                created_at_block_number=candidate.created_at_block_number,
                created_at_timestamp=candidate.created_at_timestamp,
                updated_at_block_number=candidate.updated_at_block_number,
                updated_at_timestamp=candidate.updated_at_timestamp,
            ),
        )
