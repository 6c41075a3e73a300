import re
from abc import ABC, abstractmethod
from typing import Any, List

from web3 import Web3

from src.flowgraph.protocol import MalformedSnapshotError
from src.flowgraph.protocol.snapshot import Snapshot

_ADDRESS_PATTERN = re.compile(r"^0x[0-9a-fA-F]{40}$")


class BaseGraphTransformer(ABC):
    @abstractmethod
    def transform_result(self, snapshot: Snapshot) -> List[Any]:
        """Transform a snapshot into graph elements."""
        pass


def to_checksum_address(raw_id: str) -> str:
    """Checksummed form of a raw address id; fails on anything but a 0x-prefixed 20-byte hex address."""
    if not isinstance(raw_id, str) or not _ADDRESS_PATTERN.match(raw_id) or not Web3.is_address(raw_id):
        raise MalformedSnapshotError(f"Invalid address id: {raw_id!r}")
    try:
        return Web3.to_checksum_address(raw_id)
    except ValueError as e:
        raise MalformedSnapshotError(f"Invalid address id: {raw_id!r}") from e


def shorten_hex(address: str, length: int = 4) -> str:
    if len(address) <= 2 * length + 2:
        return address
    return f"{address[:length + 2]}...{address[-length:]}"
