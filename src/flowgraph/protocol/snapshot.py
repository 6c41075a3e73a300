"""
Models of the subgraph query result the mapper consumes.

All ids arrive lower-cased. Numeric fields arrive as decimal strings (or ints) and are
parsed into exact Python ints here, before anything else touches them.
"""
import re
from typing import Annotated, Any, Dict, List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, PlainValidator, ValidationError, WithJsonSchema
from pydantic.alias_generators import to_camel

from src.flowgraph.protocol import MalformedSnapshotError

_INTEGER_PATTERN = re.compile(r"^-?[0-9]+$")


def parse_big_int(value: Any) -> int:
    """Parse a decimal string or an int into an exact int. Floats and bools are rejected."""
    if isinstance(value, bool):
        raise ValueError(f"Expected an integer, got boolean {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        text = value.strip()
        if _INTEGER_PATTERN.match(text):
            return int(text, 10)
    raise ValueError(f"Expected an integer or a decimal string, got {value!r}")


def parse_non_negative_int(value: Any) -> int:
    number = parse_big_int(value)
    if number < 0:
        raise ValueError(f"Expected a non-negative integer, got {number}")
    return number


BigInt = Annotated[
    int,
    PlainValidator(parse_big_int),
    WithJsonSchema({"type": "string", "pattern": _INTEGER_PATTERN.pattern}),
]
BlockNumber = Annotated[
    int,
    PlainValidator(parse_non_negative_int),
    WithJsonSchema({"type": "string", "pattern": "^[0-9]+$"}),
]


class SubgraphModel(BaseModel):
    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        extra='ignore',
        frozen=True
    )


class Timestamped(SubgraphModel):
    created_at_block_number: BlockNumber
    created_at_timestamp: BlockNumber
    updated_at_block_number: BlockNumber
    updated_at_timestamp: BlockNumber


class TokenRef(SubgraphModel):
    id: str
    symbol: str = ""


class AccountRef(SubgraphModel):
    id: str
    is_super_app: bool = False


class AccountTokenSnapshot(Timestamped):
    pass


class SelectedAccount(Timestamped):
    id: str
    is_super_app: bool = False
    account_token_snapshots: List[AccountTokenSnapshot] = []


class PoolRef(Timestamped):
    id: str
    flow_rate: BigInt
    total_units: BigInt
    token: TokenRef


class PoolMember(Timestamped):
    id: Optional[str] = None
    units: BigInt
    account: AccountRef
    pool: PoolRef


class PoolDistributor(Timestamped):
    id: Optional[str] = None
    flow_rate: BigInt
    account: AccountRef
    pool: PoolRef


class SelectedPool(PoolRef):
    pool_members: List[PoolMember] = []
    pool_distributors: List[PoolDistributor] = []


class Stream(Timestamped):
    id: Optional[str] = None
    current_flow_rate: BigInt
    token: TokenRef
    sender: AccountRef
    receiver: AccountRef


class Block(SubgraphModel):
    number: BlockNumber
    timestamp: BlockNumber


class Meta(SubgraphModel):
    block: Block


class Snapshot(SubgraphModel):
    selected_accounts: List[SelectedAccount] = []
    selected_pools: List[SelectedPool] = []
    pool_members: List[PoolMember] = []
    pool_distributors: List[PoolDistributor] = []
    streams: List[Stream] = []
    meta: Optional[Meta] = Field(None, alias="_meta")

    def all_pool_members(self) -> List[PoolMember]:
        """Flat memberships followed by the ones embedded in selected pools."""
        embedded = [member for pool in self.selected_pools for member in pool.pool_members]
        return list(self.pool_members) + embedded

    def all_pool_distributors(self) -> List[PoolDistributor]:
        """Flat distributorships followed by the ones embedded in selected pools."""
        embedded = [distributor for pool in self.selected_pools for distributor in pool.pool_distributors]
        return list(self.pool_distributors) + embedded


def load_snapshot(raw: Union[Snapshot, Dict[str, Any]]) -> Snapshot:
    if isinstance(raw, Snapshot):
        return raw
    if not isinstance(raw, dict):
        raise MalformedSnapshotError(f"Snapshot must be a mapping, got {type(raw).__name__}")

    try:
        return Snapshot.model_validate(raw)
    except ValidationError as e:
        details = "; ".join(
            f"{'.'.join(str(part) for part in error['loc'])}: {error['msg']}" for error in e.errors()
        )
        raise MalformedSnapshotError(f"Malformed snapshot: {details}") from e
