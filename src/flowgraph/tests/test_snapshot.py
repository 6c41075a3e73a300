import pytest

from src.flowgraph.protocol import MalformedSnapshotError
from src.flowgraph.protocol.snapshot import Snapshot, load_snapshot, parse_big_int, parse_non_negative_int
from src.flowgraph.tests.snapshots import (
    ALICE, BOB, CAROL, pool, pool_distributor, pool_member, selected_pool, snapshot, stream
)


@pytest.mark.parametrize("value, expected", [
    ("0", 0),
    ("42", 42),
    (" 7 ", 7),
    ("-15", -15),
    (12, 12),
    ("340282366920938463463374607431768211456", 2 ** 128),
])
def test_parse_big_int_accepts_decimal_strings_and_ints(value, expected):
    assert parse_big_int(value) == expected


@pytest.mark.parametrize("value", ["1.5", "1e18", "0x10", "", "abc", 1.0, True, None])
def test_parse_big_int_rejects_non_integers(value):
    with pytest.raises(ValueError):
        parse_big_int(value)


def test_parse_non_negative_int_rejects_negative_values():
    with pytest.raises(ValueError):
        parse_non_negative_int("-1")


def test_load_snapshot_keeps_flow_rates_exact():
    huge = "123456789012345678901234567890123456789"
    result = load_snapshot(snapshot(streams=[stream(ALICE, BOB, flow_rate=huge)]))

    assert result.streams[0].current_flow_rate == int(huge)
    assert result.streams[0].created_at_block_number == 10


def test_load_snapshot_reads_meta():
    result = load_snapshot(snapshot(block_number=99, block_timestamp=1_700_000_000))

    assert result.meta.block.number == 99
    assert result.meta.block.timestamp == 1_700_000_000


def test_load_snapshot_without_meta():
    assert load_snapshot(snapshot(block_number=None)).meta is None


def test_load_snapshot_defaults_missing_lists_to_empty():
    result = load_snapshot({})

    assert result.selected_accounts == []
    assert result.streams == []
    assert result.meta is None


def test_load_snapshot_passes_parsed_snapshot_through():
    parsed = load_snapshot(snapshot())
    assert load_snapshot(parsed) is parsed


@pytest.mark.parametrize("payload", [
    snapshot(streams=[stream(ALICE, BOB, flow_rate="12.5")]),
    snapshot(pool_members=[pool_member(ALICE, units="lots")]),
    snapshot(streams=[stream(ALICE, BOB, created_block=-1)]),
    snapshot(pool_distributors=[pool_distributor(ALICE, pool_payload=pool(total_units="NaN"))]),
])
def test_load_snapshot_rejects_unparseable_numbers(payload):
    with pytest.raises(MalformedSnapshotError):
        load_snapshot(payload)


def test_load_snapshot_rejects_non_mapping():
    with pytest.raises(MalformedSnapshotError):
        load_snapshot(["not", "a", "snapshot"])


def test_malformed_snapshot_error_names_the_field():
    with pytest.raises(MalformedSnapshotError, match="currentFlowRate"):
        load_snapshot(snapshot(streams=[stream(ALICE, BOB, flow_rate="oops")]))


def test_all_pool_members_lists_flat_before_embedded():
    result = Snapshot.model_validate(snapshot(
        pool_members=[pool_member(ALICE)],
        selected_pools=[selected_pool(members=[pool_member(BOB), pool_member(CAROL)])],
    ))

    assert [m.account.id for m in result.all_pool_members()] == [ALICE, BOB, CAROL]


def test_all_pool_distributors_lists_flat_before_embedded():
    result = Snapshot.model_validate(snapshot(
        pool_distributors=[pool_distributor(BOB)],
        selected_pools=[selected_pool(distributors=[pool_distributor(ALICE)])],
    ))

    assert [d.account.id for d in result.all_pool_distributors()] == [BOB, ALICE]
