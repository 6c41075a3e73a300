import json
import sys

import pytest
from loguru import logger

from src.flowgraph.cli import main
from src.flowgraph.tests.snapshots import ALICE, BOB, snapshot, stream


@pytest.fixture(autouse=True)
def restore_logger():
    yield
    logger.remove()
    logger.add(sys.stderr)


def write_snapshot(tmp_path, payload):
    path = tmp_path / "snapshot.json"
    path.write_text(json.dumps(payload))
    return str(path)


def test_cli_prints_mapped_graph(tmp_path, capsys):
    path = write_snapshot(tmp_path, snapshot(streams=[stream(ALICE, BOB, flow_rate="100")]))

    assert main(["cli", path, "10"]) == 0

    rendered = json.loads(capsys.readouterr().out)
    assert {node["id"] for node in rendered["nodes"]} == {ALICE, BOB}
    assert rendered["nodes"][0]["data"]["chain"] == 10
    assert rendered["edges"][0]["data"]["flowRate"] == "100"


def test_cli_unwraps_query_response(tmp_path, capsys):
    path = write_snapshot(tmp_path, {"data": snapshot(streams=[stream(ALICE, BOB)])})

    assert main(["cli", path]) == 0

    rendered = json.loads(capsys.readouterr().out)
    assert len(rendered["edges"]) == 1
    assert rendered["nodes"][0]["data"]["chain"] == 1


def test_cli_fails_on_malformed_snapshot(tmp_path, capsys):
    path = write_snapshot(tmp_path, snapshot(streams=[stream(ALICE, BOB, flow_rate="1.5")]))

    assert main(["cli", path]) == 1
    assert capsys.readouterr().out == ""


@pytest.mark.parametrize("argv", [["cli"], ["cli", "a", "b", "c"]])
def test_cli_usage(argv, capsys):
    assert main(argv) == 1
    assert "Usage" in capsys.readouterr().err


def test_cli_rejects_bad_chain_id(tmp_path, capsys):
    path = write_snapshot(tmp_path, snapshot())

    assert main(["cli", path, "mainnet"]) == 1
    assert "Invalid chain id" in capsys.readouterr().err
