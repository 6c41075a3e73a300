import json
import sys
from typing import List

from src.flowgraph._config import get_settings, load_environment
from src.flowgraph.logger import setup_logger
from src.flowgraph.mapper.data_mapper import map_snapshot
from src.flowgraph.protocol import MalformedSnapshotError

USAGE = "Usage: python -m src.flowgraph.cli <snapshot.json> [chain_id]"


def main(argv: List[str]) -> int:
    if len(argv) not in (2, 3):
        print(USAGE, file=sys.stderr)
        return 1

    load_environment('local')
    settings = get_settings()
    logger = setup_logger('cli', log_file=settings.LOG_FILE, level=settings.LOG_LEVEL, stream=sys.stderr)

    try:
        chain = int(argv[2]) if len(argv) == 3 else settings.DEFAULT_CHAIN_ID
    except ValueError:
        print(f"Invalid chain id: {argv[2]}\n{USAGE}", file=sys.stderr)
        return 1

    with open(argv[1], 'r') as f:
        raw = json.load(f)

    # subgraph responses come wrapped in {"data": ...}
    if isinstance(raw, dict) and isinstance(raw.get("data"), dict):
        raw = raw["data"]

    try:
        graph = map_snapshot(chain, raw, settings)
    except MalformedSnapshotError:
        logger.error(f"Could not map {argv[1]}")
        return 1

    print(json.dumps(graph.to_json_dict(), indent=2))
    return 0


if __name__ == "__main__":
    sys.exit(main(sys.argv))
