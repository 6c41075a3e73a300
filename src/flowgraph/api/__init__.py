import os
from datetime import datetime, timezone

from src.flowgraph._config import get_settings, load_environment

load_environment(os.getenv("FLOWGRAPH_ENV", "local"))
settings = get_settings()


def patch_record(record):
    record["extra"]["service"] = 'flowgraph-api'
    record["extra"]["timestamp"] = datetime.now(timezone.utc).isoformat()
    record["extra"]["level"] = record['level'].name

    return True
