import pytest

from src.flowgraph._config import MapperSettings
from src.flowgraph.tests.snapshots import snapshot


@pytest.fixture
def settings():
    return MapperSettings(LABEL_HEX_LENGTH=4, INCLUDE_SELECTED_POOL_NODES=False, DEFAULT_CHAIN_ID=1)


@pytest.fixture
def empty_snapshot():
    return snapshot()
