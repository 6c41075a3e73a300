# Renderer hints understood by the diagram frontend
NODE_TYPE_CUSTOM = "custom"
EDGE_TYPE_FLOATING = "floating"

# Chains
CHAIN_ETHEREUM_ID = 1
CHAIN_OPTIMISM_ID = 10
CHAIN_BNB_ID = 56
CHAIN_GNOSIS_ID = 100
CHAIN_POLYGON_ID = 137
CHAIN_BASE_ID = 8453
CHAIN_ARBITRUM_ID = 42161
CHAIN_AVALANCHE_ID = 43114


def get_chain_ids():
    return [
        CHAIN_ETHEREUM_ID,
        CHAIN_OPTIMISM_ID,
        CHAIN_BNB_ID,
        CHAIN_GNOSIS_ID,
        CHAIN_POLYGON_ID,
        CHAIN_BASE_ID,
        CHAIN_ARBITRUM_ID,
        CHAIN_AVALANCHE_ID,
    ]


class MalformedSnapshotError(ValueError):
    """Raised when a snapshot carries an invalid address or an unparseable number."""
