# chain categories
CANONICAL = "canonical"
PERIPHERAL = "peripheral"
SVM = "svm"


CHAINS = {
    # canonical (mint) chains
    "mainnet": {
        "category": CANONICAL,
        "chain_id": 1,
        "lz_endpoint_id": 101,
        "safe_service": "https://safe-transaction-mainnet.safe.global",
        "safe_app_prefix": "eth",
        "alchemy": "eth-mainnet",
    },
    "sepolia": {
        "category": CANONICAL,
        "chain_id": 11155111,
        "lz_endpoint_id": 10161,
        "safe_service": "https://safe-transaction-sepolia.safe.global",
        "safe_app_prefix": "sep",
        "alchemy": "eth-sepolia",
    },
    # peripheral (bridged) evm chains
    "arbitrum": {
        "category": PERIPHERAL,
        "chain_id": 42161,
        "lz_endpoint_id": 110,
        "safe_service": "https://safe-transaction-arbitrum.safe.global",
        "safe_app_prefix": "arb1",
        "alchemy": "arb-mainnet",
    },
    "arbitrum-sepolia": {
        "category": PERIPHERAL,
        "chain_id": 421614,
        "lz_endpoint_id": 10231,
        "safe_service": "https://safe-transaction-arbitrum-sepolia.safe.global",
        "safe_app_prefix": "arb-sep",
        "alchemy": "arb-sepolia",
    },
    "base": {
        "category": PERIPHERAL,
        "chain_id": 8453,
        "lz_endpoint_id": 184,
        "safe_service": "https://safe-transaction-base.safe.global",
        "safe_app_prefix": "base",
        "alchemy": "base-mainnet",
    },
    "base-sepolia": {
        "category": PERIPHERAL,
        "chain_id": 84532,
        "lz_endpoint_id": 10245,
        "safe_service": "https://safe-transaction-base-sepolia.safe.global",
        "safe_app_prefix": "basesep",
        "alchemy": "base-sepolia",
    },
    "optimism": {
        "category": PERIPHERAL,
        "chain_id": 10,
        "lz_endpoint_id": 111,
        "safe_service": "https://safe-transaction-optimism.safe.global",
        "safe_app_prefix": "oeth",
        "alchemy": "opt-mainnet",
    },
    "polygon": {
        "category": PERIPHERAL,
        "chain_id": 137,
        "lz_endpoint_id": 109,
        "safe_service": "https://safe-transaction-polygon.safe.global",
        "safe_app_prefix": "matic",
        "alchemy": "polygon-mainnet",
    },
    "berachain": {
        "category": PERIPHERAL,
        "chain_id": 80094,
        "lz_endpoint_id": 362,
        "safe_service": "https://safe-transaction-berachain.safe.global",
        "safe_app_prefix": "berachain",
        "alchemy": "berachain-mainnet",
    },
    # svm chains (no evm chain id, no safe)
    "solana": {
        "category": SVM,
        "ccip_selector": 124615329519749607,
    },
    "solana-devnet": {
        "category": SVM,
        "ccip_selector": 16423721717087811551,
    },
}


def chain_by_id(chain_id):
    for name, chain in CHAINS.items():
        if chain.get("chain_id") == chain_id:
            return name, chain
    return None, None
