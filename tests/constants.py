from web3 import Web3

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# checksummed test addresses
KERNEL = "0x1111111111111111111111111111111111111111"
ROLES = "0x2222222222222222222222222222222222222222"
ROLES_ADMIN = "0x3333333333333333333333333333333333333333"
BRIDGE = "0x4444444444444444444444444444444444444444"
REMOTE_BRIDGE = "0x5555555555555555555555555555555555555555"
TOKEN_POOL = "0x6666666666666666666666666666666666666666"
DAO_SAFE = "0x7777777777777777777777777777777777777777"
POLICY_SAFE = "0x8888888888888888888888888888888888888888"
MINTR = "0x9999999999999999999999999999999999999999"
ALICE = Web3.to_checksum_address("0x" + "aa" * 20)
BOB = Web3.to_checksum_address("0x" + "bb" * 20)
GOVERNOR = Web3.to_checksum_address("0x" + "cc" * 20)
PROPOSER_SAFE = Web3.to_checksum_address("0x" + "dd" * 20)

SVM_PROGRAM = "0x" + "ab" * 32

ENV_TABLE = {
    "current": {
        "sepolia": {
            "olympus": {
                "Kernel": KERNEL,
                "Governor": GOVERNOR,
                "modules": {"ROLES": ROLES, "MINTR": MINTR},
                "policies": {
                    "RolesAdmin": ROLES_ADMIN,
                    "CrossChainBridge": BRIDGE,
                    "CCIPTokenPool": TOKEN_POOL,
                    "Legacy": ZERO_ADDRESS,
                },
                "multisig": {
                    "dao": DAO_SAFE,
                    "policy": POLICY_SAFE,
                    "emergency": ZERO_ADDRESS,
                    "governor": PROPOSER_SAFE,
                },
            },
        },
        "arbitrum-sepolia": {
            "olympus": {
                "Kernel": KERNEL,
                "policies": {"CrossChainBridge": REMOTE_BRIDGE},
                "multisig": {"dao": DAO_SAFE},
            },
        },
        "base-sepolia": {
            "olympus": {
                "policies": {"CrossChainBridge": ZERO_ADDRESS},
            },
        },
        "solana-devnet": {
            "olympus": {"bridge": {"program": SVM_PROGRAM}},
        },
    }
}
