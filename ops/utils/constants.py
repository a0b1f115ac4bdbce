ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

# Safe operation types
CALL = 0
DELEGATE_CALL = 1

# Safe MultiSendCallOnly v1.3.0 (same address on every EVM chain the Safe team deployed to)
MULTISEND_CALL_ONLY_ADDR = "0x40A2aCCbd92BCA938b02010E17A5b8929b49130D"

ORIGINS = ("dao", "policy", "emergency", "governor")
