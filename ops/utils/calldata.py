from eth_abi.abi import encode
from hexbytes import HexBytes
from web3 import Web3

from ops.utils.constants import CALL

MULTISEND_SIGNATURE = "multiSend(bytes)"


def split_types(types):
    """
    Split a comma separated ABI type list, keeping tuple types like
    `(address,uint256)[]` in one piece.
    """
    parts = []
    depth = 0
    current = ""
    for char in types:
        if char == "(":
            depth += 1
        elif char == ")":
            depth -= 1
        if char == "," and depth == 0:
            parts.append(current.strip())
            current = ""
            continue
        current += char
    if current.strip():
        parts.append(current.strip())
    return parts


def parse_signature(signature):
    """
    Returns `(name, [types])` for a signature such as `grantRole(bytes32,address)`.
    """
    signature = signature.replace(" ", "")
    open_at = signature.find("(")
    if open_at <= 0 or not signature.endswith(")"):
        raise ValueError(f"Invalid function signature: {signature}")
    return signature[:open_at], split_types(signature[open_at + 1:-1])


def selector(signature) -> bytes:
    name, types = parse_signature(signature)
    canonical = f"{name}({','.join(types)})"
    return bytes(Web3.keccak(text=canonical)[:4])


def encode_call(signature, *args) -> bytes:
    _, types = parse_signature(signature)
    if len(types) != len(args):
        raise ValueError(
            f"{signature} expects {len(types)} arguments, got {len(args)}")
    processed_args = []
    for arg in args:
        # contract-like objects are passed by address
        if hasattr(arg, "address"):
            processed_args.append(arg.address)
        else:
            processed_args.append(arg)
    return selector(signature) + encode(types, processed_args)


def to_bytes32(text) -> bytes:
    return _right_pad(text, 32)


def to_bytes5(text) -> bytes:
    # kernel keycodes are 5 upper case ascii characters
    return _right_pad(text, 5)


def _right_pad(text, size):
    raw = text.encode() if isinstance(text, str) else bytes(text)
    if len(raw) > size:
        raise ValueError(f"`{text}` does not fit in {size} bytes")
    return raw.ljust(size, b"\x00")


def to_payload(payload) -> bytes:
    # accepts bytes or a 0x-prefixed hex string
    return bytes(HexBytes(payload))


def encode_multisend(operations) -> bytes:
    """
    Packs operations the way Safe's MultiSendCallOnly expects them:
    operation (uint8) ++ to (address) ++ value (uint256) ++ data length (uint256) ++ data
    """
    packed = b""
    for op in operations:
        data = to_payload(op.payload)
        packed += (
            CALL.to_bytes(1, "big")
            + bytes(HexBytes(Web3.to_checksum_address(op.target)))
            + int(op.value).to_bytes(32, "big")
            + len(data).to_bytes(32, "big")
            + data
        )
    return encode_call(MULTISEND_SIGNATURE, packed)
