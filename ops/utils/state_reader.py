from eth_abi.abi import decode
from web3 import Web3

from ops.utils.calldata import encode_call
from ops.utils.errors import StateReadError


class StateReader:
    """
    Synchronous view calls against the live deployment.

    Every call is a fresh `eth_call`; nothing is cached or retried here.
    """

    def __init__(self, rpc_url=None, w3=None):
        if w3 is None and not rpc_url:
            raise ValueError("StateReader needs an rpc url or a Web3 instance")
        self.w3 = w3 if w3 is not None else Web3(Web3.HTTPProvider(rpc_url))

    def call(self, target, signature, args=(), returns=(), sender=None):
        """
        Calls `signature` on `target` and decodes the result with `returns`.
        A single return type yields a single value, several yield a tuple.
        """
        descriptor = f"{signature}{tuple(args) if args else '()'}"
        try:
            data = encode_call(signature, *args)
            tx = {"to": Web3.to_checksum_address(target), "data": data}
            if sender:
                tx["from"] = Web3.to_checksum_address(sender)
            raw = self.w3.eth.call(tx)
            if not returns:
                return None
            values = decode(list(returns), bytes(raw))
        except Exception as exception:
            raise StateReadError(target, descriptor, str(exception) or "State read failed") from exception

        return values[0] if len(values) == 1 else tuple(values)

    def chain_id(self):
        try:
            return self.w3.eth.chain_id
        except Exception as exception:
            raise StateReadError(self.w3.provider, "eth_chainId", str(exception) or "State read failed") from exception
