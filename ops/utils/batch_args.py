from config.Chains import CHAINS
from ops.utils.chain_classifier import ChainClassifier
from ops.utils.constants import ORIGINS


class BatchArgs:
    """
    Everything a batch run needs, built once by the CLI and passed down
    explicitly.
    """

    def __init__(self, chain, env_config, rpc=None, origin="dao", send=False, sender=None, args=None,
                 classifier=None, allow_empty=False):
        self.chain = chain
        self.config = env_config.for_chain(chain)
        self.rpc = rpc
        self.origin = origin
        self.send = send
        self.sender = sender
        self.args = args or {}
        self.classifier = classifier or ChainClassifier.from_chains(CHAINS)
        self.allow_empty = allow_empty

    def origins(self):
        # origin name -> safe address, for the origins configured on this chain
        addresses = {}
        for origin in ORIGINS:
            if self.config.get_optional(f"olympus.multisig.{origin}") is None:
                continue
            address = self.config.get_address(f"olympus.multisig.{origin}", allow_zero=True)
            if address:
                addresses[origin] = address
        return addresses

    def __repr__(self):
        return (f"BatchArgs(chain={self.chain}, origin={self.origin}, send={self.send}, "
                f"rpc={'set' if self.rpc else 'none'}, args={list(self.args.keys())})")
