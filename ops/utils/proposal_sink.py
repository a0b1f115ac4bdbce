import os
import time

from config.Chains import CHAINS
from ops.utils import json_file, log
from ops.utils.calldata import to_payload
from ops.utils.errors import ConfigKeyMissingError, StateReadError
from ops.utils.safe_account import SafeAccount

BATCH_HISTORY_DIR = "./batch_history"


def transaction_builder_json(batch, chain, safe_address, label):
    """
    The batch in the Safe Transaction Builder file format, so a dry run can
    be loaded in the Safe web interface as-is.
    """
    return {
        "version": "1.0",
        "chainId": str(CHAINS.get(chain, {}).get("chain_id", "")),
        "createdAt": int(time.time() * 1000),
        "meta": {
            "name": label,
            "description": f"{label} ({batch.origin} multisig)",
            "createdFromSafeAddress": safe_address,
        },
        "transactions": [
            {
                "to": op.target,
                "value": str(op.value),
                "data": "0x" + to_payload(op.payload).hex(),
                "contractMethod": None,
                "contractInputsValues": None,
            }
            for op in batch.operations
        ],
    }


class ProposalSink:
    """
    Receives a finalized batch. With `send` the batch is proposed to the
    origin's Safe; without it the batch is only printed, written to the
    history directory and simulated.
    """

    def __init__(self, chain, origins, send=False, rpc_url=None, history_dir=BATCH_HISTORY_DIR,
                 sender_address=None, safe_service_url=None, simulate=True, safe_factory=SafeAccount):
        self.chain = chain
        self.origins = origins
        self.send = send
        self.rpc_url = rpc_url
        self.history_dir = history_dir
        self.sender_address = sender_address
        self.safe_service_url = safe_service_url or CHAINS.get(chain, {}).get("safe_service")
        self.simulate = simulate
        self._safe_factory = safe_factory

    def safe_address(self, origin):
        address = self.origins.get(origin)
        if not address:
            raise ConfigKeyMissingError(f"olympus.multisig.{origin}", self.chain)
        return address

    def _safe(self, address):
        return self._safe_factory(
            safe_address=address,
            rpc_url=self.rpc_url,
            safe_transaction_service_url=self.safe_service_url,
            sender_address=self.sender_address,
        )

    def _simulate(self, safe_address, batch):
        # each call runs against current state, so an operation depending on
        # an earlier one in the same batch can revert here and still succeed
        # once the whole batch executes
        safe = self._safe(safe_address)
        reverted = []
        for index, op in enumerate(batch.operations, start=1):
            try:
                safe.simulate(op)
                log.h3(f"Operation {index} simulated")
            except StateReadError as exception:
                log.error(f"\tOperation {index} reverted in isolation: {exception}")
                reverted.append(index)
        return reverted

    def submit(self, batch, label):
        safe_address = self.safe_address(batch.origin)

        log.h2(f"Batch `{label}` for the {batch.origin} multisig ({safe_address})")
        for index, op in enumerate(batch.operations, start=1):
            log.operation(index, op)

        filename = json_file.save(
            os.path.join(self.history_dir, self.chain, f"{label}.json"),
            transaction_builder_json(batch, self.chain, safe_address, label),
        )
        log.h3(f"Batch written to {filename}")

        result = {
            "origin": batch.origin,
            "batch": batch,
            "safe": safe_address,
            "operations": len(batch),
            "file": filename,
            "sent": False,
        }

        if not self.send:
            if self.simulate and self.rpc_url:
                result["reverted"] = self._simulate(safe_address, batch)
            log.h3("Dry run: nothing was proposed")
            return result

        proposal = self._safe(safe_address).propose(batch.operations)
        log.h3(f"Proposed Safe transaction {proposal['safeTxHash']}")
        result.update(proposal, sent=True)
        return result
