import os

from web3 import Web3

from ops.utils import json_file, log
from ops.utils.batch_builder import FinalizedBatch, Operation
from ops.utils.calldata import encode_call, to_payload
from ops.utils.proposal_sink import BATCH_HISTORY_DIR

PROPOSE_SIGNATURE = "propose(address[],uint256[],bytes[],string)"
GOVERNOR_ORIGIN = "governor"


def governor_proposal(batch, description):
    """
    The arguments of `Governor.propose` for a batch: one entry per
    operation, in batch order.
    """
    return {
        "targets": [Web3.to_checksum_address(op.target) for op in batch.operations],
        "values": [int(op.value) for op in batch.operations],
        "calldatas": [to_payload(op.payload) for op in batch.operations],
        "description": description,
    }


def propose_calldata(proposal):
    return encode_call(
        PROPOSE_SIGNATURE,
        proposal["targets"],
        proposal["values"],
        proposal["calldatas"],
        proposal["description"],
    )


class GovernorSink:
    """
    Submits a batch as an on-chain governor proposal instead of a Safe batch.

    The `propose` call is made by the proposer Safe (`olympus.multisig.governor`),
    so it goes through the wrapped Safe sink as a single operation: a dry run
    writes and simulates it, `--send` proposes it to the Safe for signing.
    """

    def __init__(self, chain, governor, safe_sink, description=None, history_dir=BATCH_HISTORY_DIR):
        self.chain = chain
        self.governor = Web3.to_checksum_address(governor)
        self.safe_sink = safe_sink
        self.description = description
        self.history_dir = history_dir

    def submit(self, batch, label):
        proposal = governor_proposal(batch, self.description or label)

        log.h2(f"Governor proposal `{proposal['description']}` on {self.governor}")
        for index, op in enumerate(batch.operations, start=1):
            log.operation(index, op)

        filename = json_file.save(
            os.path.join(self.history_dir, self.chain, f"{label}-proposal.json"),
            dict(proposal, governor=self.governor, calldatas=["0x" + data.hex() for data in proposal["calldatas"]]),
        )
        log.h3(f"Proposal inputs written to {filename}")

        propose = Operation(
            self.governor,
            propose_calldata(proposal),
            description=f"propose {len(batch)} actions to the governor",
        )
        result = self.safe_sink.submit(FinalizedBatch((propose,), batch.origin), label)
        result.update(batch=batch, proposal_file=filename, actions=len(batch))
        return result
