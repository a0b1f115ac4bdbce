import webbrowser

import requests
from web3 import Web3

from config.Chains import CHAINS, chain_by_id
from ops.utils import log
from ops.utils.calldata import encode_multisend, to_payload
from ops.utils.constants import CALL, DELEGATE_CALL, MULTISEND_CALL_ONLY_ADDR, ZERO_ADDRESS
from ops.utils.errors import ProposalError, SafeAccountError, StateReadError

SAFE_ABI = [
    {
        "inputs": [
            {"name": "to", "type": "address"},
            {"name": "value", "type": "uint256"},
            {"name": "data", "type": "bytes"},
            {"name": "operation", "type": "uint8"},
            {"name": "safeTxGas", "type": "uint256"},
            {"name": "baseGas", "type": "uint256"},
            {"name": "gasPrice", "type": "uint256"},
            {"name": "gasToken", "type": "address"},
            {"name": "refundReceiver", "type": "address"},
            {"name": "nonce", "type": "uint256"}
        ],
        "name": "getTransactionHash",
        "outputs": [{"name": "", "type": "bytes32"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "nonce",
        "outputs": [{"name": "", "type": "uint256"}],
        "stateMutability": "view",
        "type": "function"
    },
    {
        "inputs": [],
        "name": "getOwners",
        "outputs": [{"name": "", "type": "address[]"}],
        "stateMutability": "view",
        "type": "function"
    }
]


def safe_service_url_for(chain_id):
    _, chain = chain_by_id(chain_id)
    if chain is None or not chain.get("safe_service"):
        raise SafeAccountError(f"No Safe Transaction Service URL for chain {chain_id}")
    return chain["safe_service"]


def build_safe_transaction(operations):
    """
    Turns an ordered list of operations into the single Safe transaction that
    executes them: a plain CALL for one operation, a DELEGATECALL to
    MultiSendCallOnly for several (executed in order, reverting as a whole).
    """
    if len(operations) == 1:
        op = operations[0]
        return {
            "to": Web3.to_checksum_address(op.target),
            "value": int(op.value),
            "data": "0x" + to_payload(op.payload).hex(),
            "operation": CALL,
        }

    return {
        "to": MULTISEND_CALL_ONLY_ADDR,
        "value": 0,
        "data": "0x" + encode_multisend(operations).hex(),
        "operation": DELEGATE_CALL,
    }


class SafeAccount:
    def __init__(self, safe_address, rpc_url=None, safe_transaction_service_url=None, sender_address=None, w3=None, open_browser=True):
        self.address = Web3.to_checksum_address(safe_address)
        self.w3 = w3 if w3 is not None else Web3(Web3.HTTPProvider(rpc_url))
        self.sender_address = sender_address  # The Safe owner proposing the transaction
        self.open_browser = open_browser

        # Safe Transaction Service URL
        if safe_transaction_service_url:
            self.safe_service_url = safe_transaction_service_url.rstrip("/")
        else:
            # Auto-detect based on chain
            self.safe_service_url = safe_service_url_for(self.w3.eth.chain_id)

        self.safe_contract = self.w3.eth.contract(
            address=self.address,
            abi=SAFE_ABI
        )

        # Verify sender is a Safe owner
        if sender_address and not self._verify_safe_owner(sender_address):
            raise SafeAccountError(f"Address {sender_address} is not a Safe owner", self.address)

    def _verify_safe_owner(self, address):
        """Verify that an address is a Safe owner"""
        owners = self._get_safe_owners()
        return address.lower() in [owner.lower() for owner in owners]

    def propose(self, operations):
        """
        Proposes the operations as one Safe transaction and returns
        `{"safeTxHash": ..., "url": ...}`. Signing and execution are left to
        the Safe owners.
        """
        safe_tx = self._create_safe_tx(build_safe_transaction(operations))
        url = self._propose_transaction(safe_tx)
        return {"safeTxHash": safe_tx["contractTransactionHash"], "url": url}

    def simulate(self, operation):
        """Runs one operation as an eth_call from the Safe"""
        try:
            self.w3.eth.call({
                "from": self.address,
                "to": Web3.to_checksum_address(operation.target),
                "data": to_payload(operation.payload),
                "value": int(operation.value),
            })
        except Exception as exception:
            raise StateReadError(operation.target, str(operation), f"Simulation reverted: {exception}") from exception

    def _create_safe_tx(self, tx_data):
        """Create a Safe transaction from raw transaction data"""
        # Get Safe owners if sender not provided
        if not self.sender_address:
            owners = self._get_safe_owners()
            if owners:
                self.sender_address = owners[0]  # Use first owner as sender
            else:
                raise SafeAccountError("No Safe owners found and no sender address provided", self.address)

        safe_tx = {
            'to': tx_data['to'],
            'value': str(tx_data.get('value', 0)),
            'data': tx_data.get('data', '0x'),
            'operation': tx_data.get('operation', CALL),
            'safeTxGas': '0',
            'baseGas': '0',
            'gasPrice': '0',
            'gasToken': ZERO_ADDRESS,
            'refundReceiver': ZERO_ADDRESS,
            'nonce': str(self._get_safe_nonce()),
            'sender': self.sender_address,
        }

        safe_tx['contractTransactionHash'] = self._get_contract_tx_hash(safe_tx)
        return safe_tx

    def _get_contract_tx_hash(self, safe_tx):
        """Get the transaction hash the owners will sign from the Safe contract"""
        try:
            contract_tx_hash = self.safe_contract.functions.getTransactionHash(
                safe_tx['to'],
                int(safe_tx['value']),
                bytes.fromhex(safe_tx['data'][2:]),
                int(safe_tx['operation']),
                int(safe_tx['safeTxGas']),
                int(safe_tx['baseGas']),
                int(safe_tx['gasPrice']),
                safe_tx['gasToken'],
                safe_tx['refundReceiver'],
                int(safe_tx['nonce'])
            ).call()
        except Exception as exception:
            raise StateReadError(self.address, "getTransactionHash", str(exception)) from exception

        return "0x" + bytes(contract_tx_hash).hex()

    def _get_safe_nonce(self):
        """Get the next nonce, counting transactions already queued in the service"""
        try:
            on_chain = self.safe_contract.functions.nonce().call()
        except Exception as exception:
            raise StateReadError(self.address, "nonce()", str(exception)) from exception

        response = requests.get(
            f"{self.safe_service_url}/api/v1/safes/{self.address}/multisig-transactions/",
            params={"executed": "false", "nonce__gte": on_chain, "ordering": "-nonce", "limit": 1},
        )
        if response.status_code == 200:
            results = response.json().get('results', [])
            if results:
                return max(on_chain, int(results[0]['nonce']) + 1)
        else:
            log.warn(f"Could not read queued Safe transactions: {response.status_code}")

        return on_chain

    def _get_safe_owners(self):
        try:
            return self.safe_contract.functions.getOwners().call()
        except Exception:
            log.warn("Could not read Safe owners on-chain, asking the Safe Transaction Service")

        response = requests.get(f"{self.safe_service_url}/api/v1/safes/{self.address}/")
        if response.status_code != 200:
            raise StateReadError(self.address, "getOwners()", f"Safe Transaction Service returned {response.status_code}")
        return response.json().get('owners', [])

    def _generate_safe_transaction_link(self, tx_hash):
        """Generate direct link to view transaction in Safe web interface"""
        prefix = "unknown"
        for chain in CHAINS.values():
            if chain.get("safe_service") == self.safe_service_url:
                prefix = chain["safe_app_prefix"]
                break

        return f"https://app.safe.global/transactions/tx?safe={prefix}:{self.address}&id=multisig_{self.address}_{tx_hash}"

    def _propose_transaction(self, safe_tx):
        """Propose transaction to Safe Transaction Service"""
        payload = {
            'to': safe_tx['to'],
            'value': str(safe_tx['value']),
            'data': safe_tx['data'],
            'operation': safe_tx['operation'],
            'safeTxGas': str(safe_tx['safeTxGas']),
            'baseGas': str(safe_tx['baseGas']),
            'gasPrice': str(safe_tx['gasPrice']),
            'gasToken': safe_tx['gasToken'],
            'refundReceiver': safe_tx['refundReceiver'],
            'nonce': safe_tx['nonce'],
            'contractTransactionHash': safe_tx['contractTransactionHash'],
            'sender': self.sender_address,
            'origin': 'governance-batches',
        }

        response = requests.post(
            f"{self.safe_service_url}/api/v1/safes/{self.address}/multisig-transactions/",
            json=payload,
            headers={'Content-Type': 'application/json'}
        )
        if response.status_code != 201:
            log.error(f"Failed to propose transaction: {response.status_code}")
            log.error(f"Response: {response.text}")
            raise ProposalError(response.status_code, response.text)

        url = self._generate_safe_transaction_link(safe_tx['contractTransactionHash'])
        log.info("\nOpen this link to view and sign the transaction in Safe web interface:")
        log.info(url)
        if self.open_browser:
            webbrowser.open(url)
        return url
