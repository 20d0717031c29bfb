import asyncio
from types import SimpleNamespace

from backend.core.pause_core.near_rpc import NearRpcError

NEAR_TEST_SEED = "air minute wish amazing detect animal acoustic robot basket web brisk fragile"
EVM_TEST_SEED = "test test test test test test test test test test test junk"

# m/44'/397'/2' of NEAR_TEST_SEED (the "local" chain key)
LOCAL_PUBLIC_KEY = "ed25519:3vTuPLeEkCDw6HL6bovQhnyXMsGVD6w8RhZMFSTfmqT2"
LOCAL_IMPLICIT_ACCOUNT = "2b699386702a805463a4d9f04741e1311dcbb28c2a733afe2361e99c41b35165"
# m/44'/397'/0' (mainnet)
MAINNET_IMPLICIT_ACCOUNT = "e1394dca4a0795023c37b983cf50e707a1c274521b9d386d1d9990d1506828c0"

# m/44'/60'/0'/0/0 and /0/1 of EVM_TEST_SEED
ETHEREUM_SIGNER = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
AURORA_SIGNER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"

CONTRACT = "0x5FbDB2315678afecb367f032d93F642f64180aa3"


# ---------------------------------------------------------------------
# NEAR fakes
# ---------------------------------------------------------------------
class FakeNearRpc:
    """
    view_function answers from ``views``: a value is returned, an exception
    instance is raised, a missing method raises MethodNotFound like a node.
    """

    def __init__(self, views=None, nonce=41, block_hash="11111111111111111111111111111111"):
        self.views = dict(views or {})
        self.nonce = nonce
        self.block_hash = block_hash
        self.view_calls = []
        self.broadcasts = []

    async def view_function(self, contract_id, method_name, args=None):
        self.view_calls.append((contract_id, method_name, args))
        if method_name not in self.views:
            raise NearRpcError(f"RPC error query: MethodNotFound {method_name}")
        value = self.views[method_name]
        if isinstance(value, BaseException):
            raise value
        return value

    async def view_access_key(self, account_id, public_key):
        return {"nonce": self.nonce, "permission": "FullAccess"}

    async def latest_block_hash(self):
        return self.block_hash

    async def broadcast_tx_commit(self, signed_tx_b64):
        self.broadcasts.append(signed_tx_b64)
        return {"status": {"SuccessValue": ""}}


class RecordingNearAccount:
    def __init__(self, account_id, network_id, node_url, error=None, delay=0.0):
        self.account_id = account_id
        self.network_id = network_id
        self.node_url = node_url
        self.error = error
        self.delay = delay
        self.calls = []

    async def function_call(self, contract_id, method_name, args, *, gas, deposit):
        self.calls.append(
            {"contract_id": contract_id, "method_name": method_name, "args": args, "gas": gas, "deposit": deposit}
        )
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return {"status": {"SuccessValue": ""}}


class RecordingAccountFactory:
    def __init__(self, error=None, delay=0.0):
        self.error = error
        self.delay = delay
        self.accounts = []

    def __call__(self, account_id, network_id, node_url):
        account = RecordingNearAccount(account_id, network_id, node_url, self.error, self.delay)
        self.accounts.append(account)
        return account


# ---------------------------------------------------------------------
# EVM fakes (only the AsyncWeb3 surface the dispatcher touches)
# ---------------------------------------------------------------------
class FakeContractFunction:
    def __init__(self, w3, name):
        self._w3 = w3
        self._name = name

    def __call__(self):
        self._w3.called_methods.append(self._name)
        return self

    async def build_transaction(self, params):
        if self._w3.build_error is not None:
            raise self._w3.build_error
        return {
            "to": self._w3.contract_address,
            "value": 0,
            "gas": 60_000,
            "gasPrice": 1_000_000_000,
            "nonce": params["nonce"],
            "chainId": params["chainId"],
            "data": "0x8456cb59",
        }


class FakeEth:
    def __init__(self, w3):
        self._w3 = w3

    @property
    def chain_id(self):
        # AsyncEth.chain_id is awaited
        async def _chain_id():
            self._w3.chain_id_requests += 1
            return self._w3.chain_id

        return _chain_id()

    def contract(self, address, abi):
        self._w3.contract_address = address
        self._w3.abi = abi
        return SimpleNamespace(
            functions=SimpleNamespace(
                pause=FakeContractFunction(self._w3, "pause"),
                unPause=FakeContractFunction(self._w3, "unPause"),
            )
        )

    async def get_transaction_count(self, address):
        self._w3.nonce_requests.append(address)
        return 7

    async def send_raw_transaction(self, raw):
        if self._w3.send_error is not None:
            raise self._w3.send_error
        self._w3.raw_transactions.append(bytes(raw))
        return bytes.fromhex("ab" * 32)


class FakeWeb3:
    def __init__(self, rpc_url, chain_id, build_error=None, send_error=None):
        self.rpc_url = rpc_url
        self.chain_id = chain_id
        self.build_error = build_error
        self.send_error = send_error
        self.contract_address = None
        self.abi = None
        self.called_methods = []
        self.nonce_requests = []
        self.raw_transactions = []
        self.chain_id_requests = 0
        self.eth = FakeEth(self)


class FakeWeb3Factory:
    """Builds FakeWeb3 nodes that report ``chain_id``."""

    def __init__(self, chain_id=1, build_error=None, send_error=None):
        self.chain_id = chain_id
        self.build_error = build_error
        self.send_error = send_error
        self.instances = []

    def __call__(self, rpc_url):
        w3 = FakeWeb3(rpc_url, self.chain_id, self.build_error, self.send_error)
        self.instances.append(w3)
        return w3


