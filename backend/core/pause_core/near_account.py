from __future__ import annotations

import logging
from typing import Any, Dict

from .key_store import InMemoryKeyStore
from .near_rpc import NearRpcClient
from .near_transactions import FunctionCall, sign_transaction, signing_key_from_secret
from .pause_config import NEAR_DEFAULT_GAS

log = logging.getLogger(__name__)


class NearAccount:
    """
    A NEAR account able to sign with whatever key the key store holds for it.

    The key is looked up at call time, so re-registering a key for the
    account is picked up by the next call.
    """

    def __init__(self, account_id: str, network_id: str, rpc: NearRpcClient, key_store: InMemoryKeyStore):
        self.account_id = account_id
        self.network_id = network_id
        self.rpc = rpc
        self._key_store = key_store

    async def function_call(
        self,
        contract_id: str,
        method_name: str,
        args: Dict[str, Any],
        *,
        gas: int = NEAR_DEFAULT_GAS,
        deposit: int = 0,
    ) -> Dict[str, Any]:
        credential = self._key_store.require_key(self.network_id, self.account_id)
        signing_key = signing_key_from_secret(credential.secret_key)

        access_key = await self.rpc.view_access_key(self.account_id, credential.public_key)
        nonce = int(access_key["nonce"]) + 1
        block_hash = await self.rpc.latest_block_hash()

        signed = sign_transaction(
            signing_key,
            signer_id=self.account_id,
            nonce=nonce,
            receiver_id=contract_id,
            block_hash=block_hash,
            call=FunctionCall(method_name=method_name, args=args, gas=gas, deposit=deposit),
        )
        log.debug("Broadcasting %s.%s from %s (nonce=%s)", contract_id, method_name, self.account_id, nonce)
        return await self.rpc.broadcast_tx_commit(signed)

    async def view_function(self, contract_id: str, method_name: str, args: Dict[str, Any] | None = None) -> Any:
        return await self.rpc.view_function(contract_id, method_name, args)
