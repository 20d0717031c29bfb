from __future__ import annotations

import logging
from typing import Any, Callable, Optional

from eth_account import Account
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from .key_deriver import Credential
from .pausable_abi import PAUSABLE_ABI
from .pause_errors import ErrorCode, PauseSdkError
from .pause_models import PauseOperation

log = logging.getLogger(__name__)

Web3Factory = Callable[[str], Any]

_FAILURES = {
    PauseOperation.PAUSE: (ErrorCode.EVM_PAUSE_ERROR, "Error occurred while executing pause on EVM chain"),
    PauseOperation.UNPAUSE: (ErrorCode.EVM_UNPAUSE_ERROR, "Error occurred while executing unpause on EVM chain"),
}


def build_async_web3(rpc_url: str) -> AsyncWeb3:
    """Async JSON-RPC connection; the dispatcher checks its chain id before signing."""
    return AsyncWeb3(AsyncHTTPProvider(rpc_url))


class EvmDispatcher:
    """Direct ``pause()`` / ``unPause()`` on a Pausable contract, signed locally."""

    def __init__(self, web3_factory: Optional[Web3Factory] = None):
        self._web3_factory = web3_factory or build_async_web3

    async def invoke(
        self,
        *,
        account_id: str,
        operation: PauseOperation,
        credential: Credential,
        endpoint: str,
        chain_id: int,
    ) -> str:
        method = operation.contract_method
        try:
            w3 = self._web3_factory(endpoint)
            remote_chain_id = await w3.eth.chain_id
            if remote_chain_id != chain_id:
                raise ValueError(f"RPC {endpoint} serves chain {remote_chain_id}, expected {chain_id}")
            wallet = Account.from_key(credential.secret_key)
            log.info("Signer: %s", wallet.address)

            contract = w3.eth.contract(address=Web3.to_checksum_address(account_id), abi=PAUSABLE_ABI)
            fn = getattr(contract.functions, method)()
            nonce = await w3.eth.get_transaction_count(wallet.address)
            tx = await fn.build_transaction({"from": wallet.address, "nonce": nonce, "chainId": chain_id})

            signed = wallet.sign_transaction(tx)
            tx_hash = await w3.eth.send_raw_transaction(signed.raw_transaction)
        except Exception as e:  # noqa: BLE001
            code, message = _FAILURES[operation]
            log.error("%s on %s (chain %s) failed: %s", method, account_id, chain_id, e)
            raise PauseSdkError(code, message, e) from e

        tx_hex = bytes(tx_hash).hex()
        log.info("%s sent to %s: 0x%s", method, account_id, tx_hex)
        return "0x" + tx_hex
