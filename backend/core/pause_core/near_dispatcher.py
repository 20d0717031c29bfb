from __future__ import annotations

import logging
from typing import Any, Callable, Dict, Mapping, Optional

from .key_deriver import Credential
from .key_store import InMemoryKeyStore
from .near_account import NearAccount
from .near_rpc import NearRpcClient
from .pause_config import (
    NEAR_DEFAULT_GAS,
    NEAR_DEFAULT_PAUSE_ARGUMENTS,
    NEAR_DEFAULT_PAUSE_METHOD,
    NEAR_DELEGATE_DEPOSIT_YOCTO,
    NEAR_DELEGATE_METHOD,
)
from .pause_errors import ErrorCode, PauseSdkError

log = logging.getLogger(__name__)

AccountFactory = Callable[[str, str, str], NearAccount]


class NearDispatcher:
    """
    Pauses a NEAR contract through its controller: the signer calls
    ``delegate_pause`` on ``target`` which in turn pauses ``account_id``.
    """

    def __init__(
        self,
        key_store: InMemoryKeyStore,
        *,
        account_factory: Optional[AccountFactory] = None,
        http_timeout_sec: float = 30.0,
    ):
        self.key_store = key_store
        self._timeout = http_timeout_sec
        self._account_factory = account_factory or self._default_account

    def _default_account(self, account_id: str, network_id: str, node_url: str) -> NearAccount:
        return NearAccount(account_id, network_id, NearRpcClient(node_url, self._timeout), self.key_store)

    @staticmethod
    def delegate_args(
        account_id: str,
        method_name: Optional[str] = None,
        method_args: Optional[Mapping[str, Any]] = None,
    ) -> Dict[str, Any]:
        return {
            "receiver_id": account_id,
            "pause_method_name": method_name or NEAR_DEFAULT_PAUSE_METHOD,
            "pause_arguments": dict(method_args if method_args is not None else NEAR_DEFAULT_PAUSE_ARGUMENTS),
        }

    async def delegate_pause(
        self,
        *,
        target: str,
        account_id: str,
        credential: Credential,
        endpoint: str,
        network_id: str,
        method_name: Optional[str] = None,
        method_args: Optional[Mapping[str, Any]] = None,
        sender: Optional[str] = None,
    ) -> Dict[str, Any]:
        signer = sender or credential.implicit_account_id
        log.info("Signer: %s", signer)
        try:
            if not signer:
                raise ValueError("No sender and no implicit account to sign with")
            async with self.key_store.lock(network_id, signer):
                self.key_store.set_key(network_id, signer, credential)
                account = self._account_factory(signer, network_id, endpoint)
                return await account.function_call(
                    target,
                    NEAR_DELEGATE_METHOD,
                    self.delegate_args(account_id, method_name, method_args),
                    gas=NEAR_DEFAULT_GAS,
                    deposit=NEAR_DELEGATE_DEPOSIT_YOCTO,
                )
        except Exception as e:  # noqa: BLE001
            log.error("delegate_pause on %s for %s failed: %s", target, account_id, e)
            raise PauseSdkError(
                ErrorCode.NEAR_PAUSE_ERROR,
                "Error occurred while executing delegate_pause on NEAR chain",
                e,
            ) from e
