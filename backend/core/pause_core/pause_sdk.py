"""
Public entry points: ``pause``, ``unpause`` and ``is_pausable``.

Every call validates (network_id, chain_id, account_id) before anything is
awaited, derives a fresh key for the chain, resolves the RPC endpoint and
hands off to exactly one of the NEAR dispatcher, the EVM dispatcher or the
pause-state probe.
"""

from __future__ import annotations

import logging
from typing import Any, Callable, Mapping, Optional

from .chain_registry import ChainDescriptor, ChainFamily, describe, resolve_endpoint
from .evm_dispatcher import EvmDispatcher, build_async_web3
from .key_deriver import KeyDeriver
from .key_store import InMemoryKeyStore
from .near_dispatcher import NearDispatcher
from .near_rpc import NearRpcClient
from .pause_config import PauseConfig
from .pause_errors import invalid_parameters
from .pause_models import (
    NearPauseRequest,
    PausableQuery,
    PauseOperation,
    PauseRequest,
    UnpauseRequest,
    build_pause_request,
)
from .pause_probe import PauseStateProbe, ViewCaller

log = logging.getLogger(__name__)


class PauseSdk:
    def __init__(
        self,
        config: Optional[PauseConfig] = None,
        *,
        key_store: Optional[InMemoryKeyStore] = None,
        key_deriver: Optional[KeyDeriver] = None,
        near_dispatcher: Optional[NearDispatcher] = None,
        evm_dispatcher: Optional[EvmDispatcher] = None,
        probe: Optional[PauseStateProbe] = None,
        near_rpc_factory: Optional[Callable[[str], ViewCaller]] = None,
    ):
        self.config = config or PauseConfig.from_env()
        self.key_store = key_store or InMemoryKeyStore()
        self.key_deriver = key_deriver or KeyDeriver(self.config)
        self.near = near_dispatcher or NearDispatcher(self.key_store, http_timeout_sec=self.config.http_timeout_sec)
        self.evm = evm_dispatcher or EvmDispatcher(build_async_web3)
        self.probe = probe or PauseStateProbe()
        self._near_rpc_factory = near_rpc_factory or self._default_near_rpc

    def _default_near_rpc(self, node_url: str) -> NearRpcClient:
        return NearRpcClient(node_url, self.config.http_timeout_sec)

    # ------------------------------------------------------------------
    # Validation
    # ------------------------------------------------------------------
    @staticmethod
    def validate(network_id: Any, chain_id: Any, account_id: Any) -> ChainDescriptor:
        """Synchronous guard; raises INVALID_PARAMETERS before any I/O."""
        if not network_id or not chain_id or not account_id:
            raise invalid_parameters()
        descriptor = describe(network_id, chain_id)
        if descriptor is None:
            raise invalid_parameters()
        return descriptor

    # ------------------------------------------------------------------
    # Operations
    # ------------------------------------------------------------------
    async def pause(self, request: PauseRequest) -> None:
        descriptor = self.validate(request.network_id, request.chain_id, request.account_id)

        if descriptor.family is ChainFamily.NEAR:
            if not isinstance(request, NearPauseRequest):
                raise invalid_parameters()
            target = request.target or self.config.near_controller_contract
            if not target:
                raise invalid_parameters()

            endpoint = resolve_endpoint(descriptor, self.config, request.node_url)
            credential = self.key_deriver.derive_for_chain(descriptor, request.derivation_path)
            await self.near.delegate_pause(
                target=target,
                account_id=request.account_id,
                credential=credential,
                endpoint=endpoint,
                network_id=str(descriptor.chain_id),
                method_name=request.method_name,
                method_args=request.method_args,
                sender=request.sender,
            )
            return

        await self._invoke_evm(descriptor, request.account_id, PauseOperation.PAUSE)

    async def unpause(self, request: UnpauseRequest) -> None:
        descriptor = self.validate(request.network_id, request.chain_id, request.account_id)
        if descriptor.family is not ChainFamily.EVM:
            # NEAR contracts are only unpaused through their DAO
            raise invalid_parameters()
        await self._invoke_evm(descriptor, request.account_id, PauseOperation.UNPAUSE)

    async def is_pausable(self, query: PausableQuery) -> bool:
        descriptor = self.validate(query.network_id, query.chain_id, query.account_id)
        if descriptor.family is ChainFamily.EVM:
            return await self.probe.is_evm_pausable(query.account_id)

        endpoint = resolve_endpoint(descriptor, self.config, query.node_url)
        return await self.probe.is_pausable(self._near_rpc_factory(endpoint), query.account_id)

    async def _invoke_evm(self, descriptor: ChainDescriptor, account_id: str, operation: PauseOperation) -> None:
        endpoint = resolve_endpoint(descriptor, self.config)
        credential = self.key_deriver.derive_for_chain(descriptor)
        await self.evm.invoke(
            account_id=account_id,
            operation=operation,
            credential=credential,
            endpoint=endpoint,
            chain_id=descriptor.numeric_chain_id,
        )


# ---------------------------------------------------------------------------
# Module-level convenience (one PauseSdk per process)
# ---------------------------------------------------------------------------
_default_sdk: Optional[PauseSdk] = None


def default_sdk() -> PauseSdk:
    global _default_sdk
    if _default_sdk is None:
        _default_sdk = PauseSdk()
    return _default_sdk


async def pause(request: PauseRequest | Mapping[str, Any] | None = None, **opts: Any) -> None:
    if request is None or isinstance(request, Mapping):
        request = build_pause_request(request, **opts)
    await default_sdk().pause(request)


async def unpause(request: UnpauseRequest | Mapping[str, Any] | None = None, **opts: Any) -> None:
    if request is None or isinstance(request, Mapping):
        data = {**(request or {}), **opts}
        request = UnpauseRequest(
            network_id=data.get("network_id", data.get("networkId", "")),
            chain_id=data.get("chain_id", data.get("chainId", "")),
            account_id=data.get("account_id", data.get("accountId", "")),
        )
    await default_sdk().unpause(request)


async def is_pausable(query: PausableQuery | Mapping[str, Any] | None = None, **opts: Any) -> bool:
    if query is None or isinstance(query, Mapping):
        data = {**(query or {}), **opts}
        query = PausableQuery(
            network_id=data.get("network_id", data.get("networkId", "")),
            chain_id=data.get("chain_id", data.get("chainId", "")),
            account_id=data.get("account_id", data.get("accountId", "")),
            node_url=data.get("node_url", data.get("nodeUrl")),
        )
    return await default_sdk().is_pausable(query)
