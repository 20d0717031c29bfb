from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Mapping, Optional, Union

from .pause_config import (
    ETH_INDEX_BY_CHAIN_ID,
    ETHEREUM_NETWORK,
    NEAR_INDEX_BY_CHAIN_ID,
    NEAR_NETWORK,
    PauseConfig,
)
from .pause_errors import invalid_parameters

log = logging.getLogger(__name__)

Chainish = Union[int, str]


class ChainFamily(str, Enum):
    EVM = "evm"
    NEAR = "near"


@dataclass(frozen=True)
class ChainDescriptor:
    family: ChainFamily
    chain_id: Chainish            # registry key, exactly as supplied
    index: str                    # derivation-path suffix registered for the chain
    numeric_chain_id: Optional[int] = None  # EVM only; what the provider is bound to


def _is_registered(chain_id: Any, registry: Mapping[Any, str]) -> bool:
    # bool is an int subclass; True must not pass for chain 1
    if isinstance(chain_id, bool) or not isinstance(chain_id, (int, str)):
        return False
    return chain_id in registry


def is_supported_evm_chain_id(chain_id: Any) -> bool:
    return _is_registered(chain_id, ETH_INDEX_BY_CHAIN_ID)


def is_supported_near_chain_id(chain_id: Any) -> bool:
    return _is_registered(chain_id, NEAR_INDEX_BY_CHAIN_ID)


def classify(network_id: Any, chain_id: Any) -> Optional[ChainFamily]:
    """
    Map (network_id, chain_id) to a chain family, ``None`` if unsupported.

    Membership is tested on the value as given: ``"1"`` is not chain ``1``.
    """
    if network_id == ETHEREUM_NETWORK and is_supported_evm_chain_id(chain_id):
        return ChainFamily.EVM
    if network_id == NEAR_NETWORK and is_supported_near_chain_id(chain_id):
        return ChainFamily.NEAR
    return None


def describe(network_id: Any, chain_id: Any) -> Optional[ChainDescriptor]:
    family = classify(network_id, chain_id)
    if family is ChainFamily.EVM:
        return ChainDescriptor(
            family=family,
            chain_id=chain_id,
            index=ETH_INDEX_BY_CHAIN_ID[chain_id],
            numeric_chain_id=int(chain_id),
        )
    if family is ChainFamily.NEAR:
        return ChainDescriptor(family=family, chain_id=chain_id, index=NEAR_INDEX_BY_CHAIN_ID[chain_id])
    return None


def resolve_endpoint(descriptor: ChainDescriptor, config: PauseConfig, override: Optional[str] = None) -> str:
    """
    RPC URL for the chain; ``override`` (sandbox / private node) wins when set.
    A chain with no registered endpoint is INVALID_PARAMETERS.
    """
    if override:
        return override
    urls: Mapping[Any, str] = (
        config.evm_rpc_urls if descriptor.family is ChainFamily.EVM else config.near_rpc_urls
    )
    url = urls.get(descriptor.chain_id)
    if not url:
        log.error("No RPC endpoint registered for chain %r", descriptor.chain_id)
        raise invalid_parameters()
    return url
