from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, Mapping, Optional, Union

from .pause_config import NEAR_NETWORK
from .pause_errors import invalid_parameters


class PauseOperation(str, Enum):
    PAUSE = "pause"
    UNPAUSE = "unpause"

    @property
    def contract_method(self) -> str:
        # deployed Pausable contracts spell it unPause
        return "pause" if self is PauseOperation.PAUSE else "unPause"


# ---------------- requests ----------------

@dataclass(frozen=True)
class EvmPauseRequest:
    network_id: str
    chain_id: Union[int, str]
    account_id: str  # contract address


@dataclass(frozen=True)
class NearPauseRequest:
    network_id: str
    chain_id: str
    account_id: str                       # contract being paused
    target: Optional[str] = None          # controller contract; config default when unset
    method_name: Optional[str] = None
    method_args: Optional[Mapping[str, Any]] = None
    sender: Optional[str] = None          # defaults to the implicit account of the derived key
    node_url: Optional[str] = None
    derivation_path: Optional[str] = None


PauseRequest = Union[EvmPauseRequest, NearPauseRequest]


@dataclass(frozen=True)
class UnpauseRequest:
    network_id: str
    chain_id: Union[int, str]
    account_id: str


@dataclass(frozen=True)
class PausableQuery:
    network_id: str
    chain_id: Union[int, str]
    account_id: str
    node_url: Optional[str] = None


_NEAR_ALIASES: Dict[str, str] = {
    "networkId": "network_id",
    "chainId": "chain_id",
    "accountId": "account_id",
    "methodName": "method_name",
    "methodArgs": "method_args",
    "nodeUrl": "node_url",
    "derivationPath": "derivation_path",
}


_REQUIRED = ("network_id", "chain_id", "account_id")
_NEAR_OPTIONAL = ("target", "method_name", "method_args", "sender", "node_url", "derivation_path")


def _snake(opts: Mapping[str, Any]) -> Dict[str, Any]:
    return {_NEAR_ALIASES.get(k, k): v for k, v in opts.items()}


def build_pause_request(opts: Optional[Mapping[str, Any]] = None, **kwargs: Any) -> PauseRequest:
    """
    Build the request variant selected by ``network_id``.

    Accepts snake_case or camelCase keys. Missing required fields become
    ``""`` so validation reports them as INVALID_PARAMETERS; unknown keys are
    rejected here. NEAR-only keys are ignored for other networks, and unknown
    network ids fall back to the EVM shape.
    """
    data = _snake({**(opts or {}), **kwargs})
    if set(data) - set(_REQUIRED) - set(_NEAR_OPTIONAL):
        raise invalid_parameters()
    base = {k: data.get(k, "") for k in _REQUIRED}
    if base["network_id"] == NEAR_NETWORK:
        return NearPauseRequest(**base, **{k: data.get(k) for k in _NEAR_OPTIONAL})
    return EvmPauseRequest(**base)
