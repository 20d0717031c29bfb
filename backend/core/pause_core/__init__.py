"""
pause_core – Sonic service module
Pause / unpause / probe contracts on NEAR and EVM chains with keys derived
from a seed phrase (nothing stored on disk).
"""
from .pause_errors import DerivationError, ErrorCode, PauseSdkError
from .pause_models import (
    EvmPauseRequest,
    NearPauseRequest,
    PausableQuery,
    PauseOperation,
    UnpauseRequest,
    build_pause_request,
)
from .pause_sdk import PauseSdk, default_sdk, is_pausable, pause, unpause

__all__ = [
    "DerivationError",
    "ErrorCode",
    "PauseSdkError",
    "EvmPauseRequest",
    "NearPauseRequest",
    "PausableQuery",
    "PauseOperation",
    "UnpauseRequest",
    "build_pause_request",
    "PauseSdk",
    "default_sdk",
    "pause",
    "unpause",
    "is_pausable",
]
