from __future__ import annotations

from enum import Enum
from typing import Any, Optional


class ErrorCode(str, Enum):
    INVALID_PARAMETERS = "INVALID_PARAMETERS"
    NEAR_PAUSE_ERROR = "NEAR_PAUSE_ERROR"
    EVM_PAUSE_ERROR = "EVM_PAUSE_ERROR"
    EVM_UNPAUSE_ERROR = "EVM_UNPAUSE_ERROR"


class PauseSdkError(Exception):
    """
    Structured error raised by pause / unpause / is_pausable.

    ``code`` is one of :class:`ErrorCode` and stays stable across releases;
    ``reason`` keeps the exception that triggered it (also chained as
    ``__cause__``).
    """

    def __init__(self, code: ErrorCode | str, message: str, reason: Optional[BaseException | Any] = None):
        super().__init__(message)
        self.code = ErrorCode(code)
        self.message = message
        self.reason = reason

    def __str__(self) -> str:
        base = f"[{self.code.value}] {self.message}"
        if self.reason is not None:
            base = f"{base}: {self.reason}"
        return base


class DerivationError(ValueError):
    """Seed phrase or derivation path could not produce a key."""


def invalid_parameters() -> PauseSdkError:
    return PauseSdkError(ErrorCode.INVALID_PARAMETERS, "Missing or invalid parameters provided")
