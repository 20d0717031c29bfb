"""
Best-effort pause-state detection.

NEAR contracts expose pausing in one of two shapes and nothing says which:

* pause-manager plugin: ``pa_is_paused({"key": "ALL"})`` -> falsy means pausable
* engine contract:     ``get_paused_flags()``            -> ``""`` means pausable

Each probe is tried in that order and answers ``True`` or ``None`` (no
verdict). A probe that raises answers ``None`` too: the method simply does not
exist on this kind of contract, so the error is logged and dropped. This is
the only place in pause_core where errors are not propagated.
"""

from __future__ import annotations

import logging
from typing import Any, Awaitable, Callable, Optional, Protocol, Sequence

from .pause_config import NEAR_DEFAULT_PAUSE_ARGUMENTS

log = logging.getLogger(__name__)


class ViewCaller(Protocol):
    async def view_function(self, contract_id: str, method_name: str, args: Optional[dict] = None) -> Any:
        ...


Probe = Callable[[ViewCaller, str], Awaitable[Optional[bool]]]


async def probe_pause_manager(rpc: ViewCaller, contract_id: str) -> Optional[bool]:
    try:
        result = await rpc.view_function(contract_id, "pa_is_paused", dict(NEAR_DEFAULT_PAUSE_ARGUMENTS))
    except Exception as e:  # noqa: BLE001
        log.debug("pa_is_paused not available on %s: %s", contract_id, e)
        return None
    return True if not result else None


async def probe_engine_flags(rpc: ViewCaller, contract_id: str) -> Optional[bool]:
    try:
        result = await rpc.view_function(contract_id, "get_paused_flags", {})
    except Exception as e:  # noqa: BLE001
        log.debug("get_paused_flags not available on %s: %s", contract_id, e)
        return None
    return True if result == "" else None


NEAR_PROBES: Sequence[Probe] = (probe_pause_manager, probe_engine_flags)


class PauseStateProbe:
    def __init__(self, probes: Sequence[Probe] = NEAR_PROBES):
        self._probes = tuple(probes)

    async def is_pausable(self, rpc: ViewCaller, contract_id: str) -> bool:
        for probe in self._probes:
            verdict = await probe(rpc, contract_id)
            if verdict is not None:
                return verdict
        return False

    @staticmethod
    async def is_evm_pausable(contract_id: str) -> bool:
        # Placeholder: no on-chain inspection yet, every EVM contract is
        # reported pausable. Kept async so callers don't change once it does I/O.
        return True
