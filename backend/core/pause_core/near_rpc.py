"""
Minimal async NEAR JSON-RPC client.

Only what the pause dispatcher needs: contract view calls, access-key nonce,
latest block hash and transaction broadcast.
"""

from __future__ import annotations

import base64
import json
import logging
from typing import Any, Dict, Optional

import httpx

log = logging.getLogger(__name__)

_HEADERS = {"Content-Type": "application/json", "User-Agent": "pause_core/NearRpc"}


class NearRpcError(RuntimeError):
    def __init__(self, message: str, data: Any = None):
        super().__init__(message)
        self.data = data


class NearTransactionError(RuntimeError):
    def __init__(self, message: str, failure: Any = None):
        super().__init__(message)
        self.failure = failure


def decode_view_result(raw: list[int] | bytes) -> Any:
    """
    Decode the bytes returned by ``call_function``.

    JSON when possible; an empty return is ``""``; anything else is text.
    """
    data = bytes(raw or b"")
    if not data:
        return ""
    text = data.decode("utf-8", errors="replace")
    try:
        return json.loads(text)
    except ValueError:
        return text


class NearRpcClient:
    def __init__(self, node_url: str, timeout: float = 30.0):
        self.node_url = node_url
        self._timeout = timeout

    async def _call(self, method: str, params: Any) -> Any:
        payload = {"jsonrpc": "2.0", "id": "pause_core", "method": method, "params": params}
        # short-lived client: callers may run each operation on its own loop
        async with httpx.AsyncClient(timeout=self._timeout, headers=_HEADERS) as client:
            try:
                response = await client.post(self.node_url, json=payload)
                response.raise_for_status()
            except httpx.HTTPError as exc:
                raise NearRpcError(f"HTTP failure on {method}: {exc}") from exc

        body: Dict[str, Any] = response.json()
        if body.get("error"):
            err = body["error"]
            cause = (err.get("cause") or {}).get("name") if isinstance(err, dict) else None
            raise NearRpcError(f"RPC error {method}: {cause or err}", data=err)
        result = body.get("result")
        # query errors on older nodes come back inside `result`
        if isinstance(result, dict) and result.get("error"):
            raise NearRpcError(f"RPC error {method}: {result['error']}", data=result)
        return result

    async def view_function(self, contract_id: str, method_name: str, args: Optional[Dict[str, Any]] = None) -> Any:
        args_b64 = base64.b64encode(json.dumps(args or {}).encode("utf-8")).decode("ascii")
        result = await self._call(
            "query",
            {
                "request_type": "call_function",
                "finality": "final",
                "account_id": contract_id,
                "method_name": method_name,
                "args_base64": args_b64,
            },
        )
        return decode_view_result(result.get("result") or [])

    async def view_access_key(self, account_id: str, public_key: str) -> Dict[str, Any]:
        return await self._call(
            "query",
            {
                "request_type": "view_access_key",
                "finality": "final",
                "account_id": account_id,
                "public_key": public_key,
            },
        )

    async def latest_block_hash(self) -> str:
        block = await self._call("block", {"finality": "final"})
        return block["header"]["hash"]

    async def broadcast_tx_commit(self, signed_tx_b64: str) -> Dict[str, Any]:
        outcome = await self._call("broadcast_tx_commit", [signed_tx_b64])
        status = (outcome or {}).get("status") or {}
        if isinstance(status, dict) and "Failure" in status:
            raise NearTransactionError(f"Transaction failed: {status['Failure']}", failure=status["Failure"])
        return outcome
