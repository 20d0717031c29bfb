from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field
from pathlib import Path
from types import MappingProxyType
from typing import Any, Dict, Mapping, Optional

from dotenv import load_dotenv

log = logging.getLogger(__name__)

# ---------------- networks / chains ----------------

ETHEREUM_NETWORK = "ethereum"
NEAR_NETWORK = "near"

ETHEREUM = 1
AURORA = 1313161554

MAINNET = "mainnet"
TESTNET = "testnet"
LOCALNET = "local"

# ---------------- derivation ----------------

ETHEREUM_DERIVATION_PATH = "m/44'/60'/0'"
NEAR_DERIVATION_PATH = "m/44'/397'"

# Test-only phrases; real deployments override them through the env.
DEFAULT_ETHEREUM_MNEMONIC = "test test test test test test test test test test test junk"
DEFAULT_NEAR_MNEMONIC = "air minute wish amazing detect animal acoustic robot basket web brisk fragile"

ETH_INDEX_BY_CHAIN_ID: Mapping[int, str] = MappingProxyType({
    ETHEREUM: "0/0",
    AURORA: "0/1",
})
NEAR_INDEX_BY_CHAIN_ID: Mapping[str, str] = MappingProxyType({
    MAINNET: "0",
    TESTNET: "1",
    LOCALNET: "2",
})

DEFAULT_EVM_RPC_URLS: Mapping[int, str] = MappingProxyType({
    ETHEREUM: "https://eth.llamarpc.com",
    AURORA: "https://mainnet.aurora.dev",
})
DEFAULT_NEAR_RPC_URLS: Mapping[str, str] = MappingProxyType({
    MAINNET: "https://free.rpc.fastnear.com",
    TESTNET: "https://test.rpc.fastnear.com",
    LOCALNET: "http://127.0.0.1:3030",
})

# ---------------- NEAR call shape ----------------

NEAR_DELEGATE_METHOD = "delegate_pause"
NEAR_DEFAULT_PAUSE_METHOD = "pa_pause_feature"
NEAR_DEFAULT_PAUSE_ARGUMENTS: Mapping[str, str] = MappingProxyType({"key": "ALL"})
NEAR_DELEGATE_DEPOSIT_YOCTO = 1  # 1 yoctoNEAR, required by the controller
NEAR_DEFAULT_GAS = 30_000_000_000_000  # 30 TGas


def _env(name: str, default: Optional[str] = None) -> Optional[str]:
    """Env var, with unset and blank both meaning ``default``."""
    value = os.getenv(name)
    return value if value and value.strip() else default


CONFIG_FILE_CANDIDATES = (Path("config") / "pause_config.json", Path("pause_config.json"))


def _config_path() -> Optional[Path]:
    """``PAUSE_CONFIG_PATH`` when set, else the first candidate file that exists."""
    explicit = _env("PAUSE_CONFIG_PATH")
    if explicit:
        return Path(explicit) if Path(explicit).is_file() else None
    return next((p for p in CONFIG_FILE_CANDIDATES if p.is_file()), None)


def _read_json_config(path: Optional[Path]) -> Dict[str, Any]:
    if path is None:
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, ValueError) as e:
        log.warning("Ignoring unreadable pause config %s: %s", path, e)
        return {}
    if not isinstance(data, dict):
        log.warning("Ignoring pause config %s: top level is %s, not an object", path, type(data).__name__)
        return {}
    return data


def _section(jcfg: Dict[str, Any], name: str) -> Dict[str, Any]:
    sec = jcfg.get(name, {})
    return sec if isinstance(sec, dict) else {}


@dataclass(frozen=True)
class PauseConfig:
    """Process-wide, read-only runtime config for the pause dispatcher."""

    ethereum_mnemonic: str = DEFAULT_ETHEREUM_MNEMONIC
    near_mnemonic: str = DEFAULT_NEAR_MNEMONIC

    evm_rpc_urls: Mapping[int, str] = field(default_factory=lambda: DEFAULT_EVM_RPC_URLS)
    near_rpc_urls: Mapping[str, str] = field(default_factory=lambda: DEFAULT_NEAR_RPC_URLS)

    # Used when a NEAR request does not name its controller contract.
    near_controller_contract: Optional[str] = None

    http_timeout_sec: float = 30.0

    # debug
    source_json_path: Optional[str] = None

    @property
    def evm_index_by_chain_id(self) -> Mapping[int, str]:
        return ETH_INDEX_BY_CHAIN_ID

    @property
    def near_index_by_chain_id(self) -> Mapping[str, str]:
        return NEAR_INDEX_BY_CHAIN_ID

    @staticmethod
    def from_env() -> "PauseConfig":
        """
        Layering (highest → lowest):
          1) Process env vars (a project .env is loaded first, without override)
          2) pause_config.json (see _config_path)
          3) Defaults (public RPCs, test-only seed phrases)
        JSON shape (example):
        {
          "ethereum": {"rpc_urls": {"1": "https://eth.llamarpc.com"}},
          "near": {
            "rpc_urls": {"testnet": "https://test.rpc.fastnear.com"},
            "controller": "controller.testnet"
          },
          "http_timeout_sec": 30
        }
        """
        load_dotenv(override=False)
        path = _config_path()
        jcfg = _read_json_config(path)
        eth = _section(jcfg, "ethereum")
        near = _section(jcfg, "near")

        evm_urls: Dict[int, str] = dict(DEFAULT_EVM_RPC_URLS)
        for key, url in (eth.get("rpc_urls") or {}).items():
            evm_urls[int(key)] = str(url)
        for chain_id in ETH_INDEX_BY_CHAIN_ID:
            override = _env(f"ETH_RPC_URL_{chain_id}")
            if override:
                evm_urls[chain_id] = override

        near_urls: Dict[str, str] = dict(DEFAULT_NEAR_RPC_URLS)
        for key, url in (near.get("rpc_urls") or {}).items():
            near_urls[str(key)] = str(url)
        for chain_id in NEAR_INDEX_BY_CHAIN_ID:
            override = _env(f"NEAR_RPC_URL_{chain_id.upper()}")
            if override:
                near_urls[chain_id] = override

        timeout = float(_env("PAUSE_HTTP_TIMEOUT_SEC", str(jcfg.get("http_timeout_sec", 30.0))))

        return PauseConfig(
            ethereum_mnemonic=_env("ETH_MNEMONIC") or _env("ETH_PRIVATE_KEY") or DEFAULT_ETHEREUM_MNEMONIC,
            near_mnemonic=_env("NEAR_MNEMONIC") or _env("NEAR_PRIVATE_KEY") or DEFAULT_NEAR_MNEMONIC,
            evm_rpc_urls=MappingProxyType(evm_urls),
            near_rpc_urls=MappingProxyType(near_urls),
            near_controller_contract=_env("NEAR_CONTROLLER_CONTRACT", near.get("controller")),
            http_timeout_sec=timeout,
            source_json_path=str(path) if path else None,
        )


def get_pause_config() -> PauseConfig:
    return PauseConfig.from_env()
