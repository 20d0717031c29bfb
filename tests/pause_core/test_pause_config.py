import dataclasses
import json

import pytest

from backend.core.pause_core.pause_config import (
    DEFAULT_ETHEREUM_MNEMONIC,
    DEFAULT_NEAR_MNEMONIC,
    PauseConfig,
)
from backend.core.pause_core.pause_errors import ErrorCode, PauseSdkError, invalid_parameters

_VARS = (
    "ETH_MNEMONIC",
    "ETH_PRIVATE_KEY",
    "NEAR_MNEMONIC",
    "NEAR_PRIVATE_KEY",
    "ETH_RPC_URL_1",
    "ETH_RPC_URL_1313161554",
    "NEAR_RPC_URL_MAINNET",
    "NEAR_RPC_URL_TESTNET",
    "NEAR_RPC_URL_LOCAL",
    "NEAR_CONTROLLER_CONTRACT",
    "PAUSE_HTTP_TIMEOUT_SEC",
    "PAUSE_CONFIG_PATH",
)


@pytest.fixture
def clean_env(monkeypatch, tmp_path):
    for name in _VARS:
        monkeypatch.delenv(name, raising=False)
    monkeypatch.setattr("backend.core.pause_core.pause_config.load_dotenv", lambda **kw: False)
    monkeypatch.chdir(tmp_path)
    return tmp_path


def test_defaults(clean_env):
    cfg = PauseConfig.from_env()
    assert cfg.ethereum_mnemonic == DEFAULT_ETHEREUM_MNEMONIC
    assert cfg.near_mnemonic == DEFAULT_NEAR_MNEMONIC
    assert cfg.near_rpc_urls["local"] == "http://127.0.0.1:3030"
    assert cfg.near_controller_contract is None
    assert cfg.http_timeout_sec == 30.0
    assert cfg.source_json_path is None


def test_env_overrides(clean_env, monkeypatch):
    monkeypatch.setenv("NEAR_MNEMONIC", "  custom words  ")
    monkeypatch.setenv("ETH_PRIVATE_KEY", "legacy name phrase")
    monkeypatch.setenv("ETH_RPC_URL_1313161554", "https://aurora.private")
    monkeypatch.setenv("NEAR_RPC_URL_TESTNET", "https://near.private")
    monkeypatch.setenv("NEAR_CONTROLLER_CONTRACT", "controller.testnet")
    monkeypatch.setenv("PAUSE_HTTP_TIMEOUT_SEC", "5")

    cfg = PauseConfig.from_env()
    assert cfg.near_mnemonic == "  custom words  "
    assert cfg.ethereum_mnemonic == "legacy name phrase"
    assert cfg.evm_rpc_urls[1313161554] == "https://aurora.private"
    assert cfg.evm_rpc_urls[1] == "https://eth.llamarpc.com"
    assert cfg.near_rpc_urls["testnet"] == "https://near.private"
    assert cfg.near_controller_contract == "controller.testnet"
    assert cfg.http_timeout_sec == 5.0


def test_blank_env_is_ignored(clean_env, monkeypatch):
    monkeypatch.setenv("NEAR_MNEMONIC", "   ")
    assert PauseConfig.from_env().near_mnemonic == DEFAULT_NEAR_MNEMONIC


def test_json_layer_below_env(clean_env, monkeypatch):
    (clean_env / "config").mkdir()
    path = clean_env / "config" / "pause_config.json"
    path.write_text(
        json.dumps(
            {
                "ethereum": {"rpc_urls": {"1": "https://json.eth"}},
                "near": {"rpc_urls": {"mainnet": "https://json.near"}, "controller": "json.near"},
                "http_timeout_sec": 12,
            }
        ),
        encoding="utf-8",
    )
    monkeypatch.setenv("NEAR_CONTROLLER_CONTRACT", "env.near")

    cfg = PauseConfig.from_env()
    assert cfg.evm_rpc_urls[1] == "https://json.eth"
    assert cfg.near_rpc_urls["mainnet"] == "https://json.near"
    assert cfg.near_controller_contract == "env.near"
    assert cfg.http_timeout_sec == 12.0
    assert cfg.source_json_path.endswith("pause_config.json")


def test_explicit_json_path_and_bad_file(clean_env, monkeypatch):
    path = clean_env / "elsewhere.json"
    path.write_text("[1, 2]", encoding="utf-8")
    monkeypatch.setenv("PAUSE_CONFIG_PATH", str(path))
    cfg = PauseConfig.from_env()
    assert cfg.source_json_path == str(path)
    assert cfg.near_rpc_urls["mainnet"] == "https://free.rpc.fastnear.com"


def test_missing_explicit_json_path_falls_back_to_defaults(clean_env, monkeypatch):
    (clean_env / "pause_config.json").write_text(json.dumps({"near": {"controller": "cwd.near"}}), encoding="utf-8")
    monkeypatch.setenv("PAUSE_CONFIG_PATH", str(clean_env / "missing.json"))
    cfg = PauseConfig.from_env()
    assert cfg.source_json_path is None
    assert cfg.near_controller_contract is None


def test_root_json_used_when_no_config_dir(clean_env):
    (clean_env / "pause_config.json").write_text(json.dumps({"near": {"controller": "cwd.near"}}), encoding="utf-8")
    cfg = PauseConfig.from_env()
    assert cfg.near_controller_contract == "cwd.near"
    assert cfg.source_json_path == "pause_config.json"


def test_config_is_read_only(clean_env):
    cfg = PauseConfig.from_env()
    with pytest.raises(dataclasses.FrozenInstanceError):
        cfg.near_mnemonic = "x"
    with pytest.raises(TypeError):
        cfg.near_rpc_urls["mainnet"] = "https://evil"


def test_error_rendering():
    err = PauseSdkError("EVM_PAUSE_ERROR", "Error occurred while executing pause on EVM chain", ValueError("reverted"))
    assert err.code is ErrorCode.EVM_PAUSE_ERROR
    assert str(err) == "[EVM_PAUSE_ERROR] Error occurred while executing pause on EVM chain: reverted"
    assert str(invalid_parameters()) == "[INVALID_PARAMETERS] Missing or invalid parameters provided"
    assert invalid_parameters().reason is None
