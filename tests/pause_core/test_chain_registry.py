import pytest

from backend.core.pause_core.chain_registry import (
    ChainFamily,
    classify,
    describe,
    resolve_endpoint,
)
from backend.core.pause_core.pause_config import ETH_INDEX_BY_CHAIN_ID, PauseConfig
from backend.core.pause_core.pause_errors import ErrorCode, PauseSdkError


@pytest.mark.parametrize(
    "network_id, chain_id, expected",
    [
        ("ethereum", 1, ChainFamily.EVM),
        ("ethereum", 1313161554, ChainFamily.EVM),
        ("near", "mainnet", ChainFamily.NEAR),
        ("near", "testnet", ChainFamily.NEAR),
        ("near", "local", ChainFamily.NEAR),
        ("ethereum", "1", None),       # keys are compared as given
        ("ethereum", True, None),
        ("ethereum", 5, None),
        ("ethereum", "mainnet", None),
        ("near", 1, None),
        ("near", "betanet", None),
        ("solana", 1, None),
        ("", 1, None),
    ],
)
def test_classify(network_id, chain_id, expected):
    assert classify(network_id, chain_id) is expected


def test_describe_evm_binds_numeric_chain_id():
    d = describe("ethereum", 1313161554)
    assert d.family is ChainFamily.EVM
    assert d.index == "0/1"
    assert d.numeric_chain_id == 1313161554


def test_describe_near_has_no_numeric_chain_id():
    d = describe("near", "testnet")
    assert d.family is ChainFamily.NEAR
    assert d.index == "1"
    assert d.numeric_chain_id is None


def test_describe_unsupported_is_none():
    assert describe("near", "nowhere") is None


def test_registries_are_read_only():
    with pytest.raises(TypeError):
        ETH_INDEX_BY_CHAIN_ID[5] = "0/9"


def test_resolve_endpoint_defaults_and_override():
    cfg = PauseConfig()
    assert resolve_endpoint(describe("ethereum", 1), cfg) == "https://eth.llamarpc.com"
    assert resolve_endpoint(describe("ethereum", 1313161554), cfg) == "https://mainnet.aurora.dev"
    assert resolve_endpoint(describe("near", "mainnet"), cfg) == "https://free.rpc.fastnear.com"
    assert resolve_endpoint(describe("near", "testnet"), cfg) == "https://test.rpc.fastnear.com"
    assert resolve_endpoint(describe("near", "local"), cfg, "http://sandbox:4040") == "http://sandbox:4040"


def test_resolve_endpoint_missing_registration():
    cfg = PauseConfig(near_rpc_urls={"mainnet": "https://rpc"})
    with pytest.raises(PauseSdkError) as exc:
        resolve_endpoint(describe("near", "testnet"), cfg)
    assert exc.value.code is ErrorCode.INVALID_PARAMETERS
