import pytest

from backend.core.pause_core.key_store import InMemoryKeyStore
from backend.core.pause_core.pause_config import PauseConfig
from fakes import FakeWeb3Factory, RecordingAccountFactory


@pytest.fixture
def config():
    return PauseConfig()


@pytest.fixture
def key_store():
    return InMemoryKeyStore()


@pytest.fixture
def web3_factory():
    return FakeWeb3Factory()


@pytest.fixture
def account_factory():
    return RecordingAccountFactory()
