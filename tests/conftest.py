"""
Pytest fixtures for the IdRegistry SDK tests.
"""
import pytest

from idregistry_sdk.config import RelayConfig, NetworkConfig, CONTRACT_ADDRESS_VAR
from idregistry_sdk.dispatch import StubDispatcher
from idregistry_sdk._rate_limited_log import reset_rate_limits

# Constants for testing
TEST_API_KEY = "test-api-key-0123456789"
TEST_PROJECT_ID = "f3b9c2a0-6c1d-4f1e-9a55-1c2d3e4f5a6b"
TEST_API_URL = "https://relay.example.com"
TEST_TO = "0x1234567890123456789012345678901234567890"
TEST_RECOVERY = "0xd3cda913deb6f67967b99d67acdfa1712c293601"
TEST_DEADLINE = 1700000000
TEST_SIG = "0x" + "ab" * 65
BASE_SEPOLIA_CHAIN_ID = 84532
BASE_SEPOLIA_ID_REGISTRY = "0x00000000Fc6c5F01Fc30151999387Bb99A9f489b"
SEND_URL = f"{TEST_API_URL}/transact/sendTransaction"


@pytest.fixture(autouse=True)
def _clean_environment(monkeypatch):
    """Keep the developer's shell from leaking into tests."""
    for var in (
        "SYNDICATE_API_KEY", "SYNDICATE_PROJECT_ID", "SYNDICATE_API_URL",
        "SYNDICATE_TIMEOUT", "SYNDICATE_RETRY_COUNT", CONTRACT_ADDRESS_VAR,
    ):
        monkeypatch.delenv(var, raising=False)


@pytest.fixture(autouse=True)
def _reset_caches():
    NetworkConfig._networks_cache = None
    reset_rate_limits()
    yield
    NetworkConfig._networks_cache = None
    reset_rate_limits()


@pytest.fixture
def relay_config():
    return RelayConfig(
        api_key=TEST_API_KEY,
        project_id=TEST_PROJECT_ID,
        api_url=TEST_API_URL,
        retry_count=0,
    )


@pytest.fixture
def stub_dispatcher():
    return StubDispatcher()


@pytest.fixture
def registration_args():
    return {
        "to": TEST_TO,
        "recovery": TEST_RECOVERY,
        "deadline": TEST_DEADLINE,
        "sig": TEST_SIG,
    }
