"""
Shared fixtures for sui_toolbox tests.

Unit tests never touch the network or spawn the sui binary: the faucet and
JSON-RPC transports are mocked, and builds go through FakeBuilder.
"""

import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

import pytest

from sui_toolbox.config import ToolboxConfig
from sui_toolbox.errors import BuildToolError

from helpers import FakeBuilder, FakeClock


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: needs a running localnet and the sui binary"
    )


@pytest.fixture
def fake_clock():
    return FakeClock()


@pytest.fixture
def fake_builder():
    return FakeBuilder()


@pytest.fixture
def failing_builder():
    return FakeBuilder(error=BuildToolError("Build failed for pkg with exit code 1", returncode=1, stderr="error[E01001]"))


@pytest.fixture
def localnet_config():
    """Config pointing at localnet defaults, independent of the environment."""
    return ToolboxConfig(
        network="localnet",
        faucet_url="http://127.0.0.1:9123",
        fullnode_url="http://127.0.0.1:9000",
        sui_bin="sui",
        faucet_timeout=60.0,
        wait_timeout=60.0,
        request_timeout=10.0,
        gas_budget=100_000_000,
    )
