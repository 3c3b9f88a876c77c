"""
Sui Toolbox - Configuration

Configuration loading from environment variables. Everything defaults to a
local development network so tests run against `sui start` without setup.
"""

import os
import logging
from dataclasses import dataclass
from typing import Optional

logger = logging.getLogger(__name__)


FAUCET_HOSTS = {
    "localnet": "http://127.0.0.1:9123",
    "devnet": "https://faucet.devnet.sui.io",
    "testnet": "https://faucet.testnet.sui.io",
}

FULLNODE_URLS = {
    "localnet": "http://127.0.0.1:9000",
    "devnet": "https://fullnode.devnet.sui.io:443",
    "testnet": "https://fullnode.testnet.sui.io:443",
    "mainnet": "https://fullnode.mainnet.sui.io:443",
}

DEFAULT_NETWORK = "localnet"
DEFAULT_SUI_BIN = "sui"
DEFAULT_FAUCET_TIMEOUT = 60.0
DEFAULT_WAIT_TIMEOUT = 60.0
DEFAULT_REQUEST_TIMEOUT = 10.0
DEFAULT_GAS_BUDGET = 100_000_000


def get_faucet_host(network: str) -> str:
    """
    Well-known faucet host for a network.

    Raises:
        ValueError: No faucet for that network (e.g. mainnet)
    """
    try:
        return FAUCET_HOSTS[network]
    except KeyError:
        raise ValueError(f"Unknown network for faucet: {network}") from None


def get_fullnode_url(network: str) -> str:
    """
    Well-known fullnode JSON-RPC URL for a network.

    Raises:
        ValueError: Unknown network
    """
    try:
        return FULLNODE_URLS[network]
    except KeyError:
        raise ValueError(f"Unknown network: {network}") from None


def _float_env(name: str, default: float) -> float:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return float(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default


def _int_env(name: str, default: int) -> int:
    raw = os.getenv(name)
    if raw is None or raw == "":
        return default
    try:
        return int(raw)
    except ValueError:
        logger.warning(f"Ignoring invalid {name}={raw!r}, using {default}")
        return default


@dataclass
class ToolboxConfig:
    """
    Configuration for the provisioning and publish workflow.

    All values are loaded from environment variables and default to localnet.
    """

    network: str
    faucet_url: str
    fullnode_url: str

    # Build tool invocation, split with shlex (e.g. "cargo run --bin sui")
    sui_bin: str = DEFAULT_SUI_BIN

    # Overall faucet retry budget in seconds
    faucet_timeout: float = DEFAULT_FAUCET_TIMEOUT

    # How long to wait for an executed transaction to be readable
    wait_timeout: float = DEFAULT_WAIT_TIMEOUT

    # Per-request HTTP timeout
    request_timeout: float = DEFAULT_REQUEST_TIMEOUT

    gas_budget: int = DEFAULT_GAS_BUDGET

    @classmethod
    def from_env(cls) -> "ToolboxConfig":
        """
        Load configuration from environment variables.

        Environment variables:
            SUI_NETWORK: localnet | devnet | testnet | mainnet (default: localnet)
            SUI_FAUCET_URL: Faucet host (default: well-known host for SUI_NETWORK)
            SUI_FULLNODE_URL: JSON-RPC URL (default: well-known URL for SUI_NETWORK)
            SUI_BIN: Command used to run the sui binary (default: sui)
            SUI_FAUCET_TIMEOUT: Overall faucet retry budget in seconds (default: 60)
            SUI_WAIT_TIMEOUT: Transaction wait budget in seconds (default: 60)
            SUI_REQUEST_TIMEOUT: Per-request HTTP timeout in seconds (default: 10)
            SUI_GAS_BUDGET: Gas budget for publish transactions in MIST (default: 100000000)

        Returns:
            ToolboxConfig: Configuration instance
        """
        network = os.getenv("SUI_NETWORK", DEFAULT_NETWORK).lower()

        faucet_url = os.getenv("SUI_FAUCET_URL")
        if faucet_url:
            logger.info(f"Using faucet from env: {faucet_url}")
        else:
            # mainnet has no faucet; validate() reports it
            faucet_url = FAUCET_HOSTS.get(network, "")

        fullnode_url = os.getenv("SUI_FULLNODE_URL")
        if fullnode_url:
            logger.info(f"Using fullnode from env: {fullnode_url}")
        else:
            fullnode_url = FULLNODE_URLS.get(network, "")

        return cls(
            network=network,
            faucet_url=faucet_url,
            fullnode_url=fullnode_url,
            sui_bin=os.getenv("SUI_BIN") or DEFAULT_SUI_BIN,
            faucet_timeout=_float_env("SUI_FAUCET_TIMEOUT", DEFAULT_FAUCET_TIMEOUT),
            wait_timeout=_float_env("SUI_WAIT_TIMEOUT", DEFAULT_WAIT_TIMEOUT),
            request_timeout=_float_env("SUI_REQUEST_TIMEOUT", DEFAULT_REQUEST_TIMEOUT),
            gas_budget=_int_env("SUI_GAS_BUDGET", DEFAULT_GAS_BUDGET),
        )

    def validate(self) -> tuple[bool, list[str]]:
        """
        Validate configuration.

        Returns:
            Tuple of (is_valid: bool, errors: list[str])
        """
        errors = []

        if not self.faucet_url:
            errors.append(
                f"No faucet for network '{self.network}'. Set SUI_FAUCET_URL."
            )
        if not self.fullnode_url:
            errors.append(
                f"No fullnode URL for network '{self.network}'. Set SUI_FULLNODE_URL."
            )
        if not self.sui_bin.strip():
            errors.append("SUI_BIN is empty.")
        if self.faucet_timeout <= 0:
            errors.append(f"SUI_FAUCET_TIMEOUT must be positive, got {self.faucet_timeout}")
        if self.wait_timeout <= 0:
            errors.append(f"SUI_WAIT_TIMEOUT must be positive, got {self.wait_timeout}")
        if self.request_timeout <= 0:
            errors.append(f"SUI_REQUEST_TIMEOUT must be positive, got {self.request_timeout}")
        if self.gas_budget <= 0:
            errors.append(f"SUI_GAS_BUDGET must be positive, got {self.gas_budget}")

        return len(errors) == 0, errors

    def __str__(self) -> str:
        return (
            f"ToolboxConfig("
            f"network={self.network}, "
            f"faucet_url={self.faucet_url}, "
            f"fullnode_url={self.fullnode_url}, "
            f"sui_bin={self.sui_bin}, "
            f"faucet_timeout={self.faucet_timeout}, "
            f"wait_timeout={self.wait_timeout}, "
            f"gas_budget={self.gas_budget})"
        )
