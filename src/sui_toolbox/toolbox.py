"""
Sui Toolbox - Test Workflow

Provision a funded account, build a Move package, publish it, and hand the
package id to the calling test.

Usage:
    from sui_toolbox import publish_package, setup_sui_client

    toolbox = setup_sui_client()
    result = publish_package("packages/token", toolbox)
    result.package_id  # "0x42..."
"""

import logging
from pathlib import Path
from typing import Any, Dict, List, Optional, Union

from .builder import PackageBuilder, SuiMoveBuilder, build
from .config import ToolboxConfig
from .errors import ToolboxError
from .extractor import extract
from .faucet import FaucetClient, fund
from .keypair import Ed25519Keypair, provision
from .logger import log_error, log_event, track_duration
from .models import PublishResult
from .rpc_client import SuiClient
from .submission import submit
from .transaction import assemble

logger = logging.getLogger(__name__)


class TestToolbox:
    """A funded keypair and the client for the network it lives on."""

    __test__ = False  # not a pytest test class

    def __init__(self, keypair: Ed25519Keypair, client: SuiClient, config: Optional[ToolboxConfig] = None):
        self.keypair = keypair
        self.client = client
        self.config = config or ToolboxConfig.from_env()

    def address(self) -> str:
        return self.keypair.get_public_key().to_sui_address()

    def get_active_validators(self) -> List[Dict[str, Any]]:
        """Active validator set. Informational; not used by the publish path."""
        return self.client.get_latest_sui_system_state()["activeValidators"]

    def close(self):
        self.client.close()


def get_client(config: Optional[ToolboxConfig] = None) -> SuiClient:
    config = config or ToolboxConfig.from_env()
    return SuiClient(
        url=config.fullnode_url,
        timeout=config.request_timeout,
        gas_budget=config.gas_budget,
    )


def setup_sui_client(config: Optional[ToolboxConfig] = None) -> TestToolbox:
    """
    Provision a fresh account and fund it from the faucet.

    Raises:
        FaucetRateLimitError: Faucet rate limited this client
        FundingTimeoutError: Faucet unavailable for the whole funding budget
    """
    config = config or ToolboxConfig.from_env()
    account = provision()
    with FaucetClient(config.faucet_url, timeout=config.request_timeout) as faucet_client:
        fund(account.address, config.faucet_url, timeout=config.faucet_timeout, client=faucet_client)
    log_event("Funded test account", address=account.address, faucet=config.faucet_url)
    return TestToolbox(account.keypair, get_client(config), config)


def publish_package(
    package_path: Union[str, Path],
    toolbox: Optional[TestToolbox] = None,
    builder: Optional[PackageBuilder] = None,
) -> PublishResult:
    """
    Build and publish the Move package at package_path.

    Args:
        package_path: Move package directory
        toolbox: Funded toolbox to publish from (default: a new one per call, closed afterwards)
        builder: PackageBuilder (default: SuiMoveBuilder using SUI_BIN)

    Returns:
        PublishResult with the normalized package id and the publish transaction

    Raises:
        FundingError, BuildError, SubmissionError, ExtractionError
    """
    # TODO: share one funded publisher across publishes instead of one per call
    own_toolbox = toolbox is None
    if own_toolbox:
        toolbox = setup_sui_client()

    try:
        return _publish(package_path, toolbox, builder)
    finally:
        if own_toolbox:
            toolbox.close()


def _publish(package_path: Union[str, Path], toolbox: TestToolbox, builder: Optional[PackageBuilder]) -> PublishResult:
    config = toolbox.config
    builder = builder or SuiMoveBuilder(config.sui_bin)
    address = toolbox.address()

    with track_duration() as elapsed_ms:
        try:
            artifact = build(package_path, builder)
            tx = assemble(artifact, address, gas_budget=config.gas_budget)
            publish_txn = submit(tx, toolbox.keypair, toolbox.client, wait_timeout=config.wait_timeout)
            package_id = extract(publish_txn)
        except ToolboxError as e:
            log_error("publish", type(e).__name__, str(e), package_path=str(package_path), address=address)
            raise

        log_event(
            f"Published package {package_id} from address {address}",
            package_id=package_id,
            address=address,
            digest=publish_txn.digest,
            duration_ms=round(elapsed_ms(), 2),
        )

    return PublishResult(package_id=package_id, publish_txn=publish_txn)
