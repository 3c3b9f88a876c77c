"""
Sui Toolbox - Python Package

Test helpers that provision a funded account on a Sui network and publish
Move packages for integration tests.

Usage:
    from sui_toolbox import publish_package

    result = publish_package("packages/token")
    print(result.package_id)
"""

__version__ = "0.1.0"

# Public API
from .builder import PackageBuilder, SuiMoveBuilder, build
from .config import ToolboxConfig, get_faucet_host, get_fullnode_url
from .errors import (
    BuildError,
    BuildToolError,
    ExtractionError,
    FaucetRateLimitError,
    FundingError,
    FundingTimeoutError,
    PublishedPackageNotFoundError,
    SubmissionError,
    ToolboxError,
    TransactionExecutionFailedError,
    TransactionRejectedError,
)
from .extractor import extract, normalize_package_id
from .faucet import FaucetClient, fund
from .keypair import Ed25519Keypair, provision
from .models import BuildArtifact, PublishResult, TestAccount, TransactionEffectsResult
from .retry import RetryPolicy, retry
from .rpc_client import SuiClient
from .submission import submit
from .toolbox import TestToolbox, get_client, publish_package, setup_sui_client
from .transaction import Transaction, assemble

__all__ = [
    "PackageBuilder",
    "SuiMoveBuilder",
    "build",
    "ToolboxConfig",
    "get_faucet_host",
    "get_fullnode_url",
    "ToolboxError",
    "FundingError",
    "FaucetRateLimitError",
    "FundingTimeoutError",
    "BuildError",
    "BuildToolError",
    "SubmissionError",
    "TransactionRejectedError",
    "TransactionExecutionFailedError",
    "ExtractionError",
    "PublishedPackageNotFoundError",
    "extract",
    "normalize_package_id",
    "FaucetClient",
    "fund",
    "Ed25519Keypair",
    "provision",
    "BuildArtifact",
    "PublishResult",
    "TestAccount",
    "TransactionEffectsResult",
    "RetryPolicy",
    "retry",
    "SuiClient",
    "submit",
    "TestToolbox",
    "get_client",
    "publish_package",
    "setup_sui_client",
    "Transaction",
    "assemble",
]
