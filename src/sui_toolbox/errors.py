"""
Sui Toolbox - Errors

Exception hierarchy for the provisioning and publish workflow.

Every stage raises to its caller. Nothing here is recovered locally: a test
harness that sees a ToolboxError should fail the test setup.
"""

from typing import Any, Optional


class ToolboxError(Exception):
    """Base class for all workflow errors."""
    pass


class FundingError(ToolboxError):
    """Faucet funding failed."""
    pass


class FaucetRateLimitError(FundingError):
    """
    Faucet returned 429 Too Many Requests.

    This error is terminal and must never be retried.
    """
    pass


class FundingTimeoutError(FundingError):
    """Faucet kept failing transiently until the funding budget ran out."""

    def __init__(self, message: str, attempts: int = 0):
        super().__init__(message)
        self.attempts = attempts


class FaucetRequestError(Exception):
    """
    Transient faucet failure (connection error, 5xx, error payload).

    Retried by fund(); never escapes it.
    """
    pass


class BuildError(ToolboxError):
    """Package build failed."""
    pass


class BuildToolError(BuildError):
    """
    The build tool exited non-zero or printed output that is not a build artifact.

    Build failures are deterministic for fixed sources, so this is not retried.
    """

    def __init__(self, message: str, returncode: Optional[int] = None, stderr: str = ""):
        super().__init__(message)
        self.returncode = returncode
        self.stderr = stderr


class SubmissionError(ToolboxError):
    """Transaction submission failed."""
    pass


class TransactionRejectedError(SubmissionError):
    """The node refused the transaction before execution."""
    pass


class TransactionExecutionFailedError(SubmissionError):
    """The transaction executed but its effects report a non-success status."""

    def __init__(self, message: str, effects: Any = None):
        super().__init__(message)
        self.effects = effects


class ExtractionError(ToolboxError):
    """Could not read the expected result out of transaction effects."""
    pass


class PublishedPackageNotFoundError(ExtractionError):
    """Effects of a successful publish carry no 'published' object change."""
    pass


class RPCError(ToolboxError):
    """JSON-RPC call failed at the transport or protocol level."""

    def __init__(self, message: str, code: Optional[int] = None):
        super().__init__(message)
        self.code = code


class TransactionWaitTimeoutError(RPCError):
    """Transaction did not become visible on the node within the wait budget."""
    pass


class TransactionConsumedError(ToolboxError):
    """A transaction object was submitted a second time."""
    pass


class UnsupportedTransactionError(ToolboxError):
    """The JSON-RPC client cannot build bytes for this command shape."""
    pass
