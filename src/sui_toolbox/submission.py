"""
Submission and confirmation of signed transactions.

A submitted transaction is never retried here: resubmitting risks double
execution, which is the network's concern and not this workflow's.
"""

import logging

from .errors import RPCError, TransactionExecutionFailedError, TransactionRejectedError
from .models import TransactionEffectsResult
from .rpc_client import SuiClient
from .transaction import Transaction

logger = logging.getLogger(__name__)


def submit(
    transaction: Transaction,
    signer,
    client: SuiClient,
    wait_timeout: float = 60.0,
) -> TransactionEffectsResult:
    """
    Sign, execute and wait for transaction; return its effects.

    Args:
        transaction: Transaction to submit; consumed by this call
        signer: Keypair of the sender
        client: SuiClient for the target network
        wait_timeout: Budget for the transaction to become readable

    Raises:
        TransactionRejectedError: Node refused the transaction before execution
        TransactionExecutionFailedError: Executed with a non-success status
        TransactionWaitTimeoutError: Executed but never became readable
    """
    try:
        response = client.sign_and_execute_transaction(transaction, signer)
    except RPCError as e:
        logger.error(f"Transaction rejected: {e}")
        raise TransactionRejectedError(f"Transaction rejected: {e}") from e

    digest = response["digest"]
    effects = client.wait_for_transaction(
        digest,
        show_object_changes=True,
        show_effects=True,
        timeout=wait_timeout,
    )

    if not effects.succeeded:
        logger.error(f"Transaction {digest} failed: {effects.status} {effects.error or ''}".rstrip())
        raise TransactionExecutionFailedError(
            f"Transaction {digest} executed with status {effects.status}: {effects.error}",
            effects=effects,
        )

    logger.debug(f"Transaction {digest} succeeded with {len(effects.object_changes)} object changes")
    return effects
