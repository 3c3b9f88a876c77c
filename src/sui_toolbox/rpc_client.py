"""
Sui Toolbox - JSON-RPC Client

Minimal Sui fullnode client over JSON-RPC 2.0 with httpx.

Covers exactly what the publish workflow and the toolbox need:
building publish bytes (unsafe_publish), executing signed transactions,
waiting for them to become readable, and reading the system state.
"""

import base64
import itertools
import logging
from dataclasses import replace
from typing import Any, Dict, List, Optional

import httpx

from .errors import RPCError, TransactionWaitTimeoutError, UnsupportedTransactionError
from .models import TransactionEffectsResult
from .retry import RetryPolicy, RetryTimeoutError, fixed_backoff, retry
from .transaction import PublishCommand, Result, Transaction, TransferObjectsCommand

logger = logging.getLogger(__name__)


class SuiClient:
    """
    Client for a Sui fullnode JSON-RPC endpoint.

    Usage:
        with SuiClient("http://127.0.0.1:9000") as client:
            state = client.get_latest_sui_system_state()
    """

    def __init__(
        self,
        url: str,
        timeout: float = 10.0,
        gas_budget: int = 100_000_000,
        http_client: Optional[httpx.Client] = None,
    ):
        """
        Initialize JSON-RPC client.

        Args:
            url: Fullnode JSON-RPC URL (e.g., http://127.0.0.1:9000)
            timeout: Request timeout in seconds (default: 10.0)
            gas_budget: Gas budget used when a transaction does not set one
            http_client: Optional httpx.Client to reuse
        """
        self.url = url
        self.timeout = timeout
        self.gas_budget = gas_budget
        self._http = http_client or httpx.Client(timeout=timeout)
        self._ids = itertools.count(1)

    def call(self, method: str, params: List[Any]) -> Any:
        """
        Perform one JSON-RPC call.

        Raises:
            RPCError: Transport failure, non-200 status, JSON-RPC error object, or no result
        """
        payload = {"jsonrpc": "2.0", "id": next(self._ids), "method": method, "params": params}

        try:
            response = self._http.post(self.url, json=payload, headers={"Content-Type": "application/json"})
        except httpx.TimeoutException as e:
            raise RPCError(f"{method}: request timeout") from e
        except httpx.RequestError as e:
            raise RPCError(f"{method}: request error: {e}") from e

        if response.status_code != 200:
            raise RPCError(f"{method}: HTTP {response.status_code}: {response.text[:200]}")

        try:
            body = response.json()
        except ValueError as e:
            raise RPCError(f"{method}: invalid JSON response") from e

        if body.get("error"):
            error = body["error"]
            raise RPCError(f"{method}: {error.get('message', error)}", code=error.get("code"))

        if body.get("result") is None:
            raise RPCError(f"{method}: response has no result")

        return body["result"]

    def build_transaction_bytes(self, transaction: Transaction) -> bytes:
        """
        Ask the node to build BCS bytes for transaction.

        The node-side unsafe_publish builder emits Publish followed by a
        transfer of the UpgradeCap to the sender, so only that shape is accepted.

        Raises:
            UnsupportedTransactionError: Any other command shape
            RPCError: Node refused to build the transaction
        """
        commands = transaction.commands
        if (
            len(commands) != 2
            or not isinstance(commands[0], PublishCommand)
            or not isinstance(commands[1], TransferObjectsCommand)
            or commands[1].objects != (Result(0),)
            or commands[1].address != transaction.sender
        ):
            raise UnsupportedTransactionError(
                f"Only publish + transfer of the upgrade cap to the sender is supported: {transaction!r}"
            )
        if not transaction.sender:
            raise UnsupportedTransactionError("Transaction has no sender")

        publish = commands[0]
        gas_budget = transaction.gas_budget or self.gas_budget
        result = self.call(
            "unsafe_publish",
            [transaction.sender, list(publish.modules), list(publish.dependencies), None, str(gas_budget)],
        )
        return base64.b64decode(result["txBytes"])

    def sign_and_execute_transaction(
        self,
        transaction: Transaction,
        signer,
        options: Optional[Dict[str, bool]] = None,
    ) -> Dict[str, Any]:
        """
        Build, sign and execute transaction. The transaction is consumed.

        Args:
            transaction: Transaction to submit (single use)
            signer: Object with sign_transaction(tx_bytes) -> base64 signature
            options: Response options (showEffects, showObjectChanges, ...)

        Returns:
            Execution response dict; always contains "digest"

        Raises:
            TransactionConsumedError: Transaction was already submitted
            RPCError: Build or execution refused by the node
        """
        transaction.consume()
        tx_bytes = self.build_transaction_bytes(transaction)
        signature = signer.sign_transaction(tx_bytes)

        result = self.call(
            "sui_executeTransactionBlock",
            [base64.b64encode(tx_bytes).decode("ascii"), [signature], options or {}],
        )
        if not isinstance(result, dict) or not result.get("digest"):
            raise RPCError(f"sui_executeTransactionBlock: response has no digest: {result!r}"[:300])
        logger.info(f"Executed transaction {result['digest']}")
        return result

    def get_transaction_block(self, digest: str, options: Optional[Dict[str, bool]] = None) -> Dict[str, Any]:
        return self.call("sui_getTransactionBlock", [digest, options or {}])

    def wait_for_transaction(
        self,
        digest: str,
        show_object_changes: bool = True,
        show_effects: bool = True,
        timeout: float = 60.0,
        poll_interval: float = 2.0,
        policy: Optional[RetryPolicy] = None,
    ) -> TransactionEffectsResult:
        """
        Poll until the transaction is readable from this node.

        Raises:
            TransactionWaitTimeoutError: Not readable within timeout
        """
        options = {"showObjectChanges": show_object_changes, "showEffects": show_effects}
        policy = replace(
            policy or RetryPolicy(backoff=fixed_backoff(poll_interval), timeout=timeout),
            retry_if=lambda e: isinstance(e, RPCError),
        )

        try:
            response = retry(lambda: self.get_transaction_block(digest, options), policy)
        except RetryTimeoutError as e:
            raise TransactionWaitTimeoutError(
                f"Transaction {digest} not found after {policy.timeout}s: {e.last_error}"
            ) from e.last_error

        return TransactionEffectsResult.from_response(response)

    def get_latest_sui_system_state(self) -> Dict[str, Any]:
        return self.call("suix_getLatestSuiSystemState", [])

    def close(self):
        """Close the HTTP client."""
        self._http.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False
