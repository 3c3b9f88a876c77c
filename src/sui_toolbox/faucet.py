"""
Faucet client for funding test accounts.

Talks the faucet v0 protocol: POST {host}/gas with a FixedAmountRequest.
Funding is retried with exponential backoff under an overall budget, except
when the faucet says we are rate limited; that stops funding at once.
"""

import requests
import logging
from dataclasses import replace
from typing import Dict, Any, Optional

from .errors import FaucetRateLimitError, FaucetRequestError, FundingTimeoutError
from .logger import log_retry
from .retry import RetryPolicy, RetryTimeoutError, deadline_for, exponential_backoff, retry

logger = logging.getLogger(__name__)


class FaucetClient:
    """
    Client for requesting test SUI from a faucet.

    One call to request_sui() is exactly one HTTP request; retry policy
    lives in fund().
    """

    def __init__(self, host: str, timeout: float = 10.0, session: Optional[requests.Session] = None):
        """
        Initialize faucet client.

        Args:
            host: Faucet base URL (e.g., http://127.0.0.1:9123)
            timeout: Request timeout in seconds (default: 10)
            session: Optional requests session to reuse
        """
        self.host = host.rstrip('/')
        self.timeout = timeout
        self.session = session or requests.Session()
        self.session.headers.update({"Content-Type": "application/json"})
        logger.debug(f"FaucetClient initialized: {self.host}")

    def request_sui(self, recipient: str, timeout: Optional[float] = None) -> Dict[str, Any]:
        """
        Ask the faucet to send gas coins to recipient.

        Args:
            recipient: Sui address
            timeout: Request timeout for this call (default: the client timeout)

        Returns:
            Faucet response dict (transferredGasObjects, ...)

        Raises:
            FaucetRateLimitError: Faucet answered 429 Too Many Requests
            FaucetRequestError: Any other failure (transient)
        """
        endpoint = f"{self.host}/gas"
        body = {"FixedAmountRequest": {"recipient": recipient}}

        try:
            response = self.session.post(endpoint, json=body, timeout=self.timeout if timeout is None else timeout)
        except requests.exceptions.ConnectionError as e:
            raise FaucetRequestError(f"Cannot reach faucet at {endpoint}: {e}") from e
        except requests.exceptions.Timeout as e:
            raise FaucetRequestError(f"Faucet timeout: {endpoint}") from e
        except requests.exceptions.RequestException as e:
            raise FaucetRequestError(f"Faucet request failed: {e}") from e

        if response.status_code == 429:
            raise FaucetRateLimitError("Too many requests from this client have been sent to the faucet. Please retry later")

        if not response.ok:
            raise FaucetRequestError(
                f"Faucet request failed: {response.status_code} {response.reason}"
            )

        try:
            result = response.json()
        except ValueError as e:
            raise FaucetRequestError(f"Faucet returned invalid JSON: {response.text[:200]}") from e

        if isinstance(result, dict) and result.get("error"):
            raise FaucetRequestError(f"Faucet request failed: {result['error']}")

        logger.info(f"Faucet funded {recipient}")
        return result

    def close(self):
        """Close the HTTP session."""
        self.session.close()

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc_val, exc_tb):
        self.close()
        return False


def _is_retryable(error: BaseException) -> bool:
    return isinstance(error, FaucetRequestError)


def fund(
    address: str,
    faucet_host: str,
    timeout: float = 60.0,
    client: Optional[FaucetClient] = None,
    policy: Optional[RetryPolicy] = None,
) -> Dict[str, Any]:
    """
    Fund address from the faucet, retrying transient failures.

    Args:
        address: Recipient address
        faucet_host: Faucet base URL
        timeout: Overall budget in seconds (default: 60)
        client: Optional FaucetClient (a new one is created and closed otherwise)
        policy: Optional RetryPolicy for backoff, timeout and clock
            (retry_if and on_retry are always overridden)

    Returns:
        Faucet response of the successful attempt

    Raises:
        FaucetRateLimitError: Rate limited; no further attempt was made
        FundingTimeoutError: Transient failures until the budget ran out
    """
    policy = replace(
        policy or RetryPolicy(backoff=exponential_backoff(), timeout=timeout),
        retry_if=_is_retryable,
        on_retry=lambda attempt, delay, error: log_retry("requesting from faucet", attempt, delay, error),
    )

    own_client = client is None
    client = client or FaucetClient(faucet_host)

    remaining = deadline_for(policy)

    def attempt():
        # a single request may not outlive the funding budget
        budget = remaining()
        if budget <= 0:
            raise FaucetRequestError("Funding budget exhausted before the request was sent")
        return client.request_sui(address, timeout=min(client.timeout, budget))

    try:
        return retry(attempt, policy)
    except RetryTimeoutError as e:
        logger.error(f"Faucet funding for {address} timed out after {e.attempts} attempts")
        raise FundingTimeoutError(
            f"Could not fund {address} from {faucet_host} within {policy.timeout}s: {e.last_error}",
            attempts=e.attempts,
        ) from e.last_error
    except FaucetRateLimitError:
        logger.error(f"Faucet rate limited while funding {address}")
        raise
    finally:
        if own_client:
            client.close()
