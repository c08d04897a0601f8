"""HTTP client for the Paystack transaction API.

Only the handful of endpoints the ticketing flow needs are wrapped:

- POST /transaction/initialize: start a hosted checkout
- GET /transaction/verify/{reference}: confirm the outcome of a checkout
- GET /bank: the bank list used for withdrawals

Amounts are exchanged with Paystack in the minor currency unit (cents).
"""

import typing as t
from decimal import ROUND_HALF_UP, Decimal

import httpx
import structlog
from django.conf import settings

from common.models import SiteSettings

logger = structlog.get_logger(__name__)


class PaystackError(Exception):
    """Raised when a Paystack call fails.

    Attributes:
        status_code: HTTP status code returned by Paystack, if any.
        reason: The message Paystack gave, if any.
    """

    def __init__(self, message: str, status_code: int | None = None, reason: str | None = None) -> None:
        super().__init__(message)
        self.status_code = status_code
        self.reason = reason


def to_minor_units(amount: Decimal) -> int:
    """Convert rands to cents."""
    return int((Decimal(amount) * 100).quantize(Decimal("1"), rounding=ROUND_HALF_UP))


def from_minor_units(amount: int | str) -> Decimal:
    """Convert cents to rands."""
    return (Decimal(amount) / 100).quantize(Decimal("0.01"))


class PaystackClient:
    """Thin synchronous Paystack client.

    Usable as a context manager; the underlying httpx client is created lazily.
    """

    def __init__(
        self,
        secret_key: str,
        base_url: str | None = None,
        timeout: float | None = None,
    ) -> None:
        self.secret_key = secret_key
        self.base_url = (base_url or settings.PAYSTACK_BASE_URL).rstrip("/")
        self.timeout = timeout or settings.PAYSTACK_TIMEOUT_SECONDS
        self._client: httpx.Client | None = None

    def _get_client(self) -> httpx.Client:
        if self._client is None:
            self._client = httpx.Client(
                base_url=self.base_url,
                headers={
                    "Authorization": f"Bearer {self.secret_key}",
                    "Content-Type": "application/json",
                },
                timeout=httpx.Timeout(self.timeout, connect=10.0),
            )
        return self._client

    def _request(self, method: str, path: str, **kwargs: t.Any) -> t.Any:
        """Send a request and unwrap Paystack's `{status, message, data}` envelope.

        Raises:
            PaystackError: On transport errors, non-2xx responses or `status: false` bodies.
        """
        try:
            response = self._get_client().request(method, path, **kwargs)
        except httpx.RequestError as e:
            logger.error("paystack_request_error", method=method, path=path, error=str(e))
            raise PaystackError(f"Request to Paystack failed: {e}") from e

        try:
            body = response.json()
        except ValueError:
            body = {}
        if not isinstance(body, dict):
            body = {}

        if response.is_error or not body.get("status", False):
            reason = body.get("message")
            logger.warning(
                "paystack_request_failed",
                method=method,
                path=path,
                status=response.status_code,
                reason=reason,
            )
            raise PaystackError(
                f"Paystack returned status {response.status_code}",
                status_code=response.status_code,
                reason=reason,
            )

        return body.get("data")

    def initialize_transaction(
        self,
        *,
        email: str,
        amount: Decimal,
        reference: str,
        callback_url: str,
        metadata: dict[str, t.Any],
        currency: str | None = None,
        channels: list[str] | None = None,
    ) -> dict[str, t.Any]:
        """Start a hosted checkout for `amount` rands.

        Returns:
            Paystack's data object, containing `authorization_url`, `access_code` and `reference`.
        """
        payload: dict[str, t.Any] = {
            "email": email,
            "amount": to_minor_units(amount),
            "currency": currency or settings.PAYSTACK_CURRENCY,
            "reference": reference,
            "callback_url": callback_url,
            "metadata": metadata,
        }
        if channels:
            payload["channels"] = channels
        data: dict[str, t.Any] = self._request("POST", "/transaction/initialize", json=payload)
        logger.info("paystack_transaction_initialized", reference=reference, amount=str(amount))
        return data

    def verify_transaction(self, reference: str) -> dict[str, t.Any]:
        """Fetch the outcome of a transaction.

        Returns:
            Paystack's data object. `status` is "success" for a paid transaction and
            `amount` is in cents.
        """
        data: dict[str, t.Any] = self._request("GET", f"/transaction/verify/{reference}")
        logger.info("paystack_transaction_verified", reference=reference, status=data.get("status"))
        return data

    def list_banks(self, country: str | None = None, currency: str | None = None) -> list[dict[str, t.Any]]:
        """List the banks Paystack supports for the configured country."""
        params = {
            "country": country or settings.PAYSTACK_COUNTRY,
            "currency": currency or settings.PAYSTACK_CURRENCY,
        }
        data: list[dict[str, t.Any]] = self._request("GET", "/bank", params=params)
        return data

    def close(self) -> None:
        """Close the HTTP client and release resources."""
        if self._client is not None:
            self._client.close()
            self._client = None

    def __enter__(self) -> "PaystackClient":
        return self

    def __exit__(self, exc_type: type | None, exc_val: Exception | None, exc_tb: object) -> None:
        self.close()


def is_live_mode() -> bool:
    """Whether the platform currently charges with the live keys."""
    return SiteSettings.get_solo().paystack_live_mode


def get_secret_key() -> str:
    key: str = settings.PAYSTACK_SECRET_KEY if is_live_mode() else settings.PAYSTACK_TEST_SECRET_KEY
    return key


def get_paystack_client() -> PaystackClient:
    """Build a client for the active mode."""
    return PaystackClient(secret_key=get_secret_key())
