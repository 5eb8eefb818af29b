from __future__ import annotations

from datetime import datetime, timezone
from typing import Literal, Optional

import requests
from pydantic import ValidationError

from ..config import get_config
from ..errors import ReceiptGenerationError
from ..logging import get_logger
from ..models import ReceiptResponse

DEFAULT_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class ReceiptApiClient:
    """Calls the receipt generation endpoint, which returns a 24-hour signed URL."""

    def __init__(
        self,
        endpoint: Optional[str] = None,
        session: Optional[requests.Session] = None,
        timeout: Optional[float] = None,
    ) -> None:
        self.config = get_config()
        self.endpoint = endpoint or self.config.resolved_receipt_endpoint()
        self.session = session or requests.Session()
        self.timeout = timeout if timeout is not None else self.config.request_timeout_seconds
        self.logger = get_logger(__name__, endpoint=self.endpoint)

    def generate(self, order_id: str, language: Literal["en", "es"] = "en") -> ReceiptResponse:
        """Request a signed receipt URL for ``order_id``.

        Returns:
            ReceiptResponse: A successful response carrying a non-empty receipt URL.
        Raises:
            ReceiptGenerationError: On a network failure, a non-2xx status, an
                unparseable body, ``success: false``, or a missing URL.
        """
        self.logger.info(f"Requesting receipt for order {order_id} ({self.config.app_env})")
        try:
            resp = self.session.post(
                self.endpoint,
                json={"orderId": order_id, "language": language},
                headers=DEFAULT_HEADERS,
                timeout=self.timeout,
            )
        except (requests.ConnectionError, requests.Timeout) as e:
            if self.config.is_development:
                self.logger.warning(f"Development mode: network error ({e}), using mock receipt")
                return mock_receipt_response(order_id)
            raise ReceiptGenerationError(
                f"Network error calling receipt endpoint: {e}", endpoint=self.endpoint, order_id=order_id
            ) from e
        except requests.RequestException as e:
            raise ReceiptGenerationError(
                f"Receipt request failed: {e}", endpoint=self.endpoint, order_id=order_id
            ) from e

        if not resp.ok:
            get_logger(__name__, endpoint=self.endpoint, status=resp.status_code, order_id=order_id).error(
                f"Receipt endpoint returned an error: {resp.text[:500]}"
            )
            raise ReceiptGenerationError(
                f"Receipt endpoint returned HTTP {resp.status_code}",
                endpoint=self.endpoint,
                order_id=order_id,
                status=resp.status_code,
            )

        try:
            body = ReceiptResponse.model_validate(resp.json())
        except (ValueError, ValidationError) as e:
            raise ReceiptGenerationError(
                f"Receipt endpoint returned an unreadable body: {e}",
                endpoint=self.endpoint,
                order_id=order_id,
                status=resp.status_code,
            ) from e

        if not body.success or not (body.receipt_url and body.receipt_url.strip()):
            raise ReceiptGenerationError(
                body.error or body.message or "Receipt endpoint did not return a receipt URL",
                endpoint=self.endpoint,
                order_id=order_id,
                status=resp.status_code,
            )
        return body


def mock_receipt_response(order_id: str) -> ReceiptResponse:
    """Signed-URL response used in development when the endpoint is unreachable."""
    now = datetime.now(timezone.utc)
    stamp = int(now.timestamp() * 1000)
    return ReceiptResponse(
        success=True,
        message="Mock signed URL generated for development (24-hour expiration)",
        receipt_url=f"https://example.com/receipts/signed_mock_{stamp}_receipt.pdf?expires=24h",
        order_id=order_id,
        generated_at=now,
    )
