from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Callable, Literal, Optional

from pydantic import BaseModel, Field

from ..cancellation import CancellationToken, live_token
from ..config import get_config
from ..errors import ReceiptGenerationError
from ..logging import get_logger
from ..models import Order, ReceiptState
from .client import ReceiptApiClient

GENERATE_ERROR_MESSAGE = "Failed to generate receipt. Please try again."

Clock = Callable[[], datetime]


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def _as_utc(value: datetime) -> datetime:
    return value.replace(tzinfo=timezone.utc) if value.tzinfo is None else value


def is_expired(order: Order, now: Optional[datetime] = None) -> bool:
    """True iff ``now`` is past the receipt's expiry. No expiry means never expired."""
    if order.receipt_expires_at is None:
        return False
    now = now or utc_now()
    return _as_utc(now) > _as_utc(order.receipt_expires_at)


class DownloadAction(BaseModel):
    """What the receipt button does when pressed."""
    kind: Literal["open", "regenerate", "unavailable"] = Field(description="Action to take")
    url: Optional[str] = Field(default=None, description="Signed URL to open, only for 'open'")
    filename: Optional[str] = Field(default=None, description="Suggested download filename")


class ReceiptManager:
    """Receipt signed-URL lifecycle for one order view.

    Mirrors the button state in ``state``: ``loading`` while a request is in
    flight and a single user-facing ``error`` after any failure. The user may
    retry at any time; requests are not de-duplicated.
    """

    def __init__(
        self,
        client: Optional[ReceiptApiClient] = None,
        clock: Clock = utc_now,
        on_receipt_generated: Optional[Callable[[Order], None]] = None,
    ) -> None:
        self.client = client or ReceiptApiClient()
        self.clock = clock
        self.on_receipt_generated = on_receipt_generated
        self.expiry = timedelta(hours=get_config().receipt_expiry_hours)
        self.state = ReceiptState()

    def generate_receipt(
        self,
        order: Order,
        language: Literal["en", "es"] = "en",
        token: Optional[CancellationToken] = None,
    ) -> Optional[Order]:
        """Request a fresh signed URL for ``order``.

        Returns:
            Order: A copy of ``order`` with the receipt fields set, or None when
            generation failed (see ``state.error``) or the token was cancelled.
        """
        token = token or live_token()
        logger = get_logger(__name__, order_id=order.id)
        self.state = ReceiptState(loading=True)
        try:
            response = self.client.generate(order.id, language)
        except ReceiptGenerationError as e:
            logger.bind(endpoint=e.endpoint, status=e.status).error(f"Error generating receipt: {e}")
            if not token.cancelled:
                self.state = ReceiptState(error=GENERATE_ERROR_MESSAGE)
            return None
        finally:
            if self.state.loading:
                self.state = self.state.model_copy(update={"loading": False})

        if token.cancelled:
            logger.debug("Receipt view closed before the response arrived, dropping result")
            return None

        generated_at = self.clock()
        updated = order.model_copy(update={
            "receipt_url": response.receipt_url,
            "receipt_generated_at": generated_at,
            "receipt_expires_at": generated_at + self.expiry,
        })
        logger.info("Receipt generated")
        if self.on_receipt_generated is not None:
            self.on_receipt_generated(updated)
        return updated

    def is_expired(self, order: Order) -> bool:
        return is_expired(order, self.clock())

    def download(self, order: Order) -> DownloadAction:
        """Decide what pressing "download" does. An expired URL is never opened."""
        if not order.receipt_url:
            return DownloadAction(kind="unavailable")
        if self.is_expired(order):
            return DownloadAction(kind="regenerate")
        return DownloadAction(kind="open", url=order.receipt_url, filename=f"receipt-{order.id}.pdf")
