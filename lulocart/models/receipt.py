from __future__ import annotations

from datetime import datetime
from typing import Optional

from pydantic import Field

from ._base import CamelModel


class ReceiptResponse(CamelModel):
    """Body returned by the receipt generation endpoint."""
    success: bool = Field(default=False, description="Whether a receipt was produced")
    message: Optional[str] = Field(default=None, description="Server message")
    receipt_url: Optional[str] = Field(default=None, description="Signed receipt URL, valid 24 hours")
    order_id: Optional[str] = Field(default=None, description="Order the receipt belongs to")
    generated_at: Optional[datetime] = Field(default=None, description="Server generation timestamp")
    error: Optional[str] = Field(default=None, description="Server error message when success is false")


class ReceiptState(CamelModel):
    """What a receipt button shows."""
    loading: bool = Field(default=False, description="A request is in flight")
    error: Optional[str] = Field(default=None, description="User-facing error message")
