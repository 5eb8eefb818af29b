from __future__ import annotations

from typing import Literal, Optional

from pydantic import BaseModel, Field

from .order import OrderStatus


class OrderHistoryFilters(BaseModel):
    """Filters for a customer's order history."""
    search: Optional[str] = Field(default=None, description="Matches store name, order id or product names")
    status: Optional[OrderStatus | Literal["all"]] = Field(default="all", description="Status filter")
    sort_by: Literal["date", "amount", "status"] = Field(default="date", description="Sort key")
    sort_order: Literal["asc", "desc"] = Field(default="desc", description="Sort direction")
