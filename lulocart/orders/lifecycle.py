"""Read-side order lifecycle.

Status changes are made by the backend. This module only interprets the
stored status: what comes next, whether the customer may still cancel, and
how a status is presented.
"""
from __future__ import annotations

from typing import Any, Dict, Literal, Optional, Tuple

from pydantic import BaseModel, Field

from ..logging import get_logger
from ..models import OrderStatus

Language = Literal["en", "es"]

LIFECYCLE: Tuple[OrderStatus, ...] = (
    OrderStatus.PENDING,
    OrderStatus.CONFIRMED,
    OrderStatus.PREPARING,
    OrderStatus.READY,
    OrderStatus.OUT_FOR_DELIVERY,
    OrderStatus.DELIVERED,
)
TERMINAL_STATUSES = frozenset({OrderStatus.DELIVERED, OrderStatus.CANCELLED})
CUSTOMER_CANCELLABLE = frozenset({OrderStatus.PENDING, OrderStatus.CONFIRMED})

FAILED_RAW_STATUSES = frozenset({"failed", "cancelled", "canceled", "payment_failed"})
PENDING_RAW_STATUSES = frozenset({"pending", "pending_payment", "processing"})

# Steps shown on the tracking timeline; pending precedes the first step.
TIMELINE: Tuple[OrderStatus, ...] = LIFECYCLE[1:]


class StatusPresentation(BaseModel):
    """How a status is shown in order history and tracking views."""
    status: OrderStatus = Field(description="Status the presentation was resolved to")
    icon: str = Field(description="Icon name")
    color: str = Field(description="Badge color classes")
    label: str = Field(description="Localized status label")


_ICONS: Dict[OrderStatus, Tuple[str, str]] = {
    OrderStatus.PENDING: ("clock", "bg-amber-100 text-amber-800 border-amber-200"),
    OrderStatus.CONFIRMED: ("package", "bg-blue-100 text-blue-800 border-blue-200"),
    OrderStatus.PREPARING: ("package", "bg-blue-100 text-blue-800 border-blue-200"),
    OrderStatus.READY: ("package", "bg-green-100 text-green-800 border-green-200"),
    OrderStatus.OUT_FOR_DELIVERY: ("package", "bg-green-100 text-green-800 border-green-200"),
    OrderStatus.DELIVERED: ("check-circle", "bg-green-100 text-green-900 border-green-300"),
    OrderStatus.CANCELLED: ("x-circle", "bg-red-100 text-red-800 border-red-200"),
}
_UNKNOWN_STYLE = ("clock", "bg-gray-100 text-gray-800 border-gray-200")

_LABELS: Dict[Language, Dict[OrderStatus, str]] = {
    "en": {
        OrderStatus.PENDING: "Pending",
        OrderStatus.CONFIRMED: "Confirmed",
        OrderStatus.PREPARING: "Preparing",
        OrderStatus.READY: "Ready",
        OrderStatus.OUT_FOR_DELIVERY: "Out for delivery",
        OrderStatus.DELIVERED: "Delivered",
        OrderStatus.CANCELLED: "Cancelled",
    },
    "es": {
        OrderStatus.PENDING: "Pendiente",
        OrderStatus.CONFIRMED: "Confirmado",
        OrderStatus.PREPARING: "Preparando",
        OrderStatus.READY: "Listo",
        OrderStatus.OUT_FOR_DELIVERY: "En camino",
        OrderStatus.DELIVERED: "Entregado",
        OrderStatus.CANCELLED: "Cancelado",
    },
}


def parse_status(raw: Any) -> OrderStatus:
    """Map a stored status value to an OrderStatus. Unknown values read as pending."""
    if isinstance(raw, OrderStatus):
        return raw
    try:
        return OrderStatus(raw)
    except ValueError:
        if raw == "canceled":
            return OrderStatus.CANCELLED
        get_logger(__name__).warning(f"Unknown order status {raw!r}, treating as pending")
        return OrderStatus.PENDING


def is_known_status(raw: Any) -> bool:
    return isinstance(raw, str) and raw in OrderStatus._value2member_map_


def status_presentation(raw: Any, language: Language = "en") -> StatusPresentation:
    """Icon, color and label for a stored status. Never raises."""
    status = parse_status(raw)
    icon, color = _ICONS[status] if is_known_status(raw) or raw == "canceled" else _UNKNOWN_STYLE
    labels = _LABELS.get(language, _LABELS["en"])
    return StatusPresentation(status=status, icon=icon, color=color, label=labels[status])


def is_terminal(status: Any) -> bool:
    return parse_status(status) in TERMINAL_STATUSES


def next_status(status: Any) -> Optional[OrderStatus]:
    """The status that follows ``status`` in the lifecycle; None for terminal states."""
    current = parse_status(status)
    if current in TERMINAL_STATUSES:
        return None
    return LIFECYCLE[LIFECYCLE.index(current) + 1]


def can_transition(current: Any, target: Any) -> bool:
    """Whether the backend may move an order from ``current`` to ``target``.

    Orders advance one step at a time; cancellation is allowed from any
    state before delivery.
    """
    current_status = parse_status(current)
    target_status = parse_status(target)
    if current_status in TERMINAL_STATUSES:
        return False
    if target_status == OrderStatus.CANCELLED:
        return True
    return next_status(current_status) == target_status


def can_cancel(status: Any) -> bool:
    """Whether the customer may still cancel. Stores can cancel later via the backend."""
    return parse_status(status) in CUSTOMER_CANCELLABLE


def is_failed_or_cancelled(raw: Any) -> bool:
    return _raw_value(raw) in FAILED_RAW_STATUSES


def is_pending_state(raw: Any) -> bool:
    return _raw_value(raw) in PENDING_RAW_STATUSES


def _raw_value(raw: Any) -> str:
    return raw.value if isinstance(raw, OrderStatus) else str(raw)


def timeline_index(raw: Any) -> int:
    """Index of the status on the tracking timeline; -1 when before or off the timeline."""
    if is_failed_or_cancelled(raw) or is_pending_state(raw):
        return -1
    status = parse_status(raw)
    return TIMELINE.index(status) if status in TIMELINE else -1
