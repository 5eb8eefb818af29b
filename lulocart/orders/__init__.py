from .lifecycle import (
    StatusPresentation,
    can_cancel,
    can_transition,
    is_failed_or_cancelled,
    is_pending_state,
    is_terminal,
    next_status,
    parse_status,
    status_presentation,
    timeline_index,
)
from .history import (
    InMemoryOrderSource,
    OrderHistoryLoader,
    OrderHistoryResult,
    OrderSource,
    available_statuses,
    filter_orders,
    mock_orders,
)
from .builder import build_order, complete_checkout, validate_checkout

__all__ = [
    "StatusPresentation",
    "can_cancel",
    "can_transition",
    "is_failed_or_cancelled",
    "is_pending_state",
    "is_terminal",
    "next_status",
    "parse_status",
    "status_presentation",
    "timeline_index",
    "InMemoryOrderSource",
    "OrderHistoryLoader",
    "OrderHistoryResult",
    "OrderSource",
    "available_statuses",
    "filter_orders",
    "mock_orders",
    "build_order",
    "complete_checkout",
    "validate_checkout",
]
