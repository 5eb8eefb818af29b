import pytest
from lulocart.models import OrderStatus
from lulocart.orders import (
    can_cancel,
    can_transition,
    is_terminal,
    next_status,
    parse_status,
    status_presentation,
    timeline_index,
)

def test_parse_known_and_unknown_statuses():
    assert parse_status("out_for_delivery") == OrderStatus.OUT_FOR_DELIVERY
    assert parse_status(OrderStatus.READY) == OrderStatus.READY
    assert parse_status("canceled") == OrderStatus.CANCELLED
    assert parse_status("teleported") == OrderStatus.PENDING
    assert parse_status(None) == OrderStatus.PENDING
    assert parse_status({"weird": True}) == OrderStatus.PENDING

def test_linear_progression():
    assert next_status("pending") == OrderStatus.CONFIRMED
    assert next_status("ready") == OrderStatus.OUT_FOR_DELIVERY
    assert next_status("out_for_delivery") == OrderStatus.DELIVERED
    assert next_status("delivered") is None
    assert next_status("cancelled") is None

@pytest.mark.parametrize("status", ["pending", "confirmed", "preparing", "ready", "out_for_delivery"])
def test_cancellation_reachable_before_delivery(status):
    assert can_transition(status, "cancelled")
    assert not is_terminal(status)

def test_terminal_states_do_not_move():
    assert is_terminal("delivered")
    assert is_terminal("cancelled")
    assert not can_transition("delivered", "cancelled")
    assert not can_transition("cancelled", "pending")

def test_steps_cannot_be_skipped_or_reversed():
    assert can_transition("confirmed", "preparing")
    assert not can_transition("confirmed", "ready")
    assert not can_transition("preparing", "confirmed")

def test_customer_cancellation_window():
    assert can_cancel("pending")
    assert can_cancel("confirmed")
    assert not can_cancel("preparing")
    assert not can_cancel("delivered")

def test_presentation_is_localized():
    en = status_presentation("out_for_delivery", "en")
    es = status_presentation("out_for_delivery", "es")
    assert en.label == "Out for delivery"
    assert es.label == "En camino"
    assert en.icon == es.icon == "package"

def test_unknown_status_falls_back_to_pending_presentation():
    presentation = status_presentation("teleported", "es")
    assert presentation.status == OrderStatus.PENDING
    assert presentation.label == "Pendiente"
    assert presentation.icon == "clock"
    assert "gray" in presentation.color

def test_every_status_has_a_presentation():
    for status in OrderStatus:
        for language in ("en", "es"):
            assert status_presentation(status.value, language).label

def test_timeline_index():
    assert timeline_index("pending") == -1
    assert timeline_index("payment_failed") == -1
    assert timeline_index("confirmed") == 0
    assert timeline_index("delivered") == 4
