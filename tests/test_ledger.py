"""Tests for the delivery ledger integrity checks."""

from restaurant_sim.models import Order
from restaurant_sim.services.ledger import DeliveryLedger


def _delivered(waiter="Waiter-1", dish="Pizza"):
    order = Order(dish, 1)
    order.assign_waiter(waiter)
    order.mark_cooking()
    order.mark_ready()
    order.mark_delivered(waiter)
    return order


class TestDeliveryLedger:
    def test_empty_ledger(self):
        report = DeliveryLedger().verify()
        assert report.total_delivered == 0
        assert report.is_consistent
        assert report.mean_cook_seconds is None

    def test_records_deliveries(self):
        ledger = DeliveryLedger()
        ledger.record(_delivered("Waiter-1"))
        ledger.record(_delivered("Waiter-2", "Soup"))

        df = ledger.to_dataframe()
        assert len(ledger) == 2
        assert list(df.columns) == DeliveryLedger.COLUMNS
        assert list(df["dish_name"]) == ["Pizza", "Soup"]

        report = ledger.verify()
        assert report.total_delivered == 2
        assert report.is_consistent
        assert report.mean_cook_seconds is not None

    def test_detects_duplicate_delivery(self):
        ledger = DeliveryLedger()
        order = _delivered()
        ledger.record(order)
        ledger.record(order)

        report = ledger.verify()
        assert report.duplicate_ids == [order.id]
        assert not report.is_consistent

    def test_detects_misrouted_delivery(self):
        ledger = DeliveryLedger()
        order = _delivered("Waiter-1")
        order.delivered_by = "Waiter-3"
        ledger.record(order)

        report = ledger.verify()
        assert report.misrouted_ids == [order.id]
        assert not report.is_consistent
