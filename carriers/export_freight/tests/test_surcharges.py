"""
Unit Tests for Export Freight Surcharges

Tests surcharge configuration and the scalar surcharge interface.

Run with: pytest carriers/export_freight/tests/test_surcharges.py -v
"""

import pytest

from carriers.export_freight.errors import InvalidChargeError
from carriers.export_freight.models import DeliveryCharge, Dimensions, ShipmentRequest
from carriers.export_freight.surcharges import (
    ALL,
    CLEARANCE,
    DELIVERY_4W,
    DELIVERY_6W,
    get_delivery_surcharge,
    get_exclusivity_group,
    validate_surcharges,
)


def make_request(**overrides) -> ShipmentRequest:
    values = dict(
        dimensions=Dimensions(135, 110, 110),
        pallet_count=3,
        actual_weight=0,
        destination="swiss",
    )
    values.update(overrides)
    return ShipmentRequest(**values)


class TestConfiguration:
    """Tests for surcharge definitions."""

    def test_configuration_is_valid(self):
        validate_surcharges()

    def test_delivery_group_priority_order(self):
        assert get_exclusivity_group("delivery") == [DELIVERY_4W, DELIVERY_6W]

    def test_all_names_unique(self):
        names = [s.name for s in ALL]
        assert len(names) == len(set(names))

    def test_list_prices(self):
        assert DELIVERY_4W.net_price() == 3500
        assert DELIVERY_6W.net_price() == 6500
        assert CLEARANCE.net_price() == 5350

    def test_labels(self):
        assert DELIVERY_4W.label == "Delivery Charge (4 Wheels)"
        assert DELIVERY_6W.label == "Delivery Charge (6 Wheels)"
        assert CLEARANCE.label == "Clearance Charge (Include 7% VAT)"

    def test_vehicle_lookup(self):
        assert get_delivery_surcharge("4wheel") is DELIVERY_4W
        assert get_delivery_surcharge("6wheel") is DELIVERY_6W
        assert get_delivery_surcharge(None) is None


class TestScalarAmounts:
    """Tests for applies()/amount() on single requests."""

    def test_delivery_only_for_selected_vehicle(self):
        request = make_request(delivery=DeliveryCharge(required=True, vehicle="4wheel"))
        assert DELIVERY_4W.applies(request)
        assert not DELIVERY_6W.applies(request)
        assert DELIVERY_4W.amount(request) == 3500
        assert DELIVERY_6W.amount(request) == 0

    def test_delivery_not_required(self):
        request = make_request(delivery=DeliveryCharge(required=False, vehicle="4wheel"))
        assert DELIVERY_4W.amount(request) == 0

    def test_clearance_uses_request_figure(self):
        assert CLEARANCE.amount(make_request()) == 5350
        assert CLEARANCE.amount(make_request(clearance_charge=6000)) == 6000

    def test_every_rated_vehicle_has_a_surcharge(self):
        for vehicle in DeliveryCharge().rates:
            assert get_delivery_surcharge(vehicle) is not None

    def test_unsupported_vehicle_rejected(self):
        with pytest.raises(InvalidChargeError, match="10wheel"):
            DeliveryCharge(required=True, vehicle="10wheel", rates={"10wheel": 9000})
