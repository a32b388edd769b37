"""Tests des modèles / Model tests."""

from smartpass.models.credential import Credential, PaymentStatus
from smartpass.models.route import Route
from smartpass.models.scan_record import TripWindow, Verdict


def test_credential_repr():
    c = Credential(id="S001", name="Asha Verma", assigned_route_id="B101")
    assert "S001" in repr(c)
    assert "B101" in repr(c)


def test_route_repr():
    r = Route(id="B101", route_name="North Campus Loop", driver_name="Ramesh", conductor_credential_hash="x")
    assert "B101" in repr(r)


def test_enums():
    assert PaymentStatus.PAID.value == "Paid"
    assert TripWindow.MORNING.value == "Morning"
    assert TripWindow.AFTERNOON.value == "Afternoon"
    assert [v.value for v in Verdict] == ["Valid", "Duplicate", "Invalid", "Error"]
