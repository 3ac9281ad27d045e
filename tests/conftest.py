"""Shared fixtures: a fixed clock and vehicle builders."""

from __future__ import annotations

from dataclasses import replace
from datetime import datetime, timezone
from decimal import Decimal
from typing import Any, Callable

import pytest

from vehicle_inventory.domain.vehicle import Vehicle

FIXED_NOW = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)


@pytest.fixture()
def fixed_clock() -> Callable[[], datetime]:
    """Clock pinned to 2026-05-01, so the latest valid model year is 2027."""
    return lambda: FIXED_NOW


@pytest.fixture()
def make_vehicle() -> Callable[..., Vehicle]:
    """Build a valid Vehicle, overriding any attribute by keyword."""

    def _make(**overrides: Any) -> Vehicle:
        vehicle = Vehicle(
            type="new",
            msrp=Decimal("8500.99"),
            year=2022,
            make="Ford",
            model="F150",
            miles=35000,
            vin="1FTEW1C58NKD33222",
            date_added=FIXED_NOW,
        )
        return replace(vehicle, **overrides)

    return _make


@pytest.fixture()
def valid_fields() -> dict[str, Any]:
    """A complete, valid create payload."""
    return {
        "type": "new",
        "msrp": "8500.99",
        "year": 2022,
        "make": "Ford",
        "model": "F150",
        "miles": 35000,
        "vin": "1FTEW1C58NKD33222",
        "deleted": "false",
    }
