from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime
from decimal import Decimal
from typing import Any

VEHICLE_TYPES = ("new", "used")

# Fields a client may submit on create/update, in validation order
EDITABLE_FIELDS = ("type", "msrp", "year", "make", "model", "miles", "vin", "deleted")

MIN_YEAR = 1900


@dataclass(frozen=True)
class Vehicle:
    type: str
    msrp: Decimal
    year: int
    make: str
    model: str
    miles: int
    vin: str
    date_added: datetime
    deleted: bool = False
    id: int | None = None  # Assigned by the store on insert

    def fields(self) -> dict[str, Any]:
        """Editable fields as a plain mapping (the starting point for a partial update)."""
        return {name: getattr(self, name) for name in EDITABLE_FIELDS}

    def belongs_to(self, partition: str) -> bool:
        return self.type == partition
