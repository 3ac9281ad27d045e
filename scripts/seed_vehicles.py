#!/usr/bin/env python3
"""
Seed the vehicles table with deterministic random data.

Features:
- Deterministic: fixed seed → same dataset every run
- Idempotent: safe to run multiple times (clears before seeding)
- Both partitions: new and used vehicles, some of them hidden (deleted=true)

Usage:
    python scripts/seed_vehicles.py
"""

from __future__ import annotations

import random
import string
import sys
from datetime import datetime, timedelta, timezone
from decimal import Decimal
from pathlib import Path

# Add src to path so we can import our modules
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from sqlalchemy import delete

from vehicle_inventory.infra.db.models.vehicle import VehicleRow
from vehicle_inventory.infra.db.session import get_session


# ==============================================================================
# Configuration
# ==============================================================================

RANDOM_SEED = 42  # Fixed seed for deterministic results
NUM_VEHICLES = 100  # Number of vehicles to generate
HIDDEN_RATIO = 0.1  # Share of vehicles flagged deleted=true


# ==============================================================================
# Vehicle Data
# ==============================================================================

MODELS_BY_MAKE = {
    "Ford": ["F150", "Escape", "Explorer", "Mustang", "Ranger"],
    "Toyota": ["Corolla", "Camry", "RAV4", "Tacoma", "Highlander"],
    "Honda": ["Civic", "Accord", "CR-V", "Pilot", "Odyssey"],
    "Chevrolet": ["Silverado", "Equinox", "Malibu", "Tahoe", "Traverse"],
    "Nissan": ["Altima", "Sentra", "Rogue", "Frontier", "Pathfinder"],
    "Jeep": ["Wrangler", "Cherokee", "Compass", "Gladiator", "Renegade"],
}

# VINs never use I, O or Q
VIN_ALPHABET = "".join(c for c in string.ascii_uppercase + string.digits if c not in "IOQ")


# ==============================================================================
# Seed Generation
# ==============================================================================


def generate_vin(taken: set[str]) -> str:
    """Random 17-character VIN not present in ``taken``."""
    while True:
        vin = "".join(random.choices(VIN_ALPHABET, k=17))
        if vin not in taken:
            taken.add(vin)
            return vin


def generate_vehicle(now: datetime, taken_vins: set[str]) -> VehicleRow:
    """Generate a single random vehicle."""
    vehicle_type = random.choice(["new", "used"])
    make = random.choice(list(MODELS_BY_MAKE))
    model = random.choice(MODELS_BY_MAKE[make])

    if vehicle_type == "new":
        year = random.randint(now.year, now.year + 1)
        miles = random.randint(0, 50)
    else:
        year = random.randint(now.year - 15, now.year - 1)
        miles = random.randint(1000, 15000) * (now.year - year)

    msrp = Decimal(random.randint(1_000_000, 8_000_000)) / 100

    return VehicleRow(
        date_added=now - timedelta(minutes=random.randint(0, 60 * 24 * 365)),
        type=vehicle_type,
        msrp=msrp,
        year=year,
        make=make,
        model=model,
        miles=miles,
        vin=generate_vin(taken_vins),
        deleted=random.random() < HIDDEN_RATIO,
    )


def seed_vehicles(num_vehicles: int = NUM_VEHICLES, seed: int = RANDOM_SEED) -> None:
    """
    Seed the database with random vehicle data.

    Args:
        num_vehicles: Number of vehicles to generate
        seed: Random seed for deterministic results
    """
    random.seed(seed)
    now = datetime.now(timezone.utc)

    print(f"Seeding database with {num_vehicles} vehicles (seed={seed})...")

    with get_session() as session:
        # Step 1: Clear existing data (idempotent)
        deleted_count = session.execute(delete(VehicleRow)).rowcount
        print(f"   Deleted {deleted_count} existing vehicles")

        # Step 2: Generate and insert new vehicles
        taken_vins: set[str] = set()
        vehicles = [generate_vehicle(now, taken_vins) for _ in range(num_vehicles)]

        session.add_all(vehicles)
        session.flush()

        print(f"{len(vehicles)} vehicles were added to the DB.")

        for i, vehicle in enumerate(vehicles[:5], 1):
            print(
                f"   {i}. [{vehicle.type}] {vehicle.year} {vehicle.make} {vehicle.model} - "
                f"${vehicle.msrp:,.2f} ({vehicle.miles} mi, VIN {vehicle.vin})"
            )

        if len(vehicles) > 5:
            print(f"   ... and {len(vehicles) - 5} more")


# ==============================================================================
# Main
# ==============================================================================


if __name__ == "__main__":
    try:
        seed_vehicles()
    except Exception as e:
        print(f"Error seeding database: {e}", file=sys.stderr)
        sys.exit(1)
