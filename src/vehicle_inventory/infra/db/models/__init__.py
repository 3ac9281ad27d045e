from vehicle_inventory.infra.db.models.base import Base
from vehicle_inventory.infra.db.models.vehicle import VehicleRow

__all__ = ["Base", "VehicleRow"]
