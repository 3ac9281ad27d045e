from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from sqlalchemy import Boolean, DateTime, Index, Integer, Numeric, String, false, func
from sqlalchemy.orm import Mapped, mapped_column

from vehicle_inventory.infra.db.models.base import Base


class VehicleRow(Base):
    __tablename__ = "vehicles"
    __table_args__ = (Index("ix_vehicles_type_deleted", "type", "deleted"),)

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    date_added: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    type: Mapped[str] = mapped_column(String(4), nullable=False)
    msrp: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=2), nullable=False
    )  # 18 integer digits, 2 fraction digits

    year: Mapped[int] = mapped_column(Integer, nullable=False)
    make: Mapped[str] = mapped_column(String(255), nullable=False)
    model: Mapped[str] = mapped_column(String(255), nullable=False)
    miles: Mapped[int] = mapped_column(Integer, nullable=False)
    vin: Mapped[str] = mapped_column(String(255), nullable=False, unique=True)

    deleted: Mapped[bool] = mapped_column(
        Boolean,
        nullable=False,
        default=False,
        server_default=false(),
    )
