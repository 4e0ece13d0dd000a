"""
Module: inventory_kernel.models.stock_location
Responsibility: ORM mapping for the ``stock_locations`` table --
    warehouses, field vehicles, customer and project sites.
Architecture position: Kernel > Models.  May import from db/base.py only.
"""

from __future__ import annotations

from sqlalchemy import Boolean, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from inventory_kernel.db.base import Base


class StockLocationModel(Base):
    """Persistent stock location."""

    __tablename__ = "stock_locations"

    __table_args__ = (
        # Query: mobile active vehicles
        Index("idx_stock_location_type_flags", "location_type", "is_mobile", "is_active"),
        Index("idx_stock_location_name", "name"),
    )

    name: Mapped[str] = mapped_column(String(255), nullable=False)
    location_code: Mapped[str | None] = mapped_column(String(50), nullable=True)

    # warehouse | truck | customer_site | project_site | vendor
    location_type: Mapped[str] = mapped_column(String(50), nullable=False)

    is_mobile: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    is_active: Mapped[bool] = mapped_column(Boolean, nullable=False, default=True)

    # Technician assigned to a vehicle location
    technician_id: Mapped[str | None] = mapped_column(String(36), nullable=True)

    def __repr__(self) -> str:
        return f"<StockLocationModel {self.name} ({self.location_type})>"
