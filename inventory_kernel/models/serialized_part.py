"""
Module: inventory_kernel.models.serialized_part
Responsibility: ORM mapping for the ``serialized_parts`` table --
    individually serial-numbered units with a lifecycle status.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants verified (not enforced) here:
    - status 'in_stock'  => current_location_id is set
    - status 'installed' => installed_on_equipment_id is set and the unit
      no longer points at a warehouse/truck location
    ``status`` is a plain string column so values written by older
    workflows load unchanged and can be reported.
"""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, String
from sqlalchemy.orm import Mapped, mapped_column

from inventory_kernel.db.base import Base


class SerializedPartModel(Base):
    """Persistent tracked unit."""

    __tablename__ = "serialized_parts"

    __table_args__ = (
        Index("idx_serialized_part_location_status", "current_location_id", "status"),
        Index("idx_serialized_part_status", "status"),
    )

    part_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("parts.id"), nullable=False,
    )
    serial_number: Mapped[str] = mapped_column(String(255), nullable=False)
    status: Mapped[str] = mapped_column(String(50), nullable=False)

    current_location_id: Mapped[str | None] = mapped_column(
        String(36), ForeignKey("stock_locations.id"), nullable=True,
    )
    # Equipment/asset rows live outside this schema
    installed_on_equipment_id: Mapped[str | None] = mapped_column(String(36), nullable=True)

    def __repr__(self) -> str:
        return f"<SerializedPartModel {self.serial_number} ({self.status})>"
