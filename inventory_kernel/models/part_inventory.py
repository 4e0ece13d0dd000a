"""
Module: inventory_kernel.models.part_inventory
Responsibility: ORM mapping for the ``part_inventory`` ledger -- the bulk
    quantity of one part held at one stock location.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants verified (not enforced) here:
    At most one row per (part_id, stock_location_id).  No unique
    constraint on the pair; the duplicate-records check reports violations.
"""

from __future__ import annotations

from sqlalchemy import ForeignKey, Index, Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from inventory_kernel.db.base import Base


class PartInventoryModel(Base):
    """Persistent ledger row."""

    __tablename__ = "part_inventory"

    __table_args__ = (
        Index("idx_part_inventory_part", "part_id"),
        Index("idx_part_inventory_location", "stock_location_id"),
    )

    part_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("parts.id"), nullable=False,
    )
    stock_location_id: Mapped[str] = mapped_column(
        String(36), ForeignKey("stock_locations.id"), nullable=False,
    )
    quantity: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    def __repr__(self) -> str:
        return (
            f"<PartInventoryModel part={self.part_id} "
            f"loc={self.stock_location_id} qty={self.quantity}>"
        )
