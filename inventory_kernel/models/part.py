"""
Module: inventory_kernel.models.part
Responsibility: ORM mapping for the ``parts`` table -- stock-keeping unit
    definitions carrying the denormalized ``quantity_on_hand`` aggregate.
Architecture position: Kernel > Models.  May import from db/base.py only.

Invariants verified (not enforced) here:
    quantity_on_hand == SUM(part_inventory.quantity) for the part.  The
    column is maintained by the surrounding application's receiving and
    fulfillment workflows; the reconciliation engine only reads it.
"""

from __future__ import annotations

from sqlalchemy import Integer, String
from sqlalchemy.orm import Mapped, mapped_column

from inventory_kernel.db.base import Base


class PartModel(Base):
    """Persistent part definition."""

    __tablename__ = "parts"

    part_number: Mapped[str | None] = mapped_column(String(100), nullable=True, index=True)
    name: Mapped[str] = mapped_column(String(255), nullable=False)
    manufacturer: Mapped[str | None] = mapped_column(String(255), nullable=True)

    # Cached total; NULL when never populated
    quantity_on_hand: Mapped[int | None] = mapped_column(Integer, nullable=True)

    def __repr__(self) -> str:
        return f"<PartModel {self.part_number} qoh={self.quantity_on_hand}>"
