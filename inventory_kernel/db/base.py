"""
Module: inventory_kernel.db.base
Responsibility: Declarative base class for the inventory ORM models.
Architecture position: Kernel > DB.  Lowest-level import target within the
    kernel; MUST NOT import from models/, selectors/ or outer layers.

Invariants enforced:
    - String primary keys: rows are keyed by the store's own identifiers
      (uuid strings in production).  New rows get a uuid4 string.
    - Timestamps map to DateTime(timezone=True).
"""

from datetime import datetime
from typing import ClassVar
from uuid import uuid4

from sqlalchemy import DateTime, String
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column


def _new_id() -> str:
    return str(uuid4())


class Base(DeclarativeBase):
    """
    Declarative base for all inventory models.

    Guarantees:
        - ``id`` is a String(36) primary key, defaulting to a uuid4 string.
        - datetime maps to DateTime(timezone=True).
    """

    type_annotation_map: ClassVar[dict] = {
        datetime: DateTime(timezone=True),
    }

    id: Mapped[str] = mapped_column(
        String(36),
        primary_key=True,
        default=_new_id,
    )
