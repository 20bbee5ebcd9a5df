"""Tree Document ORM — persists the whole banner tree as one JSON document.

Invariants:
    - name is unique: one row per named tree document
    - document holds exactly the wire format of core/tree_snapshot (no selection state)
    - every save rewrites the whole document (no partial updates)

Design Decisions:
    - JSON column over normalized department/section/banner tables: the tree is always
      loaded and saved as a unit
"""

from datetime import datetime, timezone

from sqlalchemy import String, Integer, DateTime, JSON
from sqlalchemy.orm import Mapped, mapped_column

from app.db.base import Base


class TreeDocumentRecord(Base):
    __tablename__ = "tree_documents"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    name: Mapped[str] = mapped_column(String(100), nullable=False, unique=True)
    document: Mapped[dict] = mapped_column(JSON, nullable=False, default=dict)
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
    updated_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True),
        nullable=False,
        default=lambda: datetime.now(timezone.utc),
    )
