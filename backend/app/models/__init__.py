"""ORM Models — SQLAlchemy declarative models.

Invariants:
    - All models inherit from Base (db/base.py)

Design Decisions:
    - All models imported here so Base.metadata is complete before create_all / autogenerate
"""

from app.models.tree_document import TreeDocumentRecord  # noqa: F401
