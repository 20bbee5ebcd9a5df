"""SQL Tree Repository — TreeRepository backed by the tree_documents table.

Invariants:
    - One row per document_name; load of an absent row → DocumentNotFoundError
    - save upserts the full document in a single transaction
    - SQLAlchemy failures surface as DatabaseError (mapped by DatabaseSessionManager)

Design Decisions:
    - Manager passed in explicitly rather than read from the db_manager global
"""

import logging
from datetime import datetime, timezone

from sqlalchemy import select

from app.core.banner_tree import Tree
from app.core.errors import DocumentNotFoundError
from app.core.tree_snapshot import tree_from_document, tree_to_document
from app.infrastructure.database import DatabaseSessionManager
from app.models.tree_document import TreeDocumentRecord
from app.schemas.tree_document import parse_tree_document

logger = logging.getLogger(__name__)


class SqlTreeRepository:
    """Loads and saves the whole tree as one JSON row."""

    def __init__(
        self, manager: DatabaseSessionManager, document_name: str = "default",
    ):
        self._manager = manager
        self._document_name = document_name

    @property
    def source(self) -> str:
        return f"tree_documents/{self._document_name}"

    async def load(self) -> Tree:
        async with self._manager.session() as db:
            result = await db.execute(
                select(TreeDocumentRecord.document).where(
                    TreeDocumentRecord.name == self._document_name,
                ),
            )
            document = result.scalar_one_or_none()
        if document is None:
            raise DocumentNotFoundError(self.source)
        tree = tree_from_document(parse_tree_document(document, source=self.source))
        logger.info(
            f"Loaded tree with {len(tree.departments)} department(s)",
            extra={"operation": "load", "path": self.source},
        )
        return tree

    async def save(self, tree: Tree) -> None:
        document = tree_to_document(tree)
        async with self._manager.session() as db:
            result = await db.execute(
                select(TreeDocumentRecord).where(
                    TreeDocumentRecord.name == self._document_name,
                ),
            )
            record = result.scalar_one_or_none()
            if record is None:
                db.add(TreeDocumentRecord(
                    name=self._document_name, document=document,
                ))
            else:
                record.document = document
                record.updated_at = datetime.now(timezone.utc)
            await db.commit()
        logger.info(
            "Saved tree document",
            extra={"operation": "save", "path": self.source},
        )
