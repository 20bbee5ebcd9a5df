"""Service test fixtures — in-memory tree repository + FastAPI test client.

Invariants:
    - Every test gets a fresh repository and EditorSession
    - app.state.editor_session is swapped in for the client and restored afterwards

Design Decisions:
    - In-memory repository speaks the real document format (tree_snapshot) so route
      tests exercise the same derivation as the file and SQL gateways
"""

import pytest
from httpx import ASGITransport, AsyncClient

from app.core.banner_tree import Tree
from app.core.errors import DocumentNotFoundError, PersistenceError
from app.core.tree_snapshot import tree_from_document, tree_to_document
from app.main import app
from app.services.editor_session import EditorSession


class InMemoryTreeRepository:
    """TreeRepository that keeps the persisted document in a dict."""

    def __init__(self, document: dict | None = None):
        self.document = document
        self.save_count = 0

    async def load(self) -> Tree:
        if self.document is None:
            raise DocumentNotFoundError("memory")
        return tree_from_document(self.document)

    async def save(self, tree: Tree) -> None:
        self.document = tree_to_document(tree)
        self.save_count += 1


class FailingTreeRepository:
    """TreeRepository whose storage is always unavailable."""

    async def load(self) -> Tree:
        raise PersistenceError("storage offline", "load")

    async def save(self, tree: Tree) -> None:
        raise PersistenceError("storage offline", "save")


@pytest.fixture
def repository(sample_document):
    return InMemoryTreeRepository(sample_document)


@pytest.fixture
async def editor(repository):
    session = EditorSession(repository)
    await session.load()
    return session


@pytest.fixture
async def client(editor):
    """FastAPI test client bound to the editor fixture."""
    original = getattr(app.state, "editor_session", None)
    app.state.editor_session = editor
    async with AsyncClient(
        transport=ASGITransport(app=app), base_url="http://test",
    ) as c:
        yield c
    app.state.editor_session = original


@pytest.fixture
def empty_repository():
    return InMemoryTreeRepository(None)


@pytest.fixture
def failing_repository():
    return FailingTreeRepository()
