"""JSON File Repository — TreeRepository backed by a single data.json document.

Invariants:
    - Missing file → DocumentNotFoundError; non-UTF-8 bytes, bad JSON or bad shape →
      DocumentMalformedError; any other OSError → PersistenceError
    - save writes a sibling temp file and os.replace()s it: a failed save leaves the
      previous document intact
    - One attempt per call, no retry

Design Decisions:
    - Blocking file IO pushed to a worker thread (asyncio.to_thread) so the event loop
      never stalls on disk
"""

import asyncio
import json
import logging
import os
from pathlib import Path

from app.core.banner_tree import Tree
from app.core.errors import DocumentMalformedError, DocumentNotFoundError, PersistenceError
from app.core.tree_snapshot import tree_from_document, tree_to_document
from app.schemas.tree_document import parse_tree_document

logger = logging.getLogger(__name__)


class JsonFileTreeRepository:
    """Loads and saves the whole tree as one JSON file."""

    def __init__(self, path: str | Path):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    async def load(self) -> Tree:
        raw = await asyncio.to_thread(self._read_text)
        try:
            data = json.loads(raw)
        except json.JSONDecodeError as e:
            raise DocumentMalformedError(str(self._path), [str(e)]) from e
        document = parse_tree_document(data, source=str(self._path))
        tree = tree_from_document(document)
        logger.info(
            f"Loaded tree with {len(tree.departments)} department(s)",
            extra={"operation": "load", "path": str(self._path)},
        )
        return tree

    async def save(self, tree: Tree) -> None:
        payload = json.dumps(tree_to_document(tree), indent=2, ensure_ascii=False)
        await asyncio.to_thread(self._write_text, payload)
        logger.info(
            "Saved tree document",
            extra={"operation": "save", "path": str(self._path)},
        )

    def _read_text(self) -> str:
        try:
            return self._path.read_text(encoding="utf-8")
        except FileNotFoundError as e:
            raise DocumentNotFoundError(str(self._path)) from e
        except UnicodeDecodeError as e:
            raise DocumentMalformedError(str(self._path), [str(e)]) from e
        except OSError as e:
            raise PersistenceError(
                f"Could not read {self._path}: {e.strerror}", "load",
            ) from e

    def _write_text(self, payload: str) -> None:
        tmp_path = self._path.with_name(self._path.name + ".tmp")
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            tmp_path.write_text(payload, encoding="utf-8")
            os.replace(tmp_path, self._path)
        except OSError as e:
            tmp_path.unlink(missing_ok=True)
            raise PersistenceError(
                f"Could not write {self._path}: {e.strerror}", "save",
            ) from e
