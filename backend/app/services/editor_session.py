"""Editor Session — owns the current tree and sequences mutations around persistence.

Invariants:
    - Exactly one TreeStore per session; the tree is never a hidden module global
    - load, save and every mutation run under one asyncio.Lock — no mutation
      interleaves with a pending load/save
    - Permissive mode (default): rejected mutations are logged and returned, tree unchanged
    - Strict mode: rejected mutations raise the typed error from core/errors.py
    - Persistence errors are logged and re-raised, never swallowed

Design Decisions:
    - Pure mutators from core/tree_mutators do the work; this class only applies
      results and talks to the repository (impureim sandwich)
"""

import asyncio
import logging
from typing import Callable

from app.core.banner_tree import Section, Tree, TreeStore
from app.core.errors import DocumentNotFoundError, PersistenceError
from app.core.repository_protocols import TreeRepository
from app.core.tree_mutators import (
    MutationResult, add_banner, add_department, add_section, select_banner_type,
)
from app.core.tree_selectors import find_section

logger = logging.getLogger(__name__)


class EditorSession:
    """Single logical editing session over one persisted tree."""

    def __init__(
        self,
        repository: TreeRepository,
        *,
        strict: bool = False,
        tree: Tree | None = None,
    ):
        self._repository = repository
        self._store = TreeStore(tree)
        self._strict = strict
        self._lock = asyncio.Lock()

    @property
    def tree(self) -> Tree:
        return self._store.current()

    @property
    def strict(self) -> bool:
        return self._strict

    def section(self, department_id: int, section_id: int) -> Section | None:
        return find_section(self.tree, department_id, section_id)

    # --- Persistence ---------------------------------------------------------

    async def load(self, *, create_if_missing: bool = False) -> Tree:
        """Replace the current tree with the persisted one."""
        async with self._lock:
            try:
                tree = await self._repository.load()
            except DocumentNotFoundError as e:
                if not create_if_missing:
                    logger.error(f"Tree load failed: {e.message}", extra={"operation": "load"})
                    raise
                logger.warning(
                    f"{e.message}; starting with an empty tree",
                    extra={"operation": "load"},
                )
                tree = Tree()
            except PersistenceError as e:
                logger.error(
                    f"Tree load failed: {e.message}",
                    extra={"operation": "load", "error_code": e.code},
                )
                raise
            self._store.replace(tree)
            return tree

    async def save(self) -> Tree:
        """Write the full current tree."""
        async with self._lock:
            tree = self._store.current()
            try:
                await self._repository.save(tree)
            except PersistenceError as e:
                logger.error(
                    f"Tree save failed: {e.message}",
                    extra={"operation": "save", "error_code": e.code},
                )
                raise
            return tree

    # --- Commands ------------------------------------------------------------

    async def add_department(self, name: str) -> MutationResult:
        return await self._apply(lambda tree: add_department(tree, name))

    async def add_section(self, department_id: int, name: str) -> MutationResult:
        return await self._apply(
            lambda tree: add_section(tree, department_id, name),
        )

    async def add_banner(
        self,
        department_id: int,
        section_id: int,
        banner_type: str,
        content: str,
        name: str | None = None,
    ) -> MutationResult:
        return await self._apply(
            lambda tree: add_banner(
                tree, department_id, section_id, banner_type, content, name,
            ),
        )

    async def select_banner_type(
        self, department_id: int, section_id: int, banner_type: str,
    ) -> MutationResult:
        return await self._apply(
            lambda tree: select_banner_type(
                tree, department_id, section_id, banner_type,
            ),
        )

    async def _apply(
        self, mutate: Callable[[Tree], MutationResult],
    ) -> MutationResult:
        async with self._lock:
            result = mutate(self._store.current())
            if not result.applied:
                logger.warning(
                    f"Mutation rejected: {result.error_code.value}",
                    extra={
                        "error_code": result.error_code.value,
                        "department_id": result.department_id,
                        "section_id": result.section_id,
                    },
                )
                if self._strict:
                    result.raise_for_error()
                return result
            self._store.replace(result.tree)
            return result
