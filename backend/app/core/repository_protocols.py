"""Boundary Protocols — contracts between core and shell.

Invariants:
    - Core NEVER imports from shell — dependency arrows point inward only
    - load/save operate on the whole tree; partial updates are not supported
    - Implementations raise PersistenceError (or a subclass) on failure, never return None

Design Decisions:
    - Protocol over ABC: structural subtyping, no inheritance hierarchy
    - Async in Protocol: implementations do IO, but the mutators that produce the tree
      are never async themselves — the shell orchestrates the async calls around them
"""

from typing import Protocol

from app.core.banner_tree import Tree


class TreeRepository(Protocol):
    """Contract for tree document persistence — implemented by shell."""
    async def load(self) -> Tree: ...
    async def save(self, tree: Tree) -> None: ...
