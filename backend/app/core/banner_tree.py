"""Banner Tree — immutable Department → Section → Banner snapshot and its store.

Invariants:
    - Every entity is a frozen dataclass; sibling sequences are tuples
    - Department ids unique across the tree; section ids unique within a department;
      banner ids unique within a section
    - A section holds at most MAX_BANNERS_PER_SECTION banners
    - selected_type / displayed_content are session state, never persisted

Design Decisions:
    - Frozen over mutable dataclasses: mutators return new snapshots, old ones stay valid
    - TreeStore holds exactly one snapshot and never validates — mutators own the invariants
"""

from __future__ import annotations

from dataclasses import dataclass

from app.core.domain_types import BannerId, DepartmentId, SectionId


@dataclass(frozen=True)
class Banner:
    """One piece of banner markup inside a section."""

    banner_id: BannerId
    type: str
    content: str
    name: str | None = None


@dataclass(frozen=True)
class Section:
    """A section groups up to three banners and tracks which type is displayed."""

    id: SectionId
    name: str
    banners: tuple[Banner, ...] = ()
    selected_type: str | None = None
    displayed_content: str = ""

    @property
    def banner_count(self) -> int:
        return len(self.banners)


@dataclass(frozen=True)
class Department:
    id: DepartmentId
    name: str
    sections: tuple[Section, ...] = ()


@dataclass(frozen=True)
class Tree:
    """Root value — the unit of persistence."""

    departments: tuple[Department, ...] = ()


class TreeStore:
    """Holds the current tree snapshot for one editing session."""

    def __init__(self, tree: Tree | None = None):
        self._tree = tree if tree is not None else Tree()

    def current(self) -> Tree:
        return self._tree

    def replace(self, tree: Tree) -> None:
        self._tree = tree
