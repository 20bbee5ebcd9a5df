"""Tree Mutators — pure snapshot-in / snapshot-out edits of the banner tree.

Invariants:
    - Mutators are total: they never raise, unknown ids and a full section degrade to a no-op
    - A rejected mutation returns the SAME tree object plus an error code
    - Only the touched Department → Section path is rebuilt; untouched siblings are shared
    - New ids come from id_allocator.next_id within the sibling scope
    - After every mutation a section's displayed_content matches its selected_type

Design Decisions:
    - MutationResult instead of exceptions: permissive callers read .applied, strict callers
      call raise_for_error() — the choice lives in the shell, not here
"""

from dataclasses import dataclass, replace

from app.core.banner_tree import Banner, Department, Section, Tree
from app.core.domain_types import (
    BannerId, DepartmentId, SectionId, MutationErrorCode, MAX_BANNERS_PER_SECTION,
)
from app.core.errors import (
    BannerCapacityExceededError, BannerDeskError,
    DepartmentNotFoundError, SectionNotFoundError,
)
from app.core.id_allocator import next_id
from app.core.tree_selectors import resolve_displayed_content


@dataclass(frozen=True)
class MutationResult:
    """Outcome of one mutator call."""

    tree: Tree
    error_code: MutationErrorCode | None = None
    department_id: int | None = None
    section_id: int | None = None

    @property
    def applied(self) -> bool:
        return self.error_code is None

    def to_error(self) -> BannerDeskError | None:
        """Typed error for a rejected mutation, None if it was applied."""
        if self.error_code is MutationErrorCode.DEPARTMENT_NOT_FOUND:
            return DepartmentNotFoundError(self.department_id)
        if self.error_code is MutationErrorCode.SECTION_NOT_FOUND:
            return SectionNotFoundError(self.department_id, self.section_id)
        if self.error_code is MutationErrorCode.BANNER_CAPACITY_EXCEEDED:
            return BannerCapacityExceededError(
                self.department_id, self.section_id, MAX_BANNERS_PER_SECTION,
            )
        return None

    def raise_for_error(self) -> None:
        error = self.to_error()
        if error is not None:
            raise error


# ─── Path helpers ────────────────────────────────────────────────

def _index_of(items: tuple, item_id: int) -> int | None:
    for index, item in enumerate(items):
        if item.id == item_id:
            return index
    return None


def _replace_at(items: tuple, index: int, item) -> tuple:
    return items[:index] + (item,) + items[index + 1:]


def _locate_section(
    tree: Tree, department_id: int, section_id: int,
) -> tuple[int, int] | MutationResult:
    """Indices of (department, section), or the rejection to return."""
    dept_index = _index_of(tree.departments, department_id)
    if dept_index is None:
        return MutationResult(
            tree, MutationErrorCode.DEPARTMENT_NOT_FOUND, department_id, section_id,
        )
    section_index = _index_of(tree.departments[dept_index].sections, section_id)
    if section_index is None:
        return MutationResult(
            tree, MutationErrorCode.SECTION_NOT_FOUND, department_id, section_id,
        )
    return dept_index, section_index


def _with_section(
    tree: Tree, dept_index: int, section_index: int, section: Section,
) -> Tree:
    dept = tree.departments[dept_index]
    updated_dept = replace(
        dept, sections=_replace_at(dept.sections, section_index, section),
    )
    return replace(
        tree, departments=_replace_at(tree.departments, dept_index, updated_dept),
    )


# ─── Mutators ────────────────────────────────────────────────────

def add_department(tree: Tree, name: str) -> MutationResult:
    """Append a department. Always applied; the name is not validated."""
    department = Department(
        id=DepartmentId(next_id(tree.departments)), name=name,
    )
    return MutationResult(
        replace(tree, departments=tree.departments + (department,)),
        department_id=department.id,
    )


def add_section(tree: Tree, department_id: int, name: str) -> MutationResult:
    """Append an empty section to a department."""
    dept_index = _index_of(tree.departments, department_id)
    if dept_index is None:
        return MutationResult(
            tree, MutationErrorCode.DEPARTMENT_NOT_FOUND, department_id,
        )
    dept = tree.departments[dept_index]
    section = Section(id=SectionId(next_id(dept.sections)), name=name)
    updated_dept = replace(dept, sections=dept.sections + (section,))
    return MutationResult(
        replace(
            tree,
            departments=_replace_at(tree.departments, dept_index, updated_dept),
        ),
        department_id=department_id,
        section_id=section.id,
    )


def add_banner(
    tree: Tree,
    department_id: int,
    section_id: int,
    banner_type: str,
    content: str,
    name: str | None = None,
) -> MutationResult:
    """Append a banner unless the section is already full."""
    located = _locate_section(tree, department_id, section_id)
    if isinstance(located, MutationResult):
        return located
    dept_index, section_index = located
    section = tree.departments[dept_index].sections[section_index]

    if section.banner_count >= MAX_BANNERS_PER_SECTION:
        return MutationResult(
            tree, MutationErrorCode.BANNER_CAPACITY_EXCEEDED,
            department_id, section_id,
        )

    banner = Banner(
        banner_id=BannerId(next_id(section.banners, key="banner_id")),
        type=banner_type,
        content=content,
        name=name,
    )
    updated = replace(section, banners=section.banners + (banner,))
    # A newly added banner may be the first match for the current selection
    updated = replace(
        updated,
        displayed_content=resolve_displayed_content(updated, updated.selected_type),
    )
    return MutationResult(
        _with_section(tree, dept_index, section_index, updated),
        department_id=department_id,
        section_id=section_id,
    )


def select_banner_type(
    tree: Tree, department_id: int, section_id: int, banner_type: str,
) -> MutationResult:
    """Select which banner type a section displays.

    The type is recorded even when no banner matches; displayed_content is then "".
    """
    located = _locate_section(tree, department_id, section_id)
    if isinstance(located, MutationResult):
        return located
    dept_index, section_index = located
    section = tree.departments[dept_index].sections[section_index]

    updated = replace(
        section,
        selected_type=banner_type,
        displayed_content=resolve_displayed_content(section, banner_type),
    )
    return MutationResult(
        _with_section(tree, dept_index, section_index, updated),
        department_id=department_id,
        section_id=section_id,
    )
