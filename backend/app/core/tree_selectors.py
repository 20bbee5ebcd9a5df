"""Tree Selectors — pure read-only derivations over a tree snapshot.

Invariants:
    - displayed_banner is the FIRST banner whose type equals selected_type, or None
    - displayed_content == displayed_banner.content, or "" when nothing matches
    - Selection is (re-)initialized from the first banner on load

Design Decisions:
    - Selection helpers return new Section values; callers decide when to apply them
"""

from dataclasses import replace

from app.core.banner_tree import Banner, Department, Section, Tree
from app.core.domain_types import MAX_BANNERS_PER_SECTION

NO_BANNER_LABEL = "No Banner Selected"


# ─── Selection ───────────────────────────────────────────────────

def find_banner_by_type(section: Section, banner_type: str | None) -> Banner | None:
    """First banner in the section with the given type."""
    if banner_type is None:
        return None
    for banner in section.banners:
        if banner.type == banner_type:
            return banner
    return None


def displayed_banner(section: Section) -> Banner | None:
    return find_banner_by_type(section, section.selected_type)


def resolve_displayed_content(section: Section, banner_type: str | None) -> str:
    banner = find_banner_by_type(section, banner_type)
    return banner.content if banner else ""


def displayed_banner_label(section: Section) -> str:
    """Display label for the selected banner, with the view's fallback text."""
    banner = displayed_banner(section)
    if banner is None or not banner.name:
        return NO_BANNER_LABEL
    return banner.name


def initialize_section_selection(section: Section) -> Section:
    """Select the first banner's type, or clear the selection if there are none."""
    if not section.banners:
        return replace(section, selected_type=None, displayed_content="")
    first = section.banners[0]
    return replace(
        section, selected_type=first.type, displayed_content=first.content,
    )


def initialize_tree_selection(tree: Tree) -> Tree:
    """Normalize every section's selection — run once after load."""
    return Tree(departments=tuple(
        replace(
            dept,
            sections=tuple(
                initialize_section_selection(s) for s in dept.sections
            ),
        )
        for dept in tree.departments
    ))


# ─── Lookup ──────────────────────────────────────────────────────

def find_department(tree: Tree, department_id: int) -> Department | None:
    for dept in tree.departments:
        if dept.id == department_id:
            return dept
    return None


def find_section(
    tree: Tree, department_id: int, section_id: int,
) -> Section | None:
    dept = find_department(tree, department_id)
    if dept is None:
        return None
    for section in dept.sections:
        if section.id == section_id:
            return section
    return None


# ─── Capacity ────────────────────────────────────────────────────

def banner_slots_remaining(section: Section) -> int:
    return max(MAX_BANNERS_PER_SECTION - section.banner_count, 0)


def is_banner_limit_reached(section: Section) -> bool:
    """Whether the section can take no more banners."""
    return section.banner_count >= MAX_BANNERS_PER_SECTION


def banner_types(section: Section) -> list[str]:
    """Banner types in section order, duplicates kept (one option per banner)."""
    return [b.type for b in section.banners]
