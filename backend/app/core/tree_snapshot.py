"""Tree Snapshot — conversion between Tree and the persisted document shape.

Invariants:
    - tree_to_document writes only persisted fields (id, name, sections, banner,
      bannerid, type, name, content); selection state is never written
    - tree_from_document always re-derives selection from each section's first banner
    - Missing departments / sections / banner keys read as empty lists

Design Decisions:
    - Wire names (banner, bannerid) kept verbatim for compatibility with existing data.json files
    - Shape validation lives in the shell (schemas.tree_document); this module trusts its input
"""

from app.core.banner_tree import Banner, Department, Section, Tree
from app.core.domain_types import BannerId, DepartmentId, SectionId
from app.core.tree_selectors import initialize_tree_selection


def _banner_to_document(banner: Banner) -> dict:
    doc = {
        "bannerid": banner.banner_id,
        "type": banner.type,
        "content": banner.content,
    }
    if banner.name is not None:
        doc["name"] = banner.name
    return doc


def tree_to_document(tree: Tree) -> dict:
    """Serialize Tree to a JSON-safe dict. Pure, no IO."""
    return {
        "departments": [
            {
                "id": dept.id,
                "name": dept.name,
                "sections": [
                    {
                        "id": section.id,
                        "name": section.name,
                        "banner": [_banner_to_document(b) for b in section.banners],
                    }
                    for section in dept.sections
                ],
            }
            for dept in tree.departments
        ],
    }


def _section_from_document(data: dict) -> Section:
    return Section(
        id=SectionId(data["id"]),
        name=data["name"],
        banners=tuple(
            Banner(
                banner_id=BannerId(b["bannerid"]),
                type=b["type"],
                content=b["content"],
                name=b.get("name"),
            )
            for b in data.get("banner", [])
        ),
    )


def tree_from_document(data: dict) -> Tree:
    """Reconstruct a Tree from a document dict, with selection initialized. Pure, no IO."""
    tree = Tree(departments=tuple(
        Department(
            id=DepartmentId(dept["id"]),
            name=dept["name"],
            sections=tuple(
                _section_from_document(s) for s in dept.get("sections", [])
            ),
        )
        for dept in (data or {}).get("departments", [])
    ))
    return initialize_tree_selection(tree)
