"""Tree Schemas — Pydantic request/response models for the tree API.

Invariants:
    - Names and banner content are accepted as-is (empty strings allowed, markup not sanitized)
    - Responses expose selection state (selected_type, displayed_content) alongside persisted fields

Design Decisions:
    - from_* classmethods build responses from frozen core dataclasses
      (core never imports schemas)
"""

from pydantic import BaseModel

from app.core.banner_tree import Banner, Department, Section, Tree
from app.core.tree_mutators import MutationResult
from app.core.tree_selectors import (
    banner_slots_remaining, banner_types, displayed_banner, displayed_banner_label,
)


# --- Requests ----------------------------------------------------------------

class DepartmentCreate(BaseModel):
    name: str


class SectionCreate(BaseModel):
    name: str


class BannerCreate(BaseModel):
    """New banner — content is an HTML fragment stored verbatim."""
    type: str
    content: str
    name: str | None = None


class BannerTypeSelection(BaseModel):
    type: str


# --- Responses ---------------------------------------------------------------

class BannerResponse(BaseModel):
    banner_id: int
    type: str
    name: str | None = None
    content: str

    @classmethod
    def from_banner(cls, banner: Banner) -> "BannerResponse":
        return cls(
            banner_id=banner.banner_id, type=banner.type,
            name=banner.name, content=banner.content,
        )


class SectionResponse(BaseModel):
    id: int
    name: str
    banners: list[BannerResponse]
    selected_type: str | None
    displayed_content: str

    @classmethod
    def from_section(cls, section: Section) -> "SectionResponse":
        return cls(
            id=section.id,
            name=section.name,
            banners=[BannerResponse.from_banner(b) for b in section.banners],
            selected_type=section.selected_type,
            displayed_content=section.displayed_content,
        )


class DepartmentResponse(BaseModel):
    id: int
    name: str
    sections: list[SectionResponse]

    @classmethod
    def from_department(cls, dept: Department) -> "DepartmentResponse":
        return cls(
            id=dept.id,
            name=dept.name,
            sections=[SectionResponse.from_section(s) for s in dept.sections],
        )


class TreeResponse(BaseModel):
    departments: list[DepartmentResponse]

    @classmethod
    def from_tree(cls, tree: Tree) -> "TreeResponse":
        return cls(departments=[
            DepartmentResponse.from_department(d) for d in tree.departments
        ])


class MutationResponse(BaseModel):
    """Result of a permissive mutation — applied=False means the tree is unchanged."""
    applied: bool
    error_code: str | None = None
    message: str | None = None
    tree: TreeResponse

    @classmethod
    def from_result(cls, result: MutationResult) -> "MutationResponse":
        error = result.to_error()
        return cls(
            applied=result.applied,
            error_code=result.error_code.value if result.error_code else None,
            message=error.message if error else None,
            tree=TreeResponse.from_tree(result.tree),
        )


class DisplayedBannerResponse(BaseModel):
    """What the section preview shows."""
    banner: BannerResponse | None
    label: str
    selected_type: str | None
    displayed_content: str
    banner_types: list[str]
    slots_remaining: int

    @classmethod
    def from_section(cls, section: Section) -> "DisplayedBannerResponse":
        banner = displayed_banner(section)
        return cls(
            banner=BannerResponse.from_banner(banner) if banner else None,
            label=displayed_banner_label(section),
            selected_type=section.selected_type,
            displayed_content=section.displayed_content,
            banner_types=banner_types(section),
            slots_remaining=banner_slots_remaining(section),
        )
