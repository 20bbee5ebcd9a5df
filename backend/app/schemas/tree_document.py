"""Tree Document Schemas — Pydantic models of the persisted data.json shape.

Invariants:
    - Field names are the wire names (banner, bannerid) — no aliases
    - Unknown keys are ignored; missing lists default to empty
    - parse_tree_document raises DocumentMalformedError, never pydantic.ValidationError

Design Decisions:
    - Validation at the persistence boundary keeps core/tree_snapshot free of shape checks
"""

from typing import Any

from pydantic import BaseModel, ValidationError

from app.core.errors import DocumentMalformedError


class BannerDocument(BaseModel):
    bannerid: int
    type: str
    name: str | None = None
    content: str


class SectionDocument(BaseModel):
    id: int
    name: str
    banner: list[BannerDocument] = []


class DepartmentDocument(BaseModel):
    id: int
    name: str
    sections: list[SectionDocument] = []


class TreeDocument(BaseModel):
    """Whole persisted document."""
    departments: list[DepartmentDocument] = []


def parse_tree_document(data: Any, source: str) -> dict:
    """Validate raw document data and return it normalized (optional fields dropped)."""
    try:
        document = TreeDocument.model_validate(data)
    except ValidationError as e:
        raise DocumentMalformedError(
            source,
            [
                f"{'.'.join(str(loc) for loc in err['loc'])}: {err['msg']}"
                for err in e.errors()
            ],
        ) from e
    return document.model_dump(exclude_none=True)
