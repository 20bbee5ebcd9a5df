"""Tree Routes — department/section/banner editing and persistence endpoints.

Invariants:
    - Routes contain no tree rules: every edit delegates to EditorSession
    - Permissive mutations always return 200 with applied=false when nothing changed
    - Strict-mode and persistence failures surface through the global BannerDeskError handler

Design Decisions:
    - EditorSession read from app.state (set in lifespan), injected via Depends so tests
      can swap it
"""

import logging

from fastapi import APIRouter, Depends, Request, status

from app.core.errors import SectionNotFoundError
from app.schemas.tree import (
    BannerCreate, BannerTypeSelection, DepartmentCreate, DisplayedBannerResponse,
    MutationResponse, SectionCreate, TreeResponse,
)
from app.services.editor_session import EditorSession

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/api/v1", tags=["tree"])


def get_editor_session(request: Request) -> EditorSession:
    """FastAPI dependency for the process-wide editor session."""
    session = getattr(request.app.state, "editor_session", None)
    if session is None:
        raise RuntimeError("Editor session not initialized")
    return session


@router.get("/tree", response_model=TreeResponse)
async def get_tree(editor: EditorSession = Depends(get_editor_session)):
    """Current tree, including each section's selection state."""
    return TreeResponse.from_tree(editor.tree)


@router.post("/departments", response_model=MutationResponse)
async def create_department(
    body: DepartmentCreate, editor: EditorSession = Depends(get_editor_session),
):
    result = await editor.add_department(body.name)
    return MutationResponse.from_result(result)


@router.post(
    "/departments/{department_id}/sections", response_model=MutationResponse,
)
async def create_section(
    department_id: int,
    body: SectionCreate,
    editor: EditorSession = Depends(get_editor_session),
):
    result = await editor.add_section(department_id, body.name)
    return MutationResponse.from_result(result)


@router.post(
    "/departments/{department_id}/sections/{section_id}/banners",
    response_model=MutationResponse,
)
async def create_banner(
    department_id: int,
    section_id: int,
    body: BannerCreate,
    editor: EditorSession = Depends(get_editor_session),
):
    """Add a banner. A full section (3/3) is a no-op unless strict mode is on."""
    result = await editor.add_banner(
        department_id, section_id, body.type, body.content, body.name,
    )
    return MutationResponse.from_result(result)


@router.put(
    "/departments/{department_id}/sections/{section_id}/selection",
    response_model=MutationResponse,
)
async def select_banner_type(
    department_id: int,
    section_id: int,
    body: BannerTypeSelection,
    editor: EditorSession = Depends(get_editor_session),
):
    result = await editor.select_banner_type(department_id, section_id, body.type)
    return MutationResponse.from_result(result)


@router.get(
    "/departments/{department_id}/sections/{section_id}/displayed-banner",
    response_model=DisplayedBannerResponse,
)
async def get_displayed_banner(
    department_id: int,
    section_id: int,
    editor: EditorSession = Depends(get_editor_session),
):
    """Preview data for a section. Reads are always strict: unknown ids → 404."""
    section = editor.section(department_id, section_id)
    if section is None:
        raise SectionNotFoundError(department_id, section_id)
    return DisplayedBannerResponse.from_section(section)


@router.post("/tree/save", status_code=status.HTTP_200_OK)
async def save_tree(editor: EditorSession = Depends(get_editor_session)):
    """Persist the full current tree."""
    tree = await editor.save()
    return {"status": "saved", "departments": len(tree.departments)}


@router.post("/tree/reload", response_model=TreeResponse)
async def reload_tree(editor: EditorSession = Depends(get_editor_session)):
    """Discard unsaved edits and re-read the persisted tree."""
    tree = await editor.load()
    logger.info("Tree reloaded from storage", extra={"operation": "load"})
    return TreeResponse.from_tree(tree)
