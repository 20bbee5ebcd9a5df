"""Tree API Schemas — request validation and response construction."""

import pytest
from pydantic import ValidationError

from app.core.banner_tree import Banner, Section, Tree
from app.core.tree_mutators import add_banner, add_department, add_section
from app.schemas.tree import (
    BannerCreate, DepartmentCreate, DisplayedBannerResponse, MutationResponse,
    TreeResponse,
)


def test_department_create_accepts_empty_name():
    assert DepartmentCreate(name="").name == ""


def test_banner_create_requires_type_and_content():
    with pytest.raises(ValidationError):
        BannerCreate(type="hero")


def test_banner_create_keeps_markup_verbatim():
    body = BannerCreate(type="hero", content="<script>x()</script>")
    assert body.content == "<script>x()</script>"


def test_tree_response_from_tree():
    tree = add_section(add_department(Tree(), "HR").tree, 1, "Payroll").tree
    response = TreeResponse.from_tree(tree)
    section = response.departments[0].sections[0]
    assert section.name == "Payroll"
    assert section.selected_type is None
    assert section.displayed_content == ""


def test_mutation_response_applied():
    response = MutationResponse.from_result(add_department(Tree(), "HR"))
    assert response.applied
    assert response.error_code is None
    assert response.message is None


def test_mutation_response_rejected():
    response = MutationResponse.from_result(add_banner(Tree(), 1, 1, "hero", "x"))
    assert not response.applied
    assert response.error_code == "DEPARTMENT_NOT_FOUND"
    assert "Department 1" in response.message


def test_displayed_banner_response():
    section = Section(
        id=1, name="P",
        banners=(Banner(banner_id=1, type="hero", content="<a>", name="Hero"),),
        selected_type="hero", displayed_content="<a>",
    )
    response = DisplayedBannerResponse.from_section(section)
    assert response.banner.banner_id == 1
    assert response.label == "Hero"
    assert response.banner_types == ["hero"]
    assert response.slots_remaining == 2
