"""Banner Tree — tests for the frozen entities and TreeStore.

Tests cover:
    - Defaults for new sections (no banners, no selection)
    - Entities are immutable
    - TreeStore current/replace, never rejects a tree
"""

from dataclasses import FrozenInstanceError

import pytest

from app.core.banner_tree import Banner, Department, Section, Tree, TreeStore


def test_new_section_defaults():
    section = Section(id=1, name="Payroll")
    assert section.banners == ()
    assert section.selected_type is None
    assert section.displayed_content == ""
    assert section.banner_count == 0


def test_empty_tree():
    assert Tree().departments == ()


def test_entities_are_frozen():
    dept = Department(id=1, name="HR")
    with pytest.raises(FrozenInstanceError):
        dept.name = "Finance"


def test_banner_name_is_optional():
    banner = Banner(banner_id=1, type="hero", content="<b>x</b>")
    assert banner.name is None


def test_structural_equality():
    a = Tree(departments=(Department(id=1, name="HR"),))
    b = Tree(departments=(Department(id=1, name="HR"),))
    assert a == b


def test_store_starts_empty():
    assert TreeStore().current() == Tree()


def test_store_replace():
    store = TreeStore()
    tree = Tree(departments=(Department(id=1, name="HR"),))
    store.replace(tree)
    assert store.current() is tree


def test_store_accepts_any_tree():
    # Duplicate ids are not the store's concern
    dupes = Tree(departments=(Department(id=1, name="A"), Department(id=1, name="B")))
    store = TreeStore(dupes)
    assert store.current() is dupes
