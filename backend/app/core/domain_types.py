"""Domain Types — identity types, limits and enums shared across the banner tree.

Invariants:
    - DepartmentId, SectionId, BannerId wrap ints — ids are scoped to their sibling list
    - MAX_BANNERS_PER_SECTION is the single source of truth for the banner cap
    - All rejection reasons encoded as Enums — no raw string matching

Design Decisions:
    - NewType over dataclass wrappers: zero runtime cost, full type-checker support
    - str Enums: serialize to JSON without custom encoders
"""

from enum import Enum
from typing import NewType


# ─── Identity Types ──────────────────────────────────────────────

DepartmentId = NewType("DepartmentId", int)
SectionId = NewType("SectionId", int)
BannerId = NewType("BannerId", int)


# ─── Limits ──────────────────────────────────────────────────────

MAX_BANNERS_PER_SECTION: int = 3


# ─── Enums ───────────────────────────────────────────────────────

class MutationErrorCode(str, Enum):
    """Why a mutator left the tree unchanged."""
    DEPARTMENT_NOT_FOUND = "DEPARTMENT_NOT_FOUND"
    SECTION_NOT_FOUND = "SECTION_NOT_FOUND"
    BANNER_CAPACITY_EXCEEDED = "BANNER_CAPACITY_EXCEEDED"


class StorageBackend(str, Enum):
    """Where the tree document is persisted."""
    JSON_FILE = "json_file"
    DATABASE = "database"
