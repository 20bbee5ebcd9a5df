"""Id Allocator — next identifier within one sibling scope.

Invariants:
    - Empty scope yields 1
    - Otherwise yields the largest sibling id + 1, which equals the last sibling's id + 1
      whenever ids were assigned in insertion order
    - No gap-filling, no reuse, even for loaded documents with unordered ids

Design Decisions:
    - Attribute name parameterized: banners carry banner_id, departments/sections carry id
"""

from typing import Sequence


def next_id(siblings: Sequence[object], key: str = "id") -> int:
    """Return the id the next sibling appended to ``siblings`` should get."""
    if not siblings:
        return 1
    return max(getattr(s, key) for s in siblings) + 1
