"""Stable bed ordering for candidate iteration.

The engine keeps the first bed that reaches the best score, so the order of
candidates decides ties. Beds are ordered by a natural sort of their ids
(MA2 before MA10) so the outcome does not depend on inventory traversal.
"""

from __future__ import annotations

import re
from functools import lru_cache
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from lodging.models import Bed

_CHUNK = re.compile(r"(\d+)")


@lru_cache(maxsize=1024)
def bed_sort_key(bed_id: str) -> tuple[tuple[int, int | str], ...]:
    """Natural sort key for a bed id.

    Examples:
        bed_sort_key("MA2") < bed_sort_key("MA10")
        bed_sort_key("FR1") < bed_sort_key("MA1")
    """
    parts: list[tuple[int, int | str]] = []
    for chunk in _CHUNK.split(bed_id):
        if not chunk:
            continue
        if chunk.isdigit():
            parts.append((0, int(chunk)))
        else:
            parts.append((1, chunk))
    return tuple(parts)


def order_beds(beds: list[Bed]) -> list[Bed]:
    """Sort beds by natural bed id; the sort is stable for duplicate ids."""
    return sorted(beds, key=lambda bed: bed_sort_key(bed.bed_id))
