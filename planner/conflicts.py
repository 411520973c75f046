"""Conflict detection between course sections.

Two sections conflict when they meet on the same day, their period ranges
intersect, and they share at least one academic week. Sections without a
fixed meeting time never conflict.
"""

from itertools import combinations
from typing import Iterable, Sequence

from catalog.models import CourseSection


def overlaps(a: CourseSection, b: CourseSection) -> bool:
    """Return True if the two sections collide in time."""
    if a.time_slot is None or b.time_slot is None:
        return False

    if not a.time_slot.overlaps(b.time_slot):
        return False

    # Same slot, but alternating halves of the term do not collide
    return not a.weeks.isdisjoint(b.weeks)


def conflicts_for(target: CourseSection, pool: Iterable[CourseSection]) -> list[CourseSection]:
    """Return every section in pool, other than target, that overlaps it.

    The result keeps the relative order of pool.
    """
    return [
        other for other in pool
        if other.id != target.id and overlaps(target, other)
    ]


def any_selection_conflict(selection: Sequence[CourseSection]) -> bool:
    """Return True if any two sections in the selection overlap."""
    return any(overlaps(a, b) for a, b in combinations(selection, 2))


def conflicting_pairs(selection: Sequence[CourseSection]) -> list[tuple[CourseSection, CourseSection]]:
    """Return all overlapping pairs (A, B), each pair once, in selection order."""
    return [(a, b) for a, b in combinations(selection, 2) if overlaps(a, b)]
