"""Search and filter helpers for the section list."""

from enum import Enum
from typing import Collection, Iterable

from catalog.models import CourseSection


class SectionFilter(Enum):
    ALL = "all"
    AVAILABLE = "available"
    SELECTED = "selected"


def search_sections(sections: Iterable[CourseSection], query: str) -> list[CourseSection]:
    """Case-insensitive substring search over title and instructor."""
    needle = (query or "").strip().casefold()
    if not needle:
        return list(sections)

    return [
        section for section in sections
        if needle in section.title.casefold() or needle in section.instructor.casefold()
    ]


def filter_sections(
    sections: Iterable[CourseSection],
    kind: SectionFilter,
    selected_ids: Collection[str] = (),
) -> list[CourseSection]:
    if kind is SectionFilter.AVAILABLE:
        return [section for section in sections if not section.is_full]
    if kind is SectionFilter.SELECTED:
        return [section for section in sections if section.id in selected_ids]
    return list(sections)
