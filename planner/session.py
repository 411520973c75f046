"""Planner session tying catalog, selection and colors together."""

from typing import Optional, Sequence

from catalog.models import CourseSection
from .colors import COURSE_COLORS, ColorAssigner
from .conflicts import any_selection_conflict, conflicting_pairs, conflicts_for
from .filters import SectionFilter, filter_sections, search_sections
from .selection import SelectionManager, ToggleResult
from .store import KeyValueStore


class PlannerSession:
    """Single owner of the state of one planning session.

    Presentation code (the CLI, a web view, tests) drives the planner only
    through this object.
    """

    def __init__(
        self,
        catalog: Sequence[CourseSection],
        store: KeyValueStore,
        palette: Sequence[str] = COURSE_COLORS,
    ) -> None:
        self._catalog = list(catalog)
        self._by_id = {section.id: section for section in self._catalog}
        self._selection = SelectionManager(self._catalog, store)
        self._colors = ColorAssigner(palette)

    @property
    def catalog(self) -> list[CourseSection]:
        return list(self._catalog)

    @property
    def selected(self) -> tuple[CourseSection, ...]:
        return self._selection.selected

    def section(self, section_id: str) -> Optional[CourseSection]:
        return self._by_id.get(section_id)

    def restore(self) -> list[str]:
        return self._selection.restore()

    def toggle(self, section_id: str) -> ToggleResult:
        return self._selection.toggle(section_id)

    def clear(self) -> None:
        self._selection.clear()

    def is_selected(self, section_id: str) -> bool:
        return self._selection.is_selected(section_id)

    def conflicts_for(self, section: CourseSection) -> list[CourseSection]:
        """Selected sections that collide with section."""
        return conflicts_for(section, self._selection.selected)

    def has_conflicts(self) -> bool:
        return any_selection_conflict(self._selection.selected)

    def conflicting_pairs(self) -> list[tuple[CourseSection, CourseSection]]:
        return conflicting_pairs(self._selection.selected)

    def color_for(self, section: CourseSection) -> str:
        return self._colors.color_for(section.course_code)

    def reset_colors(self) -> None:
        self._colors.reset()

    def visible(self, query: str = "", kind: SectionFilter = SectionFilter.ALL) -> list[CourseSection]:
        """Sections matching the search query and the list filter."""
        matches = search_sections(self._catalog, query)
        return filter_sections(matches, kind, set(self._selection.ids))
