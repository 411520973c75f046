"""Planner module for selecting sections and detecting timetable conflicts."""

from .colors import COURSE_COLORS, ColorAssigner
from .conflicts import any_selection_conflict, conflicting_pairs, conflicts_for, overlaps
from .filters import SectionFilter, filter_sections, search_sections
from .selection import SELECTION_KEY, Outcome, SelectionManager, ToggleResult
from .session import PlannerSession
from .store import JsonFileStore, KeyValueStore, MemoryStore

__all__ = [
    "COURSE_COLORS",
    "ColorAssigner",
    "JsonFileStore",
    "KeyValueStore",
    "MemoryStore",
    "Outcome",
    "PlannerSession",
    "SELECTION_KEY",
    "SectionFilter",
    "SelectionManager",
    "ToggleResult",
    "any_selection_conflict",
    "conflicting_pairs",
    "conflicts_for",
    "filter_sections",
    "overlaps",
    "search_sections",
]
