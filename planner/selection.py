"""Selection set management.

The selection is the student's in-progress timetable. Full sections are
refused; conflicting sections are accepted with a warning so the student
can compare alternatives before settling on one.
"""

import json
import logging
import threading
from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional

from catalog.models import CourseSection
from .conflicts import conflicts_for
from .store import KeyValueStore

logger = logging.getLogger(__name__)

SELECTION_KEY = "vku_timetable_selected"


class Outcome(Enum):
    ADDED = "added"
    REMOVED = "removed"
    REJECTED_FULL = "rejected_full"
    NOT_FOUND = "not_found"


@dataclass(frozen=True)
class ToggleResult:
    """What a toggle did.

    Attributes:
        outcome: Kind of result.
        section: The section acted on (None when the id was unknown).
        conflict_title: For ADDED, title of the first already-selected
            section the new one collides with.
    """

    outcome: Outcome
    section: Optional[CourseSection] = None
    conflict_title: Optional[str] = None

    @property
    def changed(self) -> bool:
        return self.outcome in (Outcome.ADDED, Outcome.REMOVED)


class SelectionManager:
    """Owns the selected sections and keeps the persisted copy in step.

    State is committed only after the store write succeeds, so the in-memory
    selection and the stored id list never diverge after a completed call.
    """

    def __init__(
        self,
        catalog: Iterable[CourseSection],
        store: KeyValueStore,
        key: str = SELECTION_KEY,
    ) -> None:
        self._catalog = {section.id: section for section in catalog}
        self._store = store
        self._key = key
        self._selected: list[CourseSection] = []
        self._lock = threading.RLock()

    @property
    def selected(self) -> tuple[CourseSection, ...]:
        return tuple(self._selected)

    @property
    def ids(self) -> list[str]:
        return [section.id for section in self._selected]

    def __len__(self) -> int:
        return len(self._selected)

    def __contains__(self, section_id: object) -> bool:
        return self.is_selected(section_id)

    def is_selected(self, section_id: object) -> bool:
        return any(section.id == section_id for section in self._selected)

    def _commit(self, selected: list[CourseSection]) -> None:
        self._store.set(self._key, json.dumps([s.id for s in selected], ensure_ascii=False))
        self._selected = selected

    def toggle(self, section_id: str) -> ToggleResult:
        """Add the section if absent, remove it if present.

        Returns:
            NOT_FOUND for ids missing from the catalog, REJECTED_FULL for
            full sections, otherwise ADDED or REMOVED.
        """
        with self._lock:
            section = self._catalog.get(section_id)
            if section is None:
                logger.debug("Toggle ignored, unknown section %s", section_id)
                return ToggleResult(Outcome.NOT_FOUND)

            if self.is_selected(section_id):
                self._commit([s for s in self._selected if s.id != section_id])
                logger.info("Removed %s", section_id)
                return ToggleResult(Outcome.REMOVED, section)

            if section.is_full:
                logger.info("Refused %s: section is full", section_id)
                return ToggleResult(Outcome.REJECTED_FULL, section)

            conflicts = conflicts_for(section, self._selected)
            self._commit(self._selected + [section])

            if conflicts:
                logger.info("Added %s despite conflict with %s", section_id, conflicts[0].id)
                return ToggleResult(Outcome.ADDED, section, conflicts[0].title)

            logger.info("Added %s", section_id)
            return ToggleResult(Outcome.ADDED, section)

    def clear(self) -> None:
        """Empty the selection unconditionally."""
        with self._lock:
            self._commit([])
            logger.info("Cleared selection")

    def restore(self) -> list[str]:
        """Load the persisted selection.

        Ids no longer in the catalog are dropped silently. Sections come back
        in the order they were saved (the order the student picked them),
        not in catalog order.

        Returns:
            Ids of the restored sections, in persisted order.
        """
        with self._lock:
            saved = self._store.get(self._key)
            if not saved:
                return []

            try:
                ids = json.loads(saved)
            except json.JSONDecodeError as e:
                logger.error("Failed to load saved selection: %s", e)
                return []

            if not isinstance(ids, list):
                logger.error("Failed to load saved selection: expected a list, got %s", type(ids).__name__)
                return []

            restored: list[CourseSection] = []
            seen: set[str] = set()
            for section_id in ids:
                if not isinstance(section_id, str) or section_id in seen:
                    continue
                section = self._catalog.get(section_id)
                if section is None:
                    continue
                seen.add(section_id)
                restored.append(section)

            dropped = len(ids) - len(restored)
            if dropped:
                logger.info("Dropped %d saved selection(s) not in the current catalog", dropped)

            self._selected = restored
            return self.ids
