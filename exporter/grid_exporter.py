"""Weekly grid exporter: teaching periods down, weekdays across."""

from typing import Optional, Sequence

from catalog.models import MAX_PERIOD, CourseSection, Day
from planner.conflicts import conflicts_for
from .base import BaseExporter


def build_grid(sections: Sequence[CourseSection]) -> dict[tuple[Day, int], list[CourseSection]]:
    """Map every (day, period) cell to the sections meeting in it.

    Unscheduled sections do not appear in the grid.
    """
    grid: dict[tuple[Day, int], list[CourseSection]] = {
        (day, period): [] for day in Day for period in range(1, MAX_PERIOD + 1)
    }

    for section in sections:
        if not section.is_scheduled:
            continue
        for period in section.time_slot.periods:
            grid[(section.time_slot.day, period)].append(section)

    return grid


class GridExporter(BaseExporter):
    """Exporter that draws the selection as a fixed-width text table.

    Each cell shows the course codes meeting in it; a trailing "!" marks a
    section that conflicts with another selected section.
    """

    CELL_WIDTH = 12
    PERIOD_HEADER = "Tiết"

    def __init__(self) -> None:
        self._text: Optional[str] = None

    def _cell(self, sections: list[CourseSection], conflicted: set[str]) -> str:
        labels = [
            section.course_code + ("!" if section.id in conflicted else "")
            for section in sections
        ]
        text = "/".join(labels)
        if len(text) > self.CELL_WIDTH:
            text = text[: self.CELL_WIDTH - 1] + "…"
        return text.ljust(self.CELL_WIDTH)

    def transform(self, sections: Sequence[CourseSection]) -> str:
        conflicted = {
            section.id for section in sections
            if conflicts_for(section, sections)
        }
        grid = build_grid(sections)

        header = [self.PERIOD_HEADER.rjust(4)] + [day.token.ljust(self.CELL_WIDTH) for day in Day]
        separator = ["-" * 4] + ["-" * self.CELL_WIDTH for _ in Day]
        lines = [" | ".join(header), "-+-".join(separator)]

        for period in range(1, MAX_PERIOD + 1):
            row = [str(period).rjust(4)]
            row.extend(self._cell(grid[(day, period)], conflicted) for day in Day)
            lines.append(" | ".join(row).rstrip())

        unscheduled = [section for section in sections if not section.is_scheduled]
        if unscheduled:
            lines.append("")
            lines.append("Không có lịch cố định: " + ", ".join(s.title for s in unscheduled))

        self._text = "\n".join(lines) + "\n"
        return self._text

    def save(self, output_path: str) -> None:
        """Save the grid as UTF-8 text.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._text is None:
            raise RuntimeError("No timetable data. Call transform() first.")

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(self._text)
