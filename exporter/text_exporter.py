"""Plain text exporter for the selected timetable."""

from typing import Optional, Sequence

from catalog.models import CourseSection
from .base import BaseExporter


class TextExporter(BaseExporter):
    """Exporter that lists selected sections as numbered text blocks."""

    TITLE = "=== THỜI KHÓA BIỂU VKU ==="
    INSTRUCTOR_LABEL = "Giảng viên"
    SCHEDULE_LABEL = "Lịch học"
    WEEKS_LABEL = "Tuần học"

    def __init__(self) -> None:
        self._text: Optional[str] = None

    def transform(self, sections: Sequence[CourseSection]) -> str:
        """Render the sections as a text document.

        Args:
            sections: Selected sections, in selection order.

        Returns:
            The document: a title line, then one block per section
            followed by a blank line.
        """
        lines = [self.TITLE, ""]

        for number, section in enumerate(sections, start=1):
            lines.append(f"{number}. {section.title}")
            lines.append(f"   {self.INSTRUCTOR_LABEL}: {section.instructor}")
            lines.append(f"   {self.SCHEDULE_LABEL}: {section.raw_schedule}")
            lines.append(f"   {self.WEEKS_LABEL}: {section.raw_weeks}")
            lines.append("")

        self._text = "\n".join(lines) + "\n"
        return self._text

    def save(self, output_path: str) -> None:
        """Save the document as UTF-8 text.

        Raises:
            RuntimeError: If transform() hasn't been called yet.
        """
        if self._text is None:
            raise RuntimeError("No timetable data. Call transform() first.")

        with open(output_path, "w", encoding="utf-8") as f:
            f.write(self._text)
