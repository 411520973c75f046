"""Stable color assignment for course codes."""

from typing import Sequence


COURSE_COLORS = (
    "#6366f1", "#8b5cf6", "#ec4899", "#f43f5e", "#f97316",
    "#eab308", "#22c55e", "#14b8a6", "#06b6d4", "#3b82f6",
)


class ColorAssigner:
    """Hands out palette colors to course codes in first-encounter order.

    A code keeps its color for the lifetime of the assigner. Once every
    palette entry is in use, colors are reused from the start.
    """

    def __init__(self, palette: Sequence[str] = COURSE_COLORS) -> None:
        if not palette:
            raise ValueError("Palette must contain at least one color")
        self._palette = tuple(palette)
        self._colors: dict[str, str] = {}

    @property
    def assigned(self) -> dict[str, str]:
        return dict(self._colors)

    def color_for(self, course_code: str) -> str:
        if course_code not in self._colors:
            index = len(self._colors)
            self._colors[course_code] = self._palette[index % len(self._palette)]
        return self._colors[course_code]

    def reset(self) -> None:
        """Forget all assignments."""
        self._colors.clear()
