"""Abstract base class for selection exporters."""

from abc import ABC, abstractmethod
from typing import Any, Sequence

from catalog.models import CourseSection


class BaseExporter(ABC):
    """Abstract base class defining the interface for selection exporters.

    Extend this class to implement exporters for other output formats.
    """

    @abstractmethod
    def transform(self, sections: Sequence[CourseSection]) -> Any:
        """Transform the selected sections into the target format.

        Args:
            sections: Selected sections, in selection order.

        Returns:
            Transformed data in the target format.
        """
        pass

    @abstractmethod
    def save(self, output_path: str) -> None:
        """Save the transformed data to a file.

        Args:
            output_path: Path to the output file.
        """
        pass
