"""Catalog data sources.

The course catalog lives in a spreadsheet. It can be read through the
sheet's Apps Script JSON endpoint, through its published HTML page, or
from a CSV export. Sources are tried in priority order by load_catalog().
"""

import logging
from abc import ABC, abstractmethod
from pathlib import Path
from typing import Any, Iterable, Optional

import requests
from bs4 import BeautifulSoup, Tag

from .models import CourseSection
from .parser import RECORD_FIELDS, parse_csv, parse_records, parse_rows

logger = logging.getLogger(__name__)


class CatalogSourceError(RuntimeError):
    """A data source answered, but not with a usable catalog."""


class CatalogUnavailableError(RuntimeError):
    """Every configured data source failed.

    Attributes:
        errors: (source name, exception) pairs, in the order tried.
    """

    def __init__(self, errors: list[tuple[str, Exception]]) -> None:
        self.errors = errors
        if errors:
            detail = "; ".join(f"{name}: {error}" for name, error in errors)
            message = f"No course data available ({detail})"
        else:
            message = "No course data available (no sources configured)"
        super().__init__(message)


class CatalogSource(ABC):
    """Base class for anything that can produce the list of course sections.

    Extend this class to read the catalog from another backend.
    """

    TIMEOUT = 15

    def __init__(self, session: Optional[requests.Session] = None) -> None:
        """Initialize the source.

        Args:
            session: HTTP session to use; the requests module is used
                directly when omitted.
        """
        self._session = session

    @property
    @abstractmethod
    def name(self) -> str:
        """Short human-readable description used in logs and errors."""

    @abstractmethod
    def fetch(self) -> list[CourseSection]:
        """Fetch and parse the catalog.

        Returns:
            Course sections in source order.

        Raises:
            requests.RequestException: On transport failures.
            CatalogSourceError: If the response has an unexpected shape.
        """

    def _get(self, url: str) -> requests.Response:
        http: Any = self._session if self._session is not None else requests
        response = http.get(url, timeout=self.TIMEOUT)
        response.raise_for_status()
        return response


class AppsScriptSource(CatalogSource):
    """Spreadsheet exposed through an Apps Script web app returning JSON.

    Expected payload: {"success": true, "count": n, "data": [{...}, ...]}
    """

    def __init__(self, url: str, session: Optional[requests.Session] = None) -> None:
        super().__init__(session)
        self._url = url

    @property
    def name(self) -> str:
        return f"Apps Script ({self._url})"

    def fetch(self) -> list[CourseSection]:
        payload = self._get(self._url).json()

        if not isinstance(payload, dict):
            raise CatalogSourceError("Invalid response from Google Sheets")
        if not payload.get("success") or not isinstance(payload.get("data"), list):
            raise CatalogSourceError(payload.get("error") or "Invalid response from Google Sheets")

        logger.info("Sheet reported %s record(s)", payload.get("count", len(payload["data"])))
        return parse_records(payload["data"])


class PublishedSheetSource(CatalogSource):
    """Spreadsheet published to the web as an HTML page."""

    def __init__(self, url: str, session: Optional[requests.Session] = None) -> None:
        super().__init__(session)
        self._url = url

    @property
    def name(self) -> str:
        return f"published sheet ({self._url})"

    def fetch(self) -> list[CourseSection]:
        soup = BeautifulSoup(self._get(self._url).text, "lxml")
        return self.parse_table(soup)

    @staticmethod
    def parse_table(soup: BeautifulSoup) -> list[CourseSection]:
        """Extract sections from the grid table of a published sheet.

        Google's published pages put the column letters in <th> cells and
        the row numbers in a leading <th>, so only <td> cells carry data.
        """
        table = soup.find("table", class_="waffle")
        if not table or not isinstance(table, Tag):
            table = soup.find("table")

        if not table or not isinstance(table, Tag):
            raise CatalogSourceError("Sheet table not found in the page")

        rows: list[list[str]] = []
        for tr in table.find_all("tr"):
            if not isinstance(tr, Tag):
                continue
            cells = tr.find_all("td")
            if not cells:
                continue
            values = [cell.get_text(strip=True) for cell in cells]
            if any(values):
                rows.append(values)

        if not rows:
            return []

        header = [value.strip().lower() for value in rows[0]]
        if "hocphan_id" in header:
            known = [h if h in RECORD_FIELDS else "" for h in header]
            records = [
                {key: value for key, value in zip(known, row) if key}
                for row in rows[1:]
            ]
            return parse_records(records)

        return parse_rows(rows)


class CsvSource(CatalogSource):
    """CSV export of the sheet, from a local path or an http(s) URL."""

    def __init__(self, location: str, session: Optional[requests.Session] = None) -> None:
        super().__init__(session)
        self._location = location

    @property
    def name(self) -> str:
        return f"CSV file ({self._location})"

    @property
    def is_remote(self) -> bool:
        return self._location.startswith(("http://", "https://"))

    def fetch(self) -> list[CourseSection]:
        if self.is_remote:
            text = self._get(self._location).content.decode("utf-8-sig")
        else:
            text = Path(self._location).read_text(encoding="utf-8-sig")
        return parse_csv(text)


def load_catalog(sources: Iterable[CatalogSource]) -> list[CourseSection]:
    """Load the catalog from the first source that yields sections.

    Args:
        sources: Data sources in priority order.

    Returns:
        Course sections from the first successful source.

    Raises:
        CatalogUnavailableError: If every source failed or returned nothing.
            The last failure is chained as the cause.
    """
    errors: list[tuple[str, Exception]] = []

    for source in sources:
        logger.info("Loading course data from %s", source.name)
        try:
            sections = source.fetch()
        except (requests.RequestException, CatalogSourceError, OSError, ValueError) as e:
            logger.warning("Could not load from %s: %s", source.name, e)
            errors.append((source.name, e))
            continue

        if not sections:
            error = CatalogSourceError("no course sections found")
            logger.warning("Could not load from %s: %s", source.name, error)
            errors.append((source.name, error))
            continue

        logger.info("Loaded %d course sections from %s", len(sections), source.name)
        return sections

    cause = errors[-1][1] if errors else None
    raise CatalogUnavailableError(errors) from cause
