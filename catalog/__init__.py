"""Catalog module for loading and parsing course section data."""

from .models import CourseSection, Day, Interval
from .parser import parse_csv, parse_records, parse_schedule, parse_weeks
from .sources import (
    AppsScriptSource,
    CatalogSource,
    CatalogSourceError,
    CatalogUnavailableError,
    CsvSource,
    PublishedSheetSource,
    load_catalog,
)

__all__ = [
    "AppsScriptSource",
    "CatalogSource",
    "CatalogSourceError",
    "CatalogUnavailableError",
    "CourseSection",
    "CsvSource",
    "Day",
    "Interval",
    "PublishedSheetSource",
    "load_catalog",
    "parse_csv",
    "parse_records",
    "parse_schedule",
    "parse_weeks",
]
