"""Parsers turning raw timetable rows into course sections.

Spreadsheet-sourced data is inconsistently formatted, so every function in
this module is total: malformed input degrades to "no structured data"
(``None``, an empty week set, a skipped row) instead of raising.
"""

import csv
import io
import logging
import math
import re
import unicodedata
from typing import Any, Iterable, Mapping, Optional, Sequence

from .models import MAX_WEEK, CourseSection, Day, Interval

logger = logging.getLogger(__name__)

UNSCHEDULED = "T.-  -"

MIN_ROW_FIELDS = 8

RECORD_FIELDS = (
    "hocphan_id",
    "stt",
    "ten_hoc_phan",
    "si_so",
    "da_dang_ky",
    "giang_vien",
    "thoi_khoa_bieu",
    "tuan_hoc",
)

_SCHEDULE_RE = re.compile(r"T\.(Hai|Ba|Tư|Năm|Sáu|Bảy)\s+(\d+)->(\d+)")
_LEADING_INT_RE = re.compile(r"^\s*([+-]?\d+)")


def _normalize(text: str) -> str:
    return unicodedata.normalize("NFC", text)


def _to_int(value: Any) -> int:
    """Read a count leniently: leading digits count, anything else is zero."""
    if isinstance(value, bool):
        return 0
    if isinstance(value, int):
        return max(value, 0)
    if isinstance(value, float):
        return 0 if math.isnan(value) or math.isinf(value) else max(int(value), 0)
    match = _LEADING_INT_RE.match(str(value or ""))
    if not match:
        return 0
    try:
        return max(int(match.group(1)), 0)
    except ValueError:
        # past the interpreter's integer digit limit
        return 0


def _to_str(value: Any) -> str:
    if value is None:
        return ""
    if isinstance(value, float) and value.is_integer():
        value = int(value)
    return str(value).strip()


def parse_schedule(raw: Optional[str]) -> Optional[Interval]:
    """Parse a schedule string such as "T.Ba  1->2" into an Interval.

    Args:
        raw: Schedule cell from the timetable.

    Returns:
        The parsed interval, or None for the unscheduled sentinel and for
        anything that does not describe a valid period range.
    """
    if not raw:
        return None

    text = _normalize(raw)
    if text.strip() == UNSCHEDULED:
        return None

    match = _SCHEDULE_RE.search(text)
    if not match:
        return None

    day = Day.from_token("T." + match.group(1))
    if day is None:
        return None

    try:
        return Interval(day, int(match.group(2)), int(match.group(3)))
    except ValueError as e:
        logger.debug("Ignoring schedule %r: %s", raw, e)
        return None


def _parse_week_token(token: str) -> Optional[int]:
    token = token.strip()
    if not (token.isascii() and token.isdigit()):
        return None
    try:
        week = int(token)
    except ValueError:
        return None
    return week if 0 < week <= MAX_WEEK else None


def parse_weeks(raw: Optional[str]) -> frozenset[int]:
    """Parse a week list such as "23->27,31->40" into a set of week numbers.

    Ranges are inclusive; a reversed range ("9->3") contributes no weeks.
    Weeks outside 1..MAX_WEEK are dropped, and so is any range ending there.
    Surrounding quotes left over from CSV exports are ignored.
    """
    if not raw:
        return frozenset()

    weeks: set[int] = set()
    for part in str(raw).replace('"', "").split(","):
        if "->" in part:
            start_text, _, end_text = part.partition("->")
            start = _parse_week_token(start_text)
            end = _parse_week_token(end_text)
            if start is None or end is None:
                continue
            weeks.update(range(start, end + 1))
        else:
            week = _parse_week_token(part)
            if week is not None:
                weeks.add(week)

    return frozenset(weeks)


def _build_section(
    course_code: str,
    sequence: str,
    title: str,
    capacity: Any,
    enrolled: Any,
    instructor: str,
    raw_schedule: str,
    raw_weeks: str,
    index: int,
) -> CourseSection:
    course_code = _normalize(course_code)
    return CourseSection(
        id=f"{course_code}-{sequence or index}-{index}",
        course_code=course_code,
        sequence=sequence,
        title=_normalize(title),
        instructor=_normalize(instructor),
        capacity=_to_int(capacity),
        enrolled=_to_int(enrolled),
        raw_schedule=raw_schedule,
        raw_weeks=raw_weeks,
        time_slot=parse_schedule(raw_schedule),
        weeks=parse_weeks(raw_weeks),
    )


def section_from_row(values: Sequence[Any], row_index: int) -> Optional[CourseSection]:
    """Normalize one positional row.

    Args:
        values: code, sequence, title, capacity, enrolled, instructor,
            schedule and weeks, in that order. Extra fields are ignored.
        row_index: Position of the row in its source, used in the id.

    Returns:
        The section, or None when the row has too few fields.
    """
    if len(values) < MIN_ROW_FIELDS:
        return None

    fields = [_to_str(v) for v in values[:MIN_ROW_FIELDS]]
    code, sequence, title, capacity, enrolled, instructor, schedule, weeks = fields
    return _build_section(
        code, sequence, title, capacity, enrolled, instructor, schedule, weeks, row_index
    )


def section_from_record(record: Mapping[str, Any], index: int) -> Optional[CourseSection]:
    """Normalize one named-field record (hocphan_id, ten_hoc_phan, ...).

    Records without a ``hocphan_id`` key or with an empty title are skipped.
    """
    if "hocphan_id" not in record or record["hocphan_id"] is None:
        return None

    title = _to_str(record.get("ten_hoc_phan"))
    if not title:
        return None

    return _build_section(
        _to_str(record.get("hocphan_id")),
        _to_str(record.get("stt")),
        title,
        record.get("si_so"),
        record.get("da_dang_ky"),
        _to_str(record.get("giang_vien")),
        _to_str(record.get("thoi_khoa_bieu")),
        _to_str(record.get("tuan_hoc")),
        index,
    )


def parse_rows(rows: Iterable[Sequence[Any]]) -> list[CourseSection]:
    """Normalize positional rows; the first row is a header and is skipped."""
    sections: list[CourseSection] = []
    skipped = 0

    for index, row in enumerate(rows):
        if index == 0:
            continue
        if not any(_to_str(v) for v in row):
            continue

        section = section_from_row(row, index)
        if section is None:
            skipped += 1
            continue
        sections.append(section)

    if skipped:
        logger.info("Skipped %d row(s) with fewer than %d fields", skipped, MIN_ROW_FIELDS)
    return sections


def parse_csv(text: str) -> list[CourseSection]:
    """Parse a CSV export of the timetable sheet."""
    text = text.lstrip("\ufeff").strip()
    if not text:
        return []

    reader = csv.reader(io.StringIO(text))
    return parse_rows(reader)


def parse_records(records: Iterable[Any]) -> list[CourseSection]:
    """Parse a list of named-field records as returned by the sheet API."""
    sections: list[CourseSection] = []

    for index, record in enumerate(records):
        if not isinstance(record, Mapping):
            continue
        section = section_from_record(record, index)
        if section is not None:
            sections.append(section)

    return sections
