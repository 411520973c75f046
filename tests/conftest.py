import pytest
import requests

from catalog.models import CourseSection
from catalog.parser import parse_schedule, parse_weeks
from planner.store import MemoryStore


def make_section(
    section_id,
    schedule="T.Hai  1->3",
    weeks="1->10",
    capacity=50,
    enrolled=0,
    code=None,
    title=None,
):
    code = code or section_id.split("-")[0]
    return CourseSection(
        id=section_id,
        course_code=code,
        sequence="1",
        title=title or f"Course {section_id}",
        instructor="Nguyễn Văn A",
        capacity=capacity,
        enrolled=enrolled,
        raw_schedule=schedule,
        raw_weeks=weeks,
        time_slot=parse_schedule(schedule),
        weeks=parse_weeks(weeks),
    )


@pytest.fixture
def section_factory():
    return make_section


@pytest.fixture
def store():
    return MemoryStore()


class FakeResponse:
    def __init__(self, status_code=200, json_data=None, text="", content=None):
        self.status_code = status_code
        self._json = json_data
        self.text = text
        self.content = content if content is not None else text.encode("utf-8")

    def json(self):
        if self._json is None:
            raise ValueError("No JSON object could be decoded")
        return self._json

    def raise_for_status(self):
        if self.status_code >= 400:
            raise requests.HTTPError(f"{self.status_code} Error")


class FakeSession:
    """Stands in for requests.Session; records requested URLs."""

    def __init__(self, response=None, error=None):
        self.response = response
        self.error = error
        self.requested = []

    def get(self, url, timeout=None):
        self.requested.append((url, timeout))
        if self.error is not None:
            raise self.error
        return self.response


@pytest.fixture
def fake_response():
    return FakeResponse


@pytest.fixture
def fake_session():
    return FakeSession
