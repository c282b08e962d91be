"""Shared fixtures building course formats without a configuration file."""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import typing as typ

import pytest

from coursepages.access import CapabilityChecker, PageRequest, User
from coursepages.config import Course, CourseModule, DisplayMode, Section
from coursepages.courseformat import CourseFormat, TopicsFormat
from coursepages.output import TemplateRenderer
from coursepages.strings import StringManager

if typ.TYPE_CHECKING:
    from coursepages.config import SectionPreferences

TEST_USER_ID = 5
COURSE_START = dt.date(2026, 9, 7)


def sample_sections() -> list[Section]:
    """Return a general section plus three topics with a few activities."""
    return [
        Section(
            id=10,
            section=0,
            summary="Welcome to the **course**.",
            modules=[CourseModule(id=100, name="News", modname="forum")],
        ),
        Section(
            id=11,
            section=1,
            summary="First steps.",
            modules=[
                CourseModule(
                    id=101,
                    name="Intro page",
                    modname="page",
                    completion_enabled=True,
                    completed=True,
                ),
                CourseModule(
                    id=102, name="Quiz", modname="quiz", completion_enabled=True
                ),
                CourseModule(id=103, name="Second page", modname="page"),
            ],
        ),
        Section(
            id=12,
            section=2,
            name="Files",
            modules=[CourseModule(id=104, name="Formats", modname="page")],
        ),
        Section(id=13, section=3, visible=False, uservisible=False),
    ]


@pytest.fixture
def strings() -> StringManager:
    """Return the packaged English language pack."""
    return StringManager()


@pytest.fixture
def renderer(strings: StringManager) -> TemplateRenderer:
    """Return a renderer over the packaged templates."""
    return TemplateRenderer(strings=strings)


@pytest.fixture
def make_format(strings: StringManager) -> cabc.Callable[..., CourseFormat]:
    """Return a factory building a course format for a single test user.

    Keyword arguments mirror the knobs the output classes read: display mode,
    marker, editing mode, held capabilities, request parameters and stored
    preferences.
    """

    def _make(
        *,
        sections: list[Section] | None = None,
        coursedisplay: DisplayMode = DisplayMode.SINGLEPAGE,
        marker: int = 0,
        editing: bool = False,
        capabilities: cabc.Iterable[str] = (),
        params: dict[str, str] | None = None,
        preferences: dict[int, SectionPreferences] | None = None,
        format_class: type[CourseFormat] = TopicsFormat,
        course_id: int = 2,
        site_id: int = 1,
        today: dt.date | None = None,
    ) -> CourseFormat:
        course = Course(
            id=course_id,
            fullname="Test course",
            shortname="TEST",
            format=format_class.format_name,
            coursedisplay=coursedisplay,
            marker=marker,
            startdate=COURSE_START,
        )
        access = CapabilityChecker(
            roles={"testrole": frozenset(capabilities)},
            assignments={TEST_USER_ID: ["testrole"]},
        )
        return format_class(
            course,
            sections if sections is not None else sample_sections(),
            user=User(id=TEST_USER_ID, username="tester", fullname="Test User"),
            request=PageRequest(params=dict(params or {}), editing=editing),
            access=access,
            strings=strings,
            preferences=preferences,
            site_id=site_id,
            today=today or COURSE_START,
        )

    return _make
