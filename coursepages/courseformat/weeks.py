"""Weeks format: each section after the general one covers one calendar week."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import typing as typ

from .base import CourseFormat

if typ.TYPE_CHECKING:
    from coursepages.config import Section

WEEK = dt.timedelta(days=7)


@dc.dataclass(slots=True, frozen=True)
class SectionDates:
    """Half-open date range ``[start, end)`` covered by a weekly section."""

    start: dt.date
    end: dt.date


class WeeksFormat(CourseFormat):
    """Course laid out in weeks counted from the course start date."""

    format_name = "weeks"

    def get_section_dates(self, section: Section) -> SectionDates | None:
        """Return the week covered by ``section``, or None without a start date."""
        startdate = self.course.startdate
        if startdate is None or section.section < 1:
            return None
        start = startdate + WEEK * (section.section - 1)
        return SectionDates(start=start, end=start + WEEK)

    def is_section_current(self, section: Section) -> bool:
        dates = self.get_section_dates(section)
        if dates is None:
            return False
        return dates.start <= self.today < dates.end

    def get_default_section_name(self, section: Section) -> str:
        dates = self.get_section_dates(section)
        if dates is None:
            return super().get_default_section_name(section)
        last_day = dates.end - dt.timedelta(days=1)
        return self.get_string(
            "weekrange",
            {"start": _format_day(dates.start), "end": _format_day(last_day)},
        )


def _format_day(day: dt.date) -> str:
    return f"{day.day} {day:%B}"


__all__ = ["SectionDates", "WeeksFormat"]
