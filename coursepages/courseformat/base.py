"""Base course format shared by every section output class.

A course format is the per-request view of one course: which sections exist,
which one the page focuses on, whether the page is in editing mode and which
output classes render each part of a section. Output classes only ever read
from the format; nothing here is mutated during a render pass.
"""

from __future__ import annotations

import collections.abc as cabc
import datetime as dt
import typing as typ

from coursepages._constants import CAP_MANAGE_ACTIVITIES, SECTION_PARAM
from coursepages.access import (
    CourseContext,
    PageRequest,
    User,
    parse_section_number,
)
from coursepages.config import DisplayMode
from coursepages.output import section_parts
from coursepages.output.section import SectionOutput

if typ.TYPE_CHECKING:
    from coursepages.access import CapabilityChecker
    from coursepages.config import Course, Section, SectionPreferences
    from coursepages.strings import StringManager


class UnknownOutputClassError(LookupError):
    """Raised when a format has no output class registered under a name."""


DEFAULT_OUTPUT_CLASSES: dict[str, type] = {
    "content/section": SectionOutput,
    "content/section/header": section_parts.HeaderOutput,
    "content/section/cmlist": section_parts.CmListOutput,
    "content/section/summary": section_parts.SummaryOutput,
    "content/section/cmsummary": section_parts.CmSummaryOutput,
    "content/section/controlmenu": section_parts.ControlMenuOutput,
    "content/section/availability": section_parts.AvailabilityOutput,
    "content/section/visibility": section_parts.VisibilityOutput,
}


class CourseFormat:
    """Read-only rendering configuration of a course for one request."""

    format_name = "base"
    output_classes: typ.ClassVar[dict[str, type]] = {}

    def __init__(
        self,
        course: Course,
        sections: cabc.Sequence[Section],
        *,
        user: User,
        request: PageRequest,
        access: CapabilityChecker,
        strings: StringManager,
        preferences: cabc.Mapping[int, SectionPreferences] | None = None,
        site_id: int = 1,
        wwwroot: str = "https://lms.example.invalid",
        today: dt.date | None = None,
    ) -> None:
        """Bind the course to the request it is rendered for.

        Parameters
        ----------
        course : Course
            Course settings (display mode, marker, start date).
        sections : Sequence[Section]
            Sections of the course as visible to ``user``.
        user : User
            User the page is rendered for.
        request : PageRequest
            Incoming request; provides editing mode and query parameters.
        access : CapabilityChecker
            Permission checker used for every capability test.
        strings : StringManager
            Language pack used for section names and labels.
        preferences : Mapping[int, SectionPreferences], optional
            Stored section preferences of ``user`` keyed by section id.
        site_id : int, optional
            Identifier of the site front page course.
        wwwroot : str, optional
            Base URL used when building links.
        today : date, optional
            Date used by date-based formats; defaults to the current date.
        """
        self.course = course
        self.sections = list(sections)
        self.user = user
        self.request = request
        self.access = access
        self.strings = strings
        self.preferences = dict(preferences or {})
        self.site_id = site_id
        self.wwwroot = wwwroot.rstrip("/")
        self.today = today or dt.date.today()
        self.context = CourseContext.instance(course.id)
        self._sectionnum = parse_section_number(request.get_param(SECTION_PARAM))

    def get_course(self) -> Course:
        return self.course

    def get_format(self) -> str:
        return self.format_name

    def get_course_display(self) -> DisplayMode:
        return self.course.coursedisplay

    def get_sectionnum(self) -> int | None:
        """Return the number of the section displayed alone, if any."""
        return self._sectionnum

    def get_sectionid(self) -> int | None:
        """Return the id of the section displayed alone, if any."""
        if self._sectionnum is None:
            return None
        for section in self.sections:
            if section.section == self._sectionnum:
                return section.id
        return None

    def get_section(self, num: int) -> Section | None:
        for section in self.sections:
            if section.section == num:
                return section
        return None

    def get_sections_preferences(self) -> dict[int, SectionPreferences]:
        """Return the current user's section preferences keyed by section id."""
        return self.preferences

    def has_capability(self, capability: str) -> bool:
        """Return whether the current user holds ``capability`` in this course."""
        return self.access.has_capability(capability, self.context, self.user)

    def show_editor(self, capabilities: cabc.Sequence[str] | None = None) -> bool:
        """Return whether editing controls should be displayed.

        The page must be in editing mode and the user must hold every
        capability in ``capabilities``. ``None`` stands for the default
        activity management capability; an empty list requires none.
        """
        if capabilities is None:
            capabilities = [CAP_MANAGE_ACTIVITIES]
        if not self.request.user_is_editing():
            return False
        return all(self.has_capability(capability) for capability in capabilities)

    def is_section_current(self, section: Section) -> bool:
        """Return whether ``section`` is the highlighted section of the course."""
        return bool(section.section) and self.course.marker == section.section

    def get_string(self, identifier: str, a: object = None) -> str:
        """Return a string from this format's language component."""
        return self.strings.get_string(identifier, f"format_{self.format_name}", a)

    def get_section_name(self, section: Section) -> str:
        if section.name:
            return section.name
        return self.get_default_section_name(section)

    def get_default_section_name(self, section: Section) -> str:
        if section.section == 0:
            return self.get_string("section0name")
        return self.get_string("sectionname", section.section)

    def get_section_highlighted_name(self) -> str:
        return self.strings.get_string("highlighted")

    def get_view_url(self, section: Section) -> str:
        """Return the course page URL that shows ``section``."""
        url = f"{self.wwwroot}/course/view.php?id={self.course.id}"
        if (
            self.get_course_display() == DisplayMode.MULTIPAGE
            and section.section != 0
        ):
            return f"{url}&{SECTION_PARAM}={section.section}"
        return f"{url}#section-{section.section}"

    def get_output_class(self, name: str) -> type:
        """Return the output class registered under ``name``.

        Formats override individual parts by listing them in their own
        ``output_classes`` mapping; every other name falls back to the
        default classes.
        """
        for registry in (self.output_classes, DEFAULT_OUTPUT_CLASSES):
            if name in registry:
                return registry[name]
        msg = f"No output class '{name}' for format '{self.format_name}'."
        raise UnknownOutputClassError(msg)


__all__ = [
    "DEFAULT_OUTPUT_CLASSES",
    "CourseFormat",
    "UnknownOutputClassError",
]
