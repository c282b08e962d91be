"""Typed dataclasses describing a course, its sections, and its users."""

from __future__ import annotations

import dataclasses as dc
import datetime as dt  # noqa: TC003 - used for runtime type metadata
import enum
from pathlib import Path


class SiteConfigError(ValueError):
    """Raised when the course configuration is invalid or incomplete."""


class DisplayMode(enum.IntEnum):
    """How a course lays out its sections."""

    SINGLEPAGE = 0
    MULTIPAGE = 1


@dc.dataclass(slots=True)
class Course:
    """Course-level settings shared by every section in a render pass."""

    id: int
    fullname: str
    shortname: str
    format: str = "topics"
    coursedisplay: DisplayMode = DisplayMode.SINGLEPAGE
    marker: int = 0
    numsections: int | None = None
    startdate: dt.date | None = None


@dc.dataclass(slots=True)
class CourseModule:
    """An activity or resource listed inside a section."""

    id: int
    name: str
    modname: str
    visible: bool = True
    uservisible: bool = True
    completion_enabled: bool = False
    completed: bool = False


@dc.dataclass(slots=True)
class Section:
    """A course section as seen by the current user.

    Attributes
    ----------
    id : int
        Storage identifier of the section.
    section : int
        Ordinal position within the course; ``0`` is the general section.
    name : str or None
        Custom name; formats supply a default when ``None``.
    summary : str
        Markdown summary text.
    visible : bool
        Whether the section is shown to students.
    uservisible : bool
        Whether the current user may see the section contents.
    availableinfo : str or None
        Restriction text shown when the section is not available.
    availability : list[str]
        Human readable descriptions of the access restrictions.
    orphan : bool
        Set when the section exists in storage but falls outside the course
        structure.
    modules : list[CourseModule]
        Activities in display order.
    """

    id: int
    section: int
    name: str | None = None
    summary: str = ""
    visible: bool = True
    uservisible: bool = True
    availableinfo: str | None = None
    availability: list[str] = dc.field(default_factory=list)
    orphan: bool = False
    modules: list[CourseModule] = dc.field(default_factory=list)

    def is_orphan(self) -> bool:
        """Return ``True`` when the section is stealth (orphaned)."""
        return self.orphan


@dc.dataclass(slots=True, frozen=True)
class SectionPreferences:
    """Per-user settings stored for a single section."""

    contentcollapsed: bool = False


@dc.dataclass(slots=True)
class UserConfig:
    """A user known to the site together with their stored preferences."""

    id: int
    username: str
    fullname: str
    roles: list[str] = dc.field(default_factory=list)
    section_preferences: dict[int, SectionPreferences] = dc.field(
        default_factory=dict
    )


@dc.dataclass(slots=True)
class SiteConfig:
    """Everything needed to render one course for any configured user."""

    course: Course
    sections: list[Section]
    users: dict[str, UserConfig]
    roles: dict[str, frozenset[str]]
    site_id: int = 1
    wwwroot: str = "https://lms.example.invalid"
    output: Path = Path("public/course.html")

    def get_user(self, username: str) -> UserConfig:
        """Return the named user or raise ``KeyError`` listing known users."""
        try:
            return self.users[username]
        except KeyError as exc:
            available = ", ".join(sorted(self.users))
            msg = f"Unknown user '{username}'. Known users: {available}"
            raise KeyError(msg) from exc

    def get_section(self, num: int) -> Section:
        """Return the section with ordinal ``num``."""
        for section in self.sections:
            if section.section == num:
                return section
        msg = f"Course {self.course.id} has no section {num}."
        raise KeyError(msg)


__all__ = [
    "Course",
    "CourseModule",
    "DisplayMode",
    "Section",
    "SectionPreferences",
    "SiteConfig",
    "SiteConfigError",
    "UserConfig",
]
