"""Course formats and the factory that binds a loaded course to a request.

Examples
--------
>>> from pathlib import Path
>>> from coursepages.access import PageRequest
>>> from coursepages.config import load_site_config
>>> from coursepages.courseformat import build_course_format
>>> site = load_site_config(Path("config/course.yaml"))  # doctest: +SKIP
>>> request = PageRequest(editing=True)
>>> fmt = build_course_format(site, "alice", request)  # doctest: +SKIP
>>> fmt.get_format()  # doctest: +SKIP
'topics'
"""

from __future__ import annotations

import dataclasses as dc
import datetime as dt
import logging
import typing as typ

from coursepages._constants import CAP_VIEW_HIDDEN_SECTIONS
from coursepages.access import CapabilityChecker, CourseContext, PageRequest, User
from coursepages.strings import StringManager

from .base import DEFAULT_OUTPUT_CLASSES, CourseFormat, UnknownOutputClassError
from .topics import TopicsControlMenuOutput, TopicsFormat
from .weeks import SectionDates, WeeksFormat

if typ.TYPE_CHECKING:
    from coursepages.config import Section, SiteConfig

logger = logging.getLogger(__name__)

FORMAT_CLASSES: dict[str, type[CourseFormat]] = {
    TopicsFormat.format_name: TopicsFormat,
    WeeksFormat.format_name: WeeksFormat,
}


class UnknownFormatError(ValueError):
    """Raised when a course names a format that is not registered."""


def get_format_class(name: str) -> type[CourseFormat]:
    """Return the format class registered under ``name``."""
    try:
        return FORMAT_CLASSES[name]
    except KeyError as exc:
        available = ", ".join(sorted(FORMAT_CLASSES))
        msg = f"Unknown course format '{name}'. Known formats: {available}"
        raise UnknownFormatError(msg) from exc


def build_course_format(
    site: SiteConfig,
    username: str,
    request: PageRequest | None = None,
    *,
    strings: StringManager | None = None,
    today: dt.date | None = None,
) -> CourseFormat:
    """Bind the configured course to ``username`` and an incoming request.

    Raises
    ------
    KeyError
        If ``username`` is not configured.
    UnknownFormatError
        If the course uses an unregistered format.
    """
    user_config = site.get_user(username)
    format_class = get_format_class(site.course.format)
    logger.debug(
        "Building %s format for course %s and user %s",
        format_class.format_name,
        site.course.id,
        username,
    )
    user = User(
        id=user_config.id,
        username=user_config.username,
        fullname=user_config.fullname,
    )
    access = CapabilityChecker.from_site_config(site)
    sections = site.sections
    if access.has_capability(
        CAP_VIEW_HIDDEN_SECTIONS, CourseContext.instance(site.course.id), user
    ):
        sections = [_reveal_hidden(section) for section in sections]
    return format_class(
        site.course,
        sections,
        user=user,
        request=request or PageRequest(),
        access=access,
        strings=strings or StringManager(),
        preferences=user_config.section_preferences,
        site_id=site.site_id,
        wwwroot=site.wwwroot,
        today=today,
    )


def _reveal_hidden(section: Section) -> Section:
    """Return a copy of ``section`` as seen by a user who may view hidden content."""
    return dc.replace(
        section,
        uservisible=True,
        modules=[dc.replace(cm, uservisible=True) for cm in section.modules],
    )


__all__ = [
    "DEFAULT_OUTPUT_CLASSES",
    "FORMAT_CLASSES",
    "CourseFormat",
    "SectionDates",
    "TopicsControlMenuOutput",
    "TopicsFormat",
    "UnknownFormatError",
    "UnknownOutputClassError",
    "WeeksFormat",
    "build_course_format",
    "get_format_class",
]
