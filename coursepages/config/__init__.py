"""Load and validate course configuration YAML for section rendering.

This subpackage parses a course file describing the course settings, its
sections and activities, the roles available on the site, and the users with
their stored section preferences. It produces slotted dataclasses
(:class:`SiteConfig`, :class:`Course`, :class:`Section`, ...) that the course
formats and output classes consume. The primary entry point is
:func:`load_site_config`.

Examples
--------
>>> from pathlib import Path
>>> from coursepages.config import load_site_config
>>> site = load_site_config(Path("config/course.yaml"))  # doctest: +SKIP
>>> site.get_section(1).name  # doctest: +SKIP
'Getting started'
"""

from .loader import load_site_config
from .models import (
    Course,
    CourseModule,
    DisplayMode,
    Section,
    SectionPreferences,
    SiteConfig,
    SiteConfigError,
    UserConfig,
)

__all__ = [
    "Course",
    "CourseModule",
    "DisplayMode",
    "Section",
    "SectionPreferences",
    "SiteConfig",
    "SiteConfigError",
    "UserConfig",
    "load_site_config",
]
