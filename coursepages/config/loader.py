"""Load course configuration YAML into typed dataclasses."""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

from ruamel.yaml import YAML

from .helpers import (
    _build_preferences,
    _build_section,
    _optional_str,
    _parse_date,
    _parse_display_mode,
)
from .models import Course, SiteConfig, SiteConfigError, UserConfig

logger = logging.getLogger(__name__)


def load_site_config(path: Path) -> SiteConfig:
    """Load the YAML file describing a course, its users and their roles.

    Parameters
    ----------
    path : Path
        Filesystem path to the YAML course file (for example,
        ``config/course.yaml``).

    Returns
    -------
    SiteConfig
        Parsed configuration with the course, its sections ordered by number,
        the users keyed by username and the role capability sets.

    Raises
    ------
    FileNotFoundError
        If the configuration file does not exist at ``path``.
    TypeError
        If the top-level YAML structure is not a mapping.
    SiteConfigError
        If the course block or its sections are missing or invalid.
    YAMLError
        If the YAML content cannot be parsed by the underlying loader.

    Examples
    --------
    >>> from pathlib import Path
    >>> from coursepages.config import load_site_config
    >>> config = load_site_config(Path("config/course.yaml"))  # doctest: +SKIP
    >>> config.course.format  # doctest: +SKIP
    'topics'
    """
    if not path.exists():
        msg = f"Configuration file '{path}' not found."
        raise FileNotFoundError(msg)

    loader = YAML(typ="safe")
    loader.version = (1, 2)
    with path.open("r", encoding="utf-8") as handle:
        loaded = loader.load(handle) or {}
    if not isinstance(loaded, dict):
        msg = "Top-level YAML structure must be a mapping."
        raise TypeError(msg)
    raw: dict[str, typ.Any] = dict(loaded)
    site_raw = raw.get("site", {}) or {}

    course = _build_course(raw.get("course"))
    sections_raw = raw.get("sections") or []
    if not sections_raw:
        msg = "No sections defined in course configuration."
        raise SiteConfigError(msg)
    sections = sorted(
        (
            _build_section(payload, numsections=course.numsections)
            for payload in sections_raw
            if isinstance(payload, dict)
        ),
        key=lambda section: section.section,
    )
    _check_unique_numbers([section.section for section in sections])

    roles = {
        str(name): frozenset(str(cap) for cap in caps or [])
        for name, caps in (raw.get("roles") or {}).items()
    }
    users: dict[str, UserConfig] = {}
    for username, payload in (raw.get("users") or {}).items():
        match payload:
            case dict():
                users[str(username)] = _build_user(str(username), payload, roles)
            case _:
                continue

    logger.debug(
        "Loaded course %s with %d sections and %d users from %s",
        course.id,
        len(sections),
        len(users),
        path,
    )
    return SiteConfig(
        course=course,
        sections=sections,
        users=users,
        roles=roles,
        site_id=int(site_raw.get("id", 1)),
        wwwroot=str(site_raw.get("wwwroot", "https://lms.example.invalid")).rstrip(
            "/"
        ),
        output=Path(site_raw.get("output", "public/course.html")),
    )


def _build_course(payload: typ.Mapping[str, typ.Any] | None) -> Course:
    """Build the Course from its YAML block."""
    if not isinstance(payload, dict) or "id" not in payload:
        msg = "Course configuration requires a 'course' block with an 'id'."
        raise SiteConfigError(msg)
    fullname = _optional_str(payload.get("fullname")) or f"Course {payload['id']}"
    numsections = payload.get("numsections")
    return Course(
        id=int(payload["id"]),
        fullname=fullname,
        shortname=_optional_str(payload.get("shortname")) or fullname,
        format=(_optional_str(payload.get("format")) or "topics").lower(),
        coursedisplay=_parse_display_mode(payload.get("coursedisplay")),
        marker=int(payload.get("marker") or 0),
        numsections=int(numsections) if numsections is not None else None,
        startdate=_parse_date(payload.get("startdate")),
    )


def _build_user(
    username: str,
    payload: typ.Mapping[str, typ.Any],
    roles: typ.Mapping[str, frozenset[str]],
) -> UserConfig:
    """Build a UserConfig, rejecting references to undefined roles."""
    if "id" not in payload:
        msg = f"User '{username}' is missing an 'id'."
        raise SiteConfigError(msg)
    user_roles = [str(role) for role in payload.get("roles") or []]
    unknown = [role for role in user_roles if role not in roles]
    if unknown:
        msg = f"User '{username}' references undefined roles: {', '.join(unknown)}"
        raise SiteConfigError(msg)
    return UserConfig(
        id=int(payload["id"]),
        username=username,
        fullname=_optional_str(payload.get("fullname")) or username,
        roles=user_roles,
        section_preferences=_build_preferences(payload.get("preferences")),
    )


def _check_unique_numbers(numbers: list[int]) -> None:
    seen: set[int] = set()
    for number in numbers:
        if number in seen:
            msg = f"Section number {number} is defined more than once."
            raise SiteConfigError(msg)
        seen.add(number)


__all__ = ["load_site_config"]
