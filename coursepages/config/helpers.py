"""Utility helpers shared by the course configuration loader."""

from __future__ import annotations

import datetime as dt
import typing as typ

from .models import (
    CourseModule,
    DisplayMode,
    Section,
    SectionPreferences,
    SiteConfigError,
)

DISPLAY_MODE_ALIASES: dict[str, DisplayMode] = {
    "single": DisplayMode.SINGLEPAGE,
    "singlepage": DisplayMode.SINGLEPAGE,
    "multi": DisplayMode.MULTIPAGE,
    "multipage": DisplayMode.MULTIPAGE,
}


def _optional_str(value: object | None) -> str | None:
    """Return a stripped string value or None when empty."""
    if value is None:
        return None
    text = str(value).strip()
    return text or None


def _parse_display_mode(value: object | None) -> DisplayMode:
    """Return the display mode encoded by ``value`` (name or integer)."""
    match value:
        case None:
            return DisplayMode.SINGLEPAGE
        case bool():
            msg = f"Invalid course display mode: {value!r}"
            raise SiteConfigError(msg)
        case int():
            try:
                return DisplayMode(value)
            except ValueError as exc:
                msg = f"Invalid course display mode: {value!r}"
                raise SiteConfigError(msg) from exc
        case str() as text:
            key = text.strip().lower().replace("-", "").replace("_", "")
            if key in DISPLAY_MODE_ALIASES:
                return DISPLAY_MODE_ALIASES[key]
            msg = f"Invalid course display mode: {value!r}"
            raise SiteConfigError(msg)
        case _:
            msg = f"Invalid course display mode: {value!r}"
            raise SiteConfigError(msg)


def _parse_date(value: dt.date | str | None) -> dt.date | None:
    """Return a date parsed from ``value``, or None when absent or malformed."""
    match value:
        case dt.datetime():
            return value.date()
        case dt.date():
            return value
        case str() as text:
            sanitized = text.strip()
            if not sanitized:
                return None
            try:
                return dt.date.fromisoformat(sanitized)
            except ValueError:
                return None
        case _:
            return None


def _build_module(payload: typ.Mapping[str, typ.Any]) -> CourseModule:
    """Build a CourseModule from a YAML mapping."""
    if "id" not in payload or "name" not in payload:
        msg = "Every module needs an 'id' and a 'name'."
        raise SiteConfigError(msg)
    visible = bool(payload.get("visible", True))
    return CourseModule(
        id=int(payload["id"]),
        name=str(payload["name"]),
        modname=str(payload.get("modname", "page")),
        visible=visible,
        uservisible=bool(payload.get("uservisible", visible)),
        completion_enabled=bool(payload.get("completion", False)),
        completed=bool(payload.get("completed", False)),
    )


def _build_section(
    payload: typ.Mapping[str, typ.Any], *, numsections: int | None
) -> Section:
    """Build a Section, deriving the orphan flag from ``numsections``."""
    if "id" not in payload or "section" not in payload:
        msg = "Every section needs an 'id' and a 'section' number."
        raise SiteConfigError(msg)
    num = int(payload["section"])
    orphan = payload.get("orphan")
    if orphan is None:
        orphan = numsections is not None and num > numsections
    visible = bool(payload.get("visible", True))
    availability = [
        text
        for text in (_optional_str(item) for item in payload.get("availability") or [])
        if text
    ]
    modules = [
        _build_module(item)
        for item in payload.get("modules") or []
        if isinstance(item, dict)
    ]
    return Section(
        id=int(payload["id"]),
        section=num,
        name=_optional_str(payload.get("name")),
        summary=str(payload.get("summary") or ""),
        visible=visible,
        uservisible=bool(payload.get("uservisible", True)),
        availableinfo=_optional_str(payload.get("availableinfo")),
        availability=availability,
        orphan=bool(orphan),
        modules=modules,
    )


def _build_preferences(
    payload: typ.Mapping[typ.Any, typ.Any] | None,
) -> dict[int, SectionPreferences]:
    """Build per-section preferences keyed by section id."""
    result: dict[int, SectionPreferences] = {}
    for key, value in (payload or {}).items():
        if not isinstance(value, dict):
            continue
        result[int(key)] = SectionPreferences(
            contentcollapsed=bool(value.get("contentcollapsed", False))
        )
    return result


__all__ = [
    "DISPLAY_MODE_ALIASES",
    "_build_module",
    "_build_preferences",
    "_build_section",
    "_optional_str",
    "_parse_date",
    "_parse_display_mode",
]
