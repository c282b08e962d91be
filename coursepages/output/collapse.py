"""Decide whether a section renders with its content collapsed."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from coursepages.access import parse_section_number

if typ.TYPE_CHECKING:
    from coursepages.config import Section, SectionPreferences


def is_section_collapsed(
    preferences: cabc.Mapping[int, SectionPreferences],
    section: Section,
    expand_section: str | int | None = None,
) -> bool:
    """Return ``True`` when ``section`` should be shown collapsed.

    Parameters
    ----------
    preferences : Mapping[int, SectionPreferences]
        Stored preferences of the current user keyed by section id.
    section : Section
        Section being rendered.
    expand_section : str or int or None, optional
        Value of the ``expandsection`` request parameter. A section whose
        number matches it is always expanded, whatever the stored preference.
        Numeric strings match by value, so ``"2.0"`` expands section 2.

    Examples
    --------
    >>> from coursepages.config import Section, SectionPreferences
    >>> prefs = {7: SectionPreferences(contentcollapsed=True)}
    >>> is_section_collapsed(prefs, Section(id=7, section=2))
    True
    >>> is_section_collapsed(prefs, Section(id=7, section=2), "2")
    False
    """
    contentcollapsed = False
    sectionpreferences = preferences.get(section.id)
    if sectionpreferences is not None and sectionpreferences.contentcollapsed:
        contentcollapsed = True

    if (
        expand_section is not None
        and parse_section_number(expand_section) == section.section
    ):
        contentcollapsed = False
    return contentcollapsed


__all__ = ["is_section_collapsed"]
