"""Topics format: sections are numbered topics and one can be highlighted."""

from __future__ import annotations

import typing as typ

from coursepages._constants import CAP_SET_CURRENT_SECTION
from coursepages.output.section_parts import ControlMenuOutput

from .base import CourseFormat

if typ.TYPE_CHECKING:
    from coursepages.config import Section


class TopicsControlMenuOutput(ControlMenuOutput):
    """Control menu with an extra entry toggling the highlighted topic."""

    def section_control_items(self) -> list[dict[str, str]]:
        items = super().section_control_items()
        fmt = self.format
        section = self.section
        if section.section == 0 or not fmt.has_capability(CAP_SET_CURRENT_SECTION):
            return items
        marker = 0 if fmt.is_section_current(section) else section.section
        key = "removemarker" if marker == 0 else "setmarker"
        highlight = {
            "key": key,
            "text": fmt.get_highlight_label(section),
            "url": (
                f"{fmt.wwwroot}/course/view.php?id={fmt.get_course().id}"
                f"&marker={marker}"
            ),
        }
        # The highlight toggle goes right after the edit entry.
        position = 1 if items and items[0]["key"] == "edit" else 0
        items.insert(position, highlight)
        return items


class TopicsFormat(CourseFormat):
    """Course laid out as topics; the course marker picks the current one."""

    format_name = "topics"
    output_classes: typ.ClassVar[dict[str, type]] = {
        "content/section/controlmenu": TopicsControlMenuOutput,
    }

    def get_section_highlighted_name(self) -> str:
        return self.get_string("markedthistopic")

    def get_highlight_label(self, section: Section) -> str:
        """Return the control menu label toggling the highlight of ``section``."""
        if self.is_section_current(section):
            return self.get_string("unmarkthistopic")
        return self.get_string("markthistopic")


__all__ = ["TopicsControlMenuOutput", "TopicsFormat"]
