"""Course page rendering pipeline.

This module turns a course format bound to a request into a static HTML page
listing the sections the user may see. ``CoursePageBuilder`` asks the format
for its section output class, renders each section through the shared
``TemplateRenderer`` and writes the page wrapper.

>>> from coursepages.course_page import CoursePageBuilder
>>> builder = CoursePageBuilder(fmt)  # doctest: +SKIP
>>> output_path = builder.run(Path("public/course.html"))  # doctest: +SKIP

When the request carries a ``section`` parameter only that section is
rendered. Sections of the site front page are rendered without their title
and controls.
"""

from __future__ import annotations

import datetime as dt
import logging
import typing as typ

from markupsafe import Markup

from ._constants import CAP_VIEW_HIDDEN_SECTIONS
from .output import TemplateRenderer

if typ.TYPE_CHECKING:
    from pathlib import Path

    from .config import Section
    from .courseformat import CourseFormat

logger = logging.getLogger(__name__)


class CoursePageBuilder:
    """Render the sections of a course into a full HTML page."""

    def __init__(
        self,
        format: CourseFormat,  # noqa: A002
        *,
        renderer: TemplateRenderer | None = None,
    ) -> None:
        self.format = format
        self.renderer = renderer or TemplateRenderer(
            strings=format.strings, wwwroot=format.wwwroot
        )
        self.section_class = format.get_output_class("content/section")

    def visible_sections(self) -> list[Section]:
        """Return the sections to render for the current user and request."""
        fmt = self.format
        sectionnum = fmt.get_sectionnum()
        canviewhidden = fmt.has_capability(CAP_VIEW_HIDDEN_SECTIONS)
        selected: list[Section] = []
        for section in fmt.sections:
            if sectionnum is not None and section.section != sectionnum:
                continue
            if section.is_orphan() and not fmt.show_editor():
                continue
            if not (section.uservisible or section.availableinfo or canviewhidden):
                continue
            selected.append(section)
        return selected

    def render_sections(self) -> list[Markup]:
        """Render every visible section into HTML fragments."""
        fmt = self.format
        issitehome = fmt.get_course().id == fmt.site_id
        rendered: list[Markup] = []
        for section in self.visible_sections():
            section_output = self.section_class(fmt, section)
            if issitehome:
                section_output.hide_title()
                section_output.hide_controls()
            rendered.append(self.renderer.render(section_output))
        return rendered

    def run(self, output_path: Path) -> Path:
        """Render and write the course page, returning the output path.

        Notes
        -----
        Parent directories are created as needed and the file is written as
        UTF-8 text ending with a newline. Filesystem and collaborator errors
        propagate to the caller.
        """
        fmt = self.format
        course = fmt.get_course()
        sections = self.render_sections()
        logger.debug("Rendered %d sections of course %s", len(sections), course.id)
        html = self.renderer.render_from_template(
            "course_page.jinja",
            {
                "course": {"id": course.id, "fullname": course.fullname},
                "format": fmt.get_format(),
                "editing": fmt.request.user_is_editing(),
                "sections": sections,
                "generated_at": dt.datetime.now(dt.UTC),
            },
        )
        if not html.endswith("\n"):
            html += "\n"
        output_path.parent.mkdir(parents=True, exist_ok=True)
        output_path.write_text(html, encoding="utf-8")
        return output_path


__all__ = ["CoursePageBuilder"]
