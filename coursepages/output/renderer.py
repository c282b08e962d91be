"""Jinja2 renderer passed to every output class during a render pass."""

from __future__ import annotations

import typing as typ
from pathlib import Path

from jinja2 import Environment, FileSystemLoader, select_autoescape
from markupsafe import Markup

from coursepages.strings import StringManager

if typ.TYPE_CHECKING:
    from coursepages.config import Course

    from .models import Templatable, TemplateContext


class TemplateRenderer:
    """Render templatable objects and small course widgets with Jinja2."""

    def __init__(
        self,
        *,
        templates_dir: Path | None = None,
        strings: StringManager | None = None,
        wwwroot: str = "https://lms.example.invalid",
    ) -> None:
        """Initialize the Jinja environment.

        Parameters
        ----------
        templates_dir : Path, optional
            Directory containing Jinja templates. Defaults to
            ``coursepages/templates``.
        strings : StringManager, optional
            Language pack used for widget labels; the English pack is loaded
            when omitted.
        wwwroot : str, optional
            Base URL used when building widget links.
        """
        default_templates = Path(__file__).resolve().parents[1] / "templates"
        self.templates_dir = templates_dir or default_templates
        self.strings = strings or StringManager()
        self.wwwroot = wwwroot.rstrip("/")
        self.env = Environment(
            loader=FileSystemLoader(str(self.templates_dir)),
            autoescape=select_autoescape(["html", "xml", "jinja"]),
            trim_blocks=True,
            lstrip_blocks=True,
        )

    def render(self, templatable: Templatable) -> Markup:
        """Export ``templatable`` and render it with its named template."""
        context = templatable.export_for_template(self)
        return self.render_from_template(templatable.template_name, context)

    def render_from_template(
        self, template_name: str, context: TemplateContext
    ) -> Markup:
        """Render ``template_name`` with the keys of ``context`` as variables."""
        template = self.env.get_template(template_name)
        return Markup(template.render(**context))

    def course_section_add_cm_control(
        self, course: Course, section: int, sectionreturn: int | None = None
    ) -> Markup:
        """Return the "add an activity or resource" control for a section."""
        url = f"{self.wwwroot}/course/modedit.php?course={course.id}&section={section}"
        if sectionreturn is not None:
            url = f"{url}&sr={sectionreturn}"
        return self.render_from_template(
            "add_cm_control.jinja",
            {
                "url": url,
                "sectionnum": section,
                "label": self.strings.get_string("addresourceoractivity"),
            },
        )


__all__ = ["TemplateRenderer"]
