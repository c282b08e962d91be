"""Template context for a single course section.

:class:`SectionOutput` assembles the data a section template needs: the base
identifiers of the section plus the optional partials (header, activity list,
activity summary, availability, visibility, editor controls) produced by the
output classes the course format registers. It performs no validation of its
own; any exception raised by a collaborator propagates to the caller.

Example
-------
>>> from coursepages.output import SectionOutput, TemplateRenderer
>>> section_output = SectionOutput(fmt, fmt.get_section(1))  # doctest: +SKIP
>>> data = section_output.export_for_template(TemplateRenderer())  # doctest: +SKIP
>>> data["num"]  # doctest: +SKIP
1
"""

from __future__ import annotations

import logging
import typing as typ

from coursepages._constants import (
    CAP_SECTION_VISIBILITY,
    CAP_VIEW_HIDDEN_SECTIONS,
    EXPAND_SECTION_PARAM,
)
from coursepages.config import DisplayMode
from coursepages.strings import get_accesshide

from .collapse import is_section_collapsed

if typ.TYPE_CHECKING:
    from coursepages.config import Section
    from coursepages.courseformat import CourseFormat

    from .models import TemplateContext
    from .renderer import TemplateRenderer

logger = logging.getLogger(__name__)


class SectionOutput:
    """Export the template context of one section within a course format."""

    template_name = "section.jinja"

    def __init__(self, format: CourseFormat, section: Section) -> None:  # noqa: A002
        """Resolve the output classes for every partial of the section.

        Parameters
        ----------
        format : CourseFormat
            Course format bound to the current request.
        section : Section
            Section to export.
        """
        self.format = format
        self.section = section
        self.hidetitle = False
        self.hidecontrols = False
        self.isstealth = section.is_orphan()

        self.headerclass = format.get_output_class("content/section/header")
        self.cmlistclass = format.get_output_class("content/section/cmlist")
        self.summaryclass = format.get_output_class("content/section/summary")
        self.cmsummaryclass = format.get_output_class("content/section/cmsummary")
        self.controlmenuclass = format.get_output_class("content/section/controlmenu")
        self.availabilityclass = format.get_output_class(
            "content/section/availability"
        )
        self.visibilityclass = format.get_output_class("content/section/visibility")

    def is_stealth(self) -> bool:
        """Return whether the section is stealth (orphaned)."""
        return self.isstealth

    def hide_title(self) -> None:
        """Hide the section title, for sections displayed in isolation."""
        self.hidetitle = True

    def hide_controls(self) -> None:
        """Hide the section controls, for sections displayed in isolation."""
        self.hidecontrols = True

    def export_for_template(self, output: TemplateRenderer) -> TemplateContext:
        """Return the template context of the section.

        Parameters
        ----------
        output : TemplateRenderer
            Renderer calling this method; forwarded to every partial.

        Returns
        -------
        TemplateContext
            Mapping of template-safe values. Optional partials only appear when
            they apply to the section and the current user.
        """
        fmt = self.format
        course = fmt.get_course()
        section = self.section
        sitehome = course.id == fmt.site_id

        summary = self.summaryclass(fmt, section)

        data: TemplateContext = {
            "num": section.section or 0,
            "id": section.id,
            "sectionreturnnum": fmt.get_sectionnum(),
            "insertafter": False,
            "summary": summary.export_for_template(output),
            "highlightedlabel": fmt.get_section_highlighted_name(),
            "sitehome": sitehome,
            "editing": fmt.request.user_is_editing(),
            "displayonesection": not sitehome and fmt.get_sectionid() == section.id,
            "sectionname": fmt.get_section_name(section),
        }

        haspartials = {
            "availability": self._add_availability_data(data, output),
            "visibility": self._add_visibility_data(data, output),
            "editor": self._add_editor_data(data, output),
            "header": self._add_header_data(data, output),
            "cm": self._add_cm_data(data, output),
        }
        self._add_format_data(data, haspartials, output)
        logger.debug("Exported section %s with partials %s", section.id, haspartials)
        return data

    def _add_header_data(self, data: TemplateContext, output: TemplateRenderer) -> bool:
        if self.hidetitle:
            return False

        section = self.section
        fmt = self.format

        header = self.headerclass(fmt, section)
        headerdata = header.export_for_template(output)

        # A section displayed alone carries its title above the section body.
        if section.section != 0 and section.section == fmt.get_sectionnum():
            data["singleheader"] = headerdata
        else:
            data["header"] = headerdata
        return True

    def _add_cm_data(self, data: TemplateContext, output: TemplateRenderer) -> bool:
        result = False

        section = self.section
        fmt = self.format

        showsummary = (
            section.section != 0
            and section.section != fmt.get_sectionnum()
            and fmt.get_course_display() == DisplayMode.MULTIPAGE
            and not fmt.show_editor()
        )

        showcmlist = section.uservisible

        if showsummary:
            cmsummary = self.cmsummaryclass(fmt, section)
            data["cmsummary"] = cmsummary.export_for_template(output)
            data["onlysummary"] = True
            result = True

            # In multipage, only the current section (and section 0) lists activities.
            if not fmt.is_section_current(section):
                showcmlist = False

        if showcmlist:
            cmlist = self.cmlistclass(fmt, section)
            data["cmlist"] = cmlist.export_for_template(output)
            result = True
        return result

    def _add_availability_data(
        self, data: TemplateContext, output: TemplateRenderer
    ) -> bool:
        availability = self.availabilityclass(self.format, self.section)
        data["availability"] = availability.export_for_template(output)
        data["restrictionlock"] = bool(self.section.availableinfo)
        data["hasavailability"] = availability.has_availability(output)
        return True

    def _add_visibility_data(
        self, data: TemplateContext, output: TemplateRenderer
    ) -> bool:
        result = False
        if self.isstealth:
            data["isstealth"] = True
            data["ishidden"] = True
            result = True
        if not self.section.visible:
            data["ishidden"] = True
            if self.format.has_capability(CAP_VIEW_HIDDEN_SECTIONS):
                result = True
        visibility = self.visibilityclass(self.format, self.section)
        data["visibility"] = visibility.export_for_template(output)
        return result

    def _add_editor_data(self, data: TemplateContext, output: TemplateRenderer) -> bool:
        fmt = self.format
        editcaps: list[str] = []
        if fmt.has_capability(CAP_SECTION_VISIBILITY):
            editcaps = [CAP_SECTION_VISIBILITY]
        if not fmt.show_editor(editcaps):
            return False

        # On a single section page the control menu lives in the page header.
        if not self.hidecontrols and fmt.get_sectionid() != self.section.id:
            controlmenu = self.controlmenuclass(fmt, self.section)
            data["controlmenu"] = controlmenu.export_for_template(output)
        if not self.isstealth:
            data["cmcontrols"] = output.course_section_add_cm_control(
                fmt.get_course(), self.section.section, fmt.get_sectionnum()
            )
        return True

    def _add_format_data(
        self,
        data: TemplateContext,
        haspartials: dict[str, bool],  # noqa: ARG002
        output: TemplateRenderer,  # noqa: ARG002
    ) -> bool:
        section = self.section
        fmt = self.format

        data["iscoursedisplaymultipage"] = (
            fmt.get_course_display() == DisplayMode.MULTIPAGE
        )
        if data["num"] == 0 and not data["iscoursedisplaymultipage"]:
            data["collapsemenu"] = True

        data["contentcollapsed"] = self.is_section_collapsed()

        if fmt.is_section_current(section):
            data["iscurrent"] = True
            data["currentlink"] = get_accesshide(fmt.get_string("currentsection"))
        return True

    def is_section_collapsed(self) -> bool:
        """Return whether the section should be shown collapsed."""
        return is_section_collapsed(
            self.format.get_sections_preferences(),
            self.section,
            self.format.request.get_param(EXPAND_SECTION_PARAM),
        )


__all__ = ["SectionOutput"]
