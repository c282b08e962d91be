"""Default output classes for the partials of a course section.

Each class receives the course format and the section, and exports a
template-safe mapping. Course formats replace any of them by registering a
subclass under the same name (see ``CourseFormat.output_classes``).
"""

from __future__ import annotations

import collections
import typing as typ

from markdown import markdown
from markupsafe import Markup

from coursepages._constants import (
    CAP_COURSE_UPDATE,
    CAP_SECTION_VISIBILITY,
    CAP_VIEW_HIDDEN_SECTIONS,
)
from coursepages.config import DisplayMode

if typ.TYPE_CHECKING:
    from coursepages.config import CourseModule, Section
    from coursepages.courseformat import CourseFormat

    from .models import TemplateContext
    from .renderer import TemplateRenderer

SUMMARY_MARKDOWN_EXTENSIONS = ["sane_lists", "tables", "fenced_code"]


class SectionPart:
    """Base for every section partial: holds the format and the section."""

    def __init__(self, format: CourseFormat, section: Section) -> None:  # noqa: A002
        self.format = format
        self.section = section

    def export_for_template(self, output: TemplateRenderer) -> TemplateContext:
        raise NotImplementedError


class HeaderOutput(SectionPart):
    """Section title, linked to the section page on multi-page courses."""

    def export_for_template(self, output: TemplateRenderer) -> TemplateContext:
        fmt = self.format
        section = self.section
        displayonesection = fmt.get_sectionid() == section.id
        headerdisplaymultipage = (
            fmt.get_course_display() == DisplayMode.MULTIPAGE
            and section.section != 0
            and not displayonesection
        )
        return {
            "num": section.section,
            "id": section.id,
            "name": fmt.get_section_name(section),
            "title": fmt.get_section_name(section),
            "url": fmt.get_view_url(section),
            "headerdisplaymultipage": headerdisplaymultipage,
            "headinglevel": 2 if displayonesection else 3,
            "editing": fmt.request.user_is_editing(),
        }


class SummaryOutput(SectionPart):
    """Section summary rendered from markdown."""

    def export_for_template(self, output: TemplateRenderer) -> TemplateContext:
        text = self.format_summary_text()
        return {"summarytext": text, "hassummary": bool(text)}

    def format_summary_text(self) -> Markup:
        normalized = (self.section.summary or "").strip()
        if not normalized:
            return Markup("")
        return Markup(
            markdown(
                normalized,
                extensions=SUMMARY_MARKDOWN_EXTENSIONS,
                output_format="html",
            )
        )


class CmListOutput(SectionPart):
    """The activities of a section that the user can see."""

    def export_for_template(self, output: TemplateRenderer) -> TemplateContext:
        cms = [
            self._export_cm(cm) for cm in self.section.modules if cm.uservisible
        ]
        return {"cms": cms, "hascms": bool(cms), "sectionnum": self.section.section}

    def _export_cm(self, cm: CourseModule) -> dict[str, typ.Any]:
        return {
            "id": cm.id,
            "name": cm.name,
            "modname": cm.modname,
            "url": f"{self.format.wwwroot}/mod/{cm.modname}/view.php?id={cm.id}",
            "ishidden": not cm.visible,
            "hascompletion": cm.completion_enabled,
            "completed": cm.completed,
        }


class CmSummaryOutput(SectionPart):
    """Activity counts and completion progress shown instead of the list."""

    def export_for_template(self, output: TemplateRenderer) -> TemplateContext:
        visible = [cm for cm in self.section.modules if cm.uservisible]
        counts = collections.Counter(cm.modname for cm in visible)
        tracked = [cm for cm in visible if cm.completion_enabled]
        total = len(tracked)
        complete = sum(1 for cm in tracked if cm.completed)
        mods = [
            {"modname": modname, "count": count}
            for modname, count in sorted(counts.items())
        ]
        data: TemplateContext = {
            "total": total,
            "complete": complete,
            "showcompletion": total > 0,
            "mods": mods,
            "hasmods": bool(mods),
        }
        if total:
            data["completiontext"] = self.format.strings.get_string(
                "sectioncompletion", a={"complete": complete, "total": total}
            )
        return data


class ControlMenuOutput(SectionPart):
    """Edit, visibility and delete actions for a section."""

    def export_for_template(self, output: TemplateRenderer) -> TemplateContext:
        menu = self.section_control_items()
        return {"menu": menu, "hasmenu": bool(menu), "id": self.section.id}

    def section_control_items(self) -> list[dict[str, str]]:
        """Return the menu entries the current user may use, in display order."""
        fmt = self.format
        section = self.section
        strings = fmt.strings
        course = fmt.get_course()
        baseurl = f"{fmt.wwwroot}/course"
        sectionreturn = fmt.get_sectionnum()
        returnparam = "" if sectionreturn is None else f"&sr={sectionreturn}"
        items: list[dict[str, str]] = []

        if fmt.has_capability(CAP_COURSE_UPDATE):
            items.append(
                {
                    "key": "edit",
                    "text": strings.get_string("edit"),
                    "url": f"{baseurl}/editsection.php?id={section.id}{returnparam}",
                }
            )
        if section.section != 0 and fmt.has_capability(CAP_SECTION_VISIBILITY):
            action, label = ("show", "showfromothers")
            if section.visible:
                action, label = ("hide", "hidefromothers")
            items.append(
                {
                    "key": f"visibility-{action}",
                    "text": strings.get_string(label),
                    "url": (
                        f"{baseurl}/view.php?id={course.id}"
                        f"&{action}={section.section}{returnparam}"
                    ),
                }
            )
        if section.section != 0 and fmt.has_capability(CAP_COURSE_UPDATE):
            items.append(
                {
                    "key": "delete",
                    "text": strings.get_string("delete"),
                    "url": (
                        f"{baseurl}/editsection.php?id={section.id}"
                        f"&delete=1{returnparam}"
                    ),
                }
            )
        return items


class AvailabilityOutput(SectionPart):
    """Access restriction notes for a section."""

    def export_for_template(self, output: TemplateRenderer) -> TemplateContext:
        info = self._availability_info()
        return {"info": info, "hasavailability": bool(info)}

    def has_availability(self, output: TemplateRenderer) -> bool:
        """Return whether there is any restriction note to display."""
        return bool(self._availability_info())

    def _availability_info(self) -> list[dict[str, typ.Any]]:
        section = self.section
        if section.availableinfo:
            return [{"text": section.availableinfo, "isrestricted": True}]
        if section.availability and self.format.has_capability(
            CAP_VIEW_HIDDEN_SECTIONS
        ):
            return [
                {"text": text, "isrestricted": False} for text in section.availability
            ]
        return []


class VisibilityOutput(SectionPart):
    """Hidden and stealth badges plus the visibility toggle affordance."""

    def export_for_template(self, output: TemplateRenderer) -> TemplateContext:
        fmt = self.format
        section = self.section
        isstealth = section.is_orphan()
        ishidden = isstealth or not section.visible
        badge = ""
        if isstealth:
            badge = fmt.strings.get_string(
                "orphanedactivitiesinsectionno", a=section.section
            )
        elif not section.visible:
            badge = fmt.strings.get_string("hiddenfromstudents")
        editvisibility = (
            not isstealth
            and section.section != 0
            and fmt.request.user_is_editing()
            and fmt.has_capability(CAP_SECTION_VISIBILITY)
        )
        return {
            "ishidden": ishidden,
            "isstealth": isstealth,
            "editvisibility": editvisibility,
            "badge": badge,
            "hasbadge": bool(badge),
        }


__all__ = [
    "AvailabilityOutput",
    "CmListOutput",
    "CmSummaryOutput",
    "ControlMenuOutput",
    "HeaderOutput",
    "SectionPart",
    "SummaryOutput",
    "VisibilityOutput",
]
