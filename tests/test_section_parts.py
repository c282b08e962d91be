"""Unit tests for the default section partial output classes."""

from __future__ import annotations

import collections.abc as cabc
import typing as typ

from coursepages._constants import (
    CAP_COURSE_UPDATE,
    CAP_SECTION_VISIBILITY,
    CAP_SET_CURRENT_SECTION,
    CAP_VIEW_HIDDEN_SECTIONS,
)
from coursepages.config import DisplayMode, Section
from coursepages.courseformat import TopicsControlMenuOutput, WeeksFormat
from coursepages.output import (
    AvailabilityOutput,
    CmListOutput,
    CmSummaryOutput,
    ControlMenuOutput,
    HeaderOutput,
    SummaryOutput,
    VisibilityOutput,
)

if typ.TYPE_CHECKING:
    from coursepages.courseformat import CourseFormat
    from coursepages.output import TemplateRenderer

FormatFactory = cabc.Callable[..., "CourseFormat"]


def _section(fmt: CourseFormat, num: int) -> Section:
    section = fmt.get_section(num)
    assert section is not None, f"expected section {num} in the fixture course"
    return section


def test_header_links_sections_on_multipage_courses(
    make_format: FormatFactory, renderer: TemplateRenderer
) -> None:
    fmt = make_format(coursedisplay=DisplayMode.MULTIPAGE)
    data = HeaderOutput(fmt, _section(fmt, 2)).export_for_template(renderer)
    assert data["title"] == "Files"
    assert data["headerdisplaymultipage"] is True
    assert data["url"] == "https://lms.example.invalid/course/view.php?id=2&section=2"
    assert data["headinglevel"] == 3


def test_header_on_single_page_uses_anchor(
    make_format: FormatFactory, renderer: TemplateRenderer
) -> None:
    fmt = make_format()
    data = HeaderOutput(fmt, _section(fmt, 0)).export_for_template(renderer)
    assert data["name"] == "General"
    assert data["headerdisplaymultipage"] is False
    assert data["url"].endswith("#section-0")


def test_summary_renders_markdown(
    make_format: FormatFactory, renderer: TemplateRenderer
) -> None:
    fmt = make_format()
    data = SummaryOutput(fmt, _section(fmt, 0)).export_for_template(renderer)
    assert data["hassummary"] is True
    assert "<strong>course</strong>" in data["summarytext"], (
        f"expected markdown emphasis in summary, got {data['summarytext']!r}"
    )


def test_empty_summary(make_format: FormatFactory, renderer: TemplateRenderer) -> None:
    fmt = make_format()
    data = SummaryOutput(fmt, _section(fmt, 2)).export_for_template(renderer)
    assert data == {"summarytext": "", "hassummary": False}


def test_cmlist_skips_activities_the_user_cannot_see(
    make_format: FormatFactory, renderer: TemplateRenderer
) -> None:
    fmt = make_format()
    section = _section(fmt, 1)
    section.modules[1].uservisible = False
    data = CmListOutput(fmt, section).export_for_template(renderer)
    assert [cm["id"] for cm in data["cms"]] == [101, 103]
    assert data["cms"][0]["url"] == (
        "https://lms.example.invalid/mod/page/view.php?id=101"
    )
    assert data["cms"][0]["completed"] is True


def test_cmsummary_counts_and_completion(
    make_format: FormatFactory, renderer: TemplateRenderer
) -> None:
    fmt = make_format()
    data = CmSummaryOutput(fmt, _section(fmt, 1)).export_for_template(renderer)
    assert data["mods"] == [
        {"modname": "page", "count": 2},
        {"modname": "quiz", "count": 1},
    ]
    assert data["total"] == 2
    assert data["complete"] == 1
    assert data["showcompletion"] is True
    assert data["completiontext"] == "1 of 2 complete"


def test_cmsummary_without_tracked_activities(
    make_format: FormatFactory, renderer: TemplateRenderer
) -> None:
    fmt = make_format()
    data = CmSummaryOutput(fmt, _section(fmt, 2)).export_for_template(renderer)
    assert data["showcompletion"] is False
    assert "completiontext" not in data


def test_control_menu_respects_capabilities(
    make_format: FormatFactory, renderer: TemplateRenderer
) -> None:
    fmt = make_format(editing=True, capabilities=[CAP_SECTION_VISIBILITY])
    data = ControlMenuOutput(fmt, _section(fmt, 1)).export_for_template(renderer)
    assert [item["key"] for item in data["menu"]] == ["visibility-hide"]
    assert data["menu"][0]["text"] == "Hide"


def test_control_menu_full_for_course_editors(
    make_format: FormatFactory, renderer: TemplateRenderer
) -> None:
    fmt = make_format(
        editing=True, capabilities=[CAP_COURSE_UPDATE, CAP_SECTION_VISIBILITY]
    )
    hidden = _section(fmt, 3)
    data = ControlMenuOutput(fmt, hidden).export_for_template(renderer)
    assert [item["key"] for item in data["menu"]] == [
        "edit",
        "visibility-show",
        "delete",
    ]
    assert data["menu"][1]["url"].endswith("view.php?id=2&show=3")


def test_control_menu_never_deletes_section_zero(
    make_format: FormatFactory, renderer: TemplateRenderer
) -> None:
    fmt = make_format(
        editing=True, capabilities=[CAP_COURSE_UPDATE, CAP_SECTION_VISIBILITY]
    )
    data = ControlMenuOutput(fmt, _section(fmt, 0)).export_for_template(renderer)
    assert [item["key"] for item in data["menu"]] == ["edit"]


def test_topics_control_menu_toggles_highlight(
    make_format: FormatFactory, renderer: TemplateRenderer
) -> None:
    fmt = make_format(
        marker=2,
        editing=True,
        capabilities=[CAP_COURSE_UPDATE, CAP_SET_CURRENT_SECTION],
    )
    assert fmt.get_output_class("content/section/controlmenu") is (
        TopicsControlMenuOutput
    )
    current = TopicsControlMenuOutput(fmt, _section(fmt, 2)).export_for_template(
        renderer
    )
    other = TopicsControlMenuOutput(fmt, _section(fmt, 1)).export_for_template(
        renderer
    )
    assert [item["key"] for item in current["menu"]][:2] == ["edit", "removemarker"]
    assert current["menu"][1]["text"] == "Remove highlight"
    assert other["menu"][1]["key"] == "setmarker"
    assert other["menu"][1]["url"].endswith("&marker=1")


def test_weeks_format_uses_default_control_menu(make_format: FormatFactory) -> None:
    fmt = make_format(format_class=WeeksFormat)
    assert fmt.get_output_class("content/section/controlmenu") is ControlMenuOutput


def test_availability_hidden_from_students_when_available(
    make_format: FormatFactory, renderer: TemplateRenderer
) -> None:
    restricted = Section(id=60, section=1, availability=["Complete the quiz"])
    student = make_format(sections=[restricted])
    teacher = make_format(
        sections=[restricted], capabilities=[CAP_VIEW_HIDDEN_SECTIONS]
    )
    student_view = AvailabilityOutput(student, restricted)
    teacher_view = AvailabilityOutput(teacher, restricted)
    assert student_view.has_availability(renderer) is False
    assert teacher_view.has_availability(renderer) is True
    assert teacher_view.export_for_template(renderer)["info"] == [
        {"text": "Complete the quiz", "isrestricted": False}
    ]


def test_visibility_badges(
    make_format: FormatFactory, renderer: TemplateRenderer
) -> None:
    fmt = make_format(editing=True, capabilities=[CAP_SECTION_VISIBILITY])
    hidden = VisibilityOutput(fmt, _section(fmt, 3)).export_for_template(renderer)
    shown = VisibilityOutput(fmt, _section(fmt, 1)).export_for_template(renderer)
    stealth = VisibilityOutput(
        fmt, Section(id=70, section=9, orphan=True)
    ).export_for_template(renderer)
    assert hidden["badge"] == "Hidden from students"
    assert hidden["editvisibility"] is True
    assert shown["hasbadge"] is False
    assert shown["ishidden"] is False
    assert stealth["badge"] == "Orphaned activities (section 9)"
    assert stealth["editvisibility"] is False
