"""Unit tests for loading course configuration YAML."""

from __future__ import annotations

import datetime as dt
from pathlib import Path
from textwrap import dedent

import pytest

from coursepages.access import PageRequest
from coursepages.config import DisplayMode, SiteConfigError, load_site_config
from coursepages.courseformat import WeeksFormat, build_course_format

REPO_CONFIG = Path(__file__).resolve().parents[1] / "config" / "course.yaml"


def _write(tmp_path: Path, text: str) -> Path:
    path = tmp_path / "course.yaml"
    path.write_text(dedent(text).strip() + "\n", encoding="utf-8")
    return path


def test_loads_course_sections_and_users(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
        site:
          id: 1
          wwwroot: https://school.example.invalid/
          output: out/page.html
        course:
          id: 7
          fullname: Weekly Course
          format: Weeks
          coursedisplay: multipage
          numsections: 1
          startdate: 2026-01-05
        roles:
          student: []
        users:
          carol:
            id: 9
            roles: [student]
            preferences:
              31:
                contentcollapsed: true
        sections:
          - id: 31
            section: 1
            modules:
              - {id: 1, name: Reading, modname: page, visible: false}
          - id: 30
            section: 0
          - id: 32
            section: 2
        """,
    )
    site = load_site_config(path)
    assert site.course.format == "weeks"
    assert site.course.coursedisplay is DisplayMode.MULTIPAGE
    assert site.course.startdate == dt.date(2026, 1, 5)
    assert [section.section for section in site.sections] == [0, 1, 2]
    assert site.get_section(2).is_orphan() is True, (
        "sections beyond numsections should be orphaned"
    )
    assert site.get_section(1).is_orphan() is False
    assert site.get_section(1).modules[0].uservisible is False
    carol = site.get_user("carol")
    assert carol.fullname == "carol"
    assert carol.section_preferences[31].contentcollapsed is True
    assert site.wwwroot == "https://school.example.invalid"
    assert site.output == Path("out/page.html")


def test_explicit_orphan_flag_wins(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
        course: {id: 2, numsections: 5}
        sections:
          - {id: 1, section: 0}
          - {id: 2, section: 1, orphan: true}
        """,
    )
    site = load_site_config(path)
    assert site.get_section(1).is_orphan() is True
    assert site.course.coursedisplay is DisplayMode.SINGLEPAGE


def test_missing_file(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        load_site_config(tmp_path / "missing.yaml")


def test_top_level_must_be_mapping(tmp_path: Path) -> None:
    path = _write(tmp_path, "- just\n- a list\n")
    with pytest.raises(TypeError):
        load_site_config(path)


@pytest.mark.parametrize(
    ("text", "message"),
    [
        ("sections: [{id: 1, section: 0}]", "requires a 'course' block"),
        ("course: {id: 2}", "No sections defined"),
        (
            "course: {id: 2}\nsections: [{id: 1, section: 0}, {id: 2, section: 0}]",
            "defined more than once",
        ),
        (
            "course: {id: 2, coursedisplay: sideways}\nsections: [{id: 1, section: 0}]",
            "Invalid course display mode",
        ),
        (
            "course: {id: 2}\nsections: [{id: 1, section: 0}]\n"
            "users: {dave: {id: 3, roles: [admin]}}",
            "undefined roles: admin",
        ),
    ],
)
def test_invalid_configuration(tmp_path: Path, text: str, message: str) -> None:
    path = _write(tmp_path, text)
    with pytest.raises(SiteConfigError, match=message):
        load_site_config(path)


def test_unknown_user_lists_known_users() -> None:
    site = load_site_config(REPO_CONFIG)
    with pytest.raises(KeyError, match="Known users: alice, bob"):
        site.get_user("mallory")


def test_repository_config_builds_formats() -> None:
    """The bundled configuration binds to both declared users."""
    site = load_site_config(REPO_CONFIG)
    teacher = build_course_format(site, "alice", PageRequest(editing=True))
    student = build_course_format(site, "bob")
    hidden_for_teacher = teacher.get_section(3)
    hidden_for_student = student.get_section(3)
    assert hidden_for_teacher is not None
    assert hidden_for_student is not None
    assert hidden_for_teacher.uservisible is True, (
        "users who can view hidden sections should see their contents"
    )
    assert hidden_for_student.uservisible is False
    assert site.get_section(3).uservisible is False, "site config must be unchanged"
    assert teacher.get_sections_preferences() == {}
    assert student.get_sections_preferences()[12].contentcollapsed is True
    assert site.get_section(4).is_orphan() is True


def test_weeks_format_from_config(tmp_path: Path) -> None:
    path = _write(
        tmp_path,
        """
        course: {id: 2, format: weeks, startdate: 2026-09-07}
        users: {erin: {id: 1}}
        sections: [{id: 1, section: 0}, {id: 2, section: 1}]
        """,
    )
    fmt = build_course_format(
        load_site_config(path), "erin", today=dt.date(2026, 9, 8)
    )
    assert isinstance(fmt, WeeksFormat)
    section = fmt.get_section(1)
    assert section is not None
    assert fmt.is_section_current(section) is True
