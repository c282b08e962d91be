"""Unit tests for the YAML-backed string manager."""

from __future__ import annotations

from pathlib import Path

import pytest

from coursepages.strings import MissingStringError, StringManager, get_accesshide


def test_plain_and_substituted_strings(strings: StringManager) -> None:
    assert strings.get_string("edit") == "Edit"
    assert strings.get_string("sectionname", "format_topics", 5) == "Topic 5"
    assert (
        strings.get_string("sectioncompletion", a={"complete": 3, "total": 4})
        == "3 of 4 complete"
    )


def test_missing_identifier_raises(strings: StringManager) -> None:
    with pytest.raises(MissingStringError, match="format_topics"):
        strings.get_string("nosuchstring", "format_topics")
    assert strings.string_exists("edit") is True
    assert strings.string_exists("edit", "format_weeks") is False


def test_custom_language_pack(tmp_path: Path) -> None:
    (tmp_path / "fr.yaml").write_text(
        "core:\n  edit: Modifier\n  greeting: Bonjour {$a->name}\n", encoding="utf-8"
    )
    manager = StringManager("fr", lang_dir=tmp_path)
    assert manager.get_string("edit") == "Modifier"
    assert manager.get_string("greeting", a={"name": "Zoé"}) == "Bonjour Zoé"


def test_missing_language_pack(tmp_path: Path) -> None:
    with pytest.raises(FileNotFoundError):
        StringManager("de", lang_dir=tmp_path)


def test_accesshide_escapes_text() -> None:
    assert str(get_accesshide("<b>now</b>")) == (
        '<span class="accesshide">&lt;b&gt;now&lt;/b&gt;</span>'
    )
    assert str(get_accesshide("x", elem="div", cssclass="badge")) == (
        '<div class="accesshide badge">x</div>'
    )
