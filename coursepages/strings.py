"""Localized string lookup backed by YAML language packs.

Language packs live in ``coursepages/lang/<lang>.yaml`` and map a component
name (``core``, ``format_topics`` ...) to identifier/text pairs. Texts may
reference a single argument as ``{$a}`` or fields of a mapping argument as
``{$a->name}``.

Examples
--------
>>> strings = StringManager()
>>> strings.get_string("sectionname", "format_topics", 3)
'Topic 3'
>>> str(get_accesshide("This topic"))
'<span class="accesshide">This topic</span>'
"""

from __future__ import annotations

import collections.abc as cabc
import re
from pathlib import Path

from markupsafe import Markup, escape
from ruamel.yaml import YAML

DEFAULT_LANG = "en"
_PLACEHOLDER_PATTERN = re.compile(r"\{\$a(?:->(\w+))?\}")


class MissingStringError(LookupError):
    """Raised when a string identifier is not defined for a component."""


class StringManager:
    """Look up and format strings from a YAML language pack."""

    def __init__(
        self, lang: str = DEFAULT_LANG, *, lang_dir: Path | None = None
    ) -> None:
        """Load the language pack for ``lang``.

        Parameters
        ----------
        lang : str, optional
            Language code; defaults to ``"en"``.
        lang_dir : Path, optional
            Directory holding ``<lang>.yaml`` files. Defaults to the packaged
            ``coursepages/lang`` directory.
        """
        self.lang = lang
        self.lang_dir = lang_dir or Path(__file__).parent / "lang"
        self._strings = self._load(self.lang_dir / f"{lang}.yaml")

    def get_string(
        self, identifier: str, component: str = "core", a: object = None
    ) -> str:
        """Return the text for ``identifier`` in ``component`` with ``a`` applied.

        Raises
        ------
        MissingStringError
            If the component or identifier is not present in the language pack.
        """
        try:
            template = self._strings[component][identifier]
        except KeyError as exc:
            msg = f"Missing string '{identifier}' in component '{component}'."
            raise MissingStringError(msg) from exc
        return _substitute(template, a)

    def string_exists(self, identifier: str, component: str = "core") -> bool:
        return identifier in self._strings.get(component, {})

    @staticmethod
    def _load(path: Path) -> dict[str, dict[str, str]]:
        if not path.exists():
            msg = f"Language pack '{path}' not found."
            raise FileNotFoundError(msg)
        loader = YAML(typ="safe")
        loader.version = (1, 2)
        with path.open("r", encoding="utf-8") as handle:
            loaded = loader.load(handle) or {}
        if not isinstance(loaded, dict):
            msg = "Language pack must be a mapping of components."
            raise TypeError(msg)
        return {
            str(component): {
                str(key): str(text) for key, text in (entries or {}).items()
            }
            for component, entries in loaded.items()
        }


def _substitute(template: str, a: object) -> str:
    """Replace ``{$a}`` and ``{$a->key}`` placeholders in ``template``."""
    if a is None:
        return template

    def _repl(match: re.Match[str]) -> str:
        key = match.group(1)
        if key is None:
            return str(a)
        if isinstance(a, cabc.Mapping):
            return str(a.get(key, match.group(0)))
        return str(getattr(a, key, match.group(0)))

    return _PLACEHOLDER_PATTERN.sub(_repl, template)


def get_accesshide(text: str, elem: str = "span", cssclass: str = "") -> Markup:
    """Return ``text`` wrapped in an element only visible to screen readers."""
    classes = " ".join(filter(None, ["accesshide", cssclass.strip()]))
    return Markup("<{elem} class=\"{classes}\">{text}</{elem}>").format(
        elem=Markup(elem), classes=classes, text=escape(text)
    )


__all__ = [
    "DEFAULT_LANG",
    "MissingStringError",
    "StringManager",
    "get_accesshide",
]