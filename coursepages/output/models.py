"""Shared types used by the section output classes."""

from __future__ import annotations

import typing as typ

if typ.TYPE_CHECKING:
    from .renderer import TemplateRenderer

TemplateContext = dict[str, typ.Any]
"""Template-safe mapping: primitives, ``Markup``, and lists/dicts of those."""


class Templatable(typ.Protocol):
    """An object that exports the context for a named Jinja template."""

    template_name: str

    def export_for_template(self, output: TemplateRenderer) -> TemplateContext: ...


__all__ = ["Templatable", "TemplateContext"]
