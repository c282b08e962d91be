"""Render course sections into Jinja template contexts and static pages.

This package exposes the CLI entry points used by ``uv run coursepages`` to
render a configured course as a given user, dump the template context of a
section, and inspect the bundled short-number metadata.

Exports
-------
- ``app``: Cyclopts application entry for subcommands.
- ``main``: Convenience function that invokes the Cyclopts app.

Examples
--------
>>> from coursepages import main
>>> main()  # doctest: +SKIP
>>> from coursepages import app
>>> app(["shortnumbers", "--region", "DO"])  # doctest: +SKIP
"""

from __future__ import annotations

from .cli import app, main

__all__ = ["app", "main"]
