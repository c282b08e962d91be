"""Cyclopts CLI entrypoint for rendering course sections.

The ``coursepages`` console script loads a course configuration, binds it to
a user and a simulated request, and either writes the rendered course page,
prints the template context of one section as JSON, or prints the
short-number metadata of a region.

Examples
--------
Render the course page as ``alice`` in editing mode:

>>> from coursepages.cli import app
>>> app.run(
...     ["render", "--user", "alice", "--editing"]
... )  # doctest: +SKIP

Inspect the context of section 2 with it forcibly expanded:

>>> app.run(
...     ["context", "--user", "bob", "--section", "2", "--expand-section", "2"]
... )  # doctest: +SKIP
"""

from __future__ import annotations

import logging
import typing as typ
from pathlib import Path

import cyclopts
import msgspec.json
from cyclopts import App, Parameter
from markupsafe import Markup

from ._constants import EXPAND_SECTION_PARAM, SECTION_PARAM
from .access import PageRequest
from .config import load_site_config
from .course_page import CoursePageBuilder
from .courseformat import build_course_format
from .output import TemplateRenderer
from .phonemetadata import load_short_number_metadata

DEFAULT_CONFIG = Path("config/course.yaml")

app = App(name="coursepages", config=cyclopts.config.Env("INPUT_", command=False))  # type: ignore[unknown-argument]


def _format_path(path: Path) -> str:
    """Return a cwd-relative path when possible, otherwise the absolute path."""
    if path.is_absolute():
        try:
            return str(path.relative_to(Path.cwd()))
        except ValueError:  # pragma: no cover - fallback for different roots
            return str(path)
    return str(path)


def _configure_logging(*, verbose: bool, debug: bool) -> None:
    if debug:
        level = logging.DEBUG
    elif verbose:
        level = logging.INFO
    else:
        level = logging.WARNING
    logging.basicConfig(
        level=level, format="%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    )


def _build_request(
    *, section: int | None, expand_section: int | None, editing: bool
) -> PageRequest:
    params: dict[str, str] = {}
    if section is not None:
        params[SECTION_PARAM] = str(section)
    if expand_section is not None:
        params[EXPAND_SECTION_PARAM] = str(expand_section)
    return PageRequest(params=params, editing=editing)


def _to_builtins(value: object) -> object:
    """Convert a template context into JSON-encodable builtins."""
    match value:
        case Markup():
            return str.__str__(value)
        case dict():
            return {str(key): _to_builtins(item) for key, item in value.items()}
        case list() | tuple():
            return [_to_builtins(item) for item in value]
        case _:
            return value


@app.command(help="Render the course page as a user would see it.")
def render(
    *,
    user: typ.Annotated[str, Parameter(help="Username to render for")],
    config: typ.Annotated[
        Path, Parameter(help="Path to course config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    output: typ.Annotated[
        Path | None,
        Parameter(help="Override the output file", env_var="INPUT_OUTPUT"),
    ] = None,
    section: typ.Annotated[
        int | None, Parameter(help="Render only this section number")
    ] = None,
    expand_section: typ.Annotated[
        int | None, Parameter(help="Section number to force expanded")
    ] = None,
    editing: typ.Annotated[bool, Parameter(help="Render in editing mode")] = False,
    verbose: bool = False,
    debug: bool = False,
) -> None:
    """Render the course page for ``user`` and write it to disk.

    Parameters
    ----------
    user : str
        Username declared in the course configuration.
    config : Path, optional
        Path to the course YAML file (overridable via ``INPUT_CONFIG``).
    output : Path or None, optional
        Output file; defaults to ``site.output`` from the configuration.
    section : int or None, optional
        Render the single section page of this section number.
    expand_section : int or None, optional
        Section number passed as the ``expandsection`` request parameter.
    editing : bool, optional
        Render the page in editing mode.
    verbose : bool, optional
        Log at INFO level.
    debug : bool, optional
        Log at DEBUG level.

    Raises
    ------
    KeyError
        If ``user`` is not declared in the configuration.
    """
    _configure_logging(verbose=verbose, debug=debug)
    site = load_site_config(config)
    request = _build_request(
        section=section, expand_section=expand_section, editing=editing
    )
    fmt = build_course_format(site, user, request)
    written = CoursePageBuilder(fmt).run(output or site.output)
    print(f"wrote {_format_path(written)}")


@app.command(help="Print the template context of one section as JSON.")
def context(
    *,
    user: typ.Annotated[str, Parameter(help="Username to render for")],
    section: typ.Annotated[int, Parameter(help="Section number to export")],
    config: typ.Annotated[
        Path, Parameter(help="Path to course config", env_var="INPUT_CONFIG")
    ] = DEFAULT_CONFIG,
    expand_section: typ.Annotated[
        int | None, Parameter(help="Section number to force expanded")
    ] = None,
    editing: typ.Annotated[bool, Parameter(help="Export in editing mode")] = False,
    verbose: bool = False,
    debug: bool = False,
) -> None:
    """Print the context ``SectionOutput`` exports for one section."""
    _configure_logging(verbose=verbose, debug=debug)
    site = load_site_config(config)
    request = _build_request(
        section=None, expand_section=expand_section, editing=editing
    )
    fmt = build_course_format(site, user, request)
    target = fmt.get_section(section)
    if target is None:
        target = site.get_section(section)
    section_output = fmt.get_output_class("content/section")(fmt, target)
    renderer = TemplateRenderer(strings=fmt.strings, wwwroot=fmt.wwwroot)
    data = section_output.export_for_template(renderer)
    print(msgspec.json.encode(_to_builtins(data)).decode("utf-8"))


@app.command(help="Print the short-number metadata of a region as JSON.")
def shortnumbers(
    *,
    region: typ.Annotated[str, Parameter(help="ISO 3166 region code")] = "DO",
) -> None:
    """Print the generated short-number table of ``region``."""
    metadata = load_short_number_metadata(region)
    print(msgspec.json.encode(metadata.to_dict()).decode("utf-8"))


def main() -> None:
    """Invoke the Cyclopts application behind the ``coursepages`` command.

    Examples
    --------
    >>> main()  # doctest: +SKIP
    """
    app()


if __name__ == "__main__":  # pragma: no cover - manual invocation helper
    main()
