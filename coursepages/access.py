"""Request-scoped access state: users, course contexts and capability checks.

The course formats never look up permissions themselves; they ask a
:class:`CapabilityChecker` whether a user holds a named capability in a
:class:`CourseContext`. The checker here resolves capabilities from the role
table declared in the course configuration.

Examples
--------
>>> checker = CapabilityChecker(
...     roles={"teacher": frozenset({"moodle/course:update"})},
...     assignments={3: ["teacher"]},
... )
>>> user = User(id=3, username="alice", fullname="Alice")
>>> checker.has_capability("moodle/course:update", CourseContext.instance(2), user)
True
"""

from __future__ import annotations

import collections.abc as cabc
import dataclasses as dc
import re
import typing as typ

if typ.TYPE_CHECKING:
    from .config import SiteConfig

_NUMERIC_STRING = re.compile(
    r"[ \t\n\r\v\f]*[+-]?(?:[0-9]+(?:\.[0-9]*)?|\.[0-9]+)(?:[eE][+-]?[0-9]+)?"
    r"[ \t\n\r\v\f]*"
)


def parse_section_number(value: str | int | None) -> int | None:
    """Return the section number a request parameter denotes, or ``None``.

    Numeric strings compare by value, so ``"2"``, ``" 2 "``, ``"2.0"`` and
    ``"+2"`` all denote section 2. Values that are not numeric strings, or
    that are not whole numbers, denote no section.

    >>> parse_section_number("2.0"), parse_section_number("4_0")
    (2, None)
    """
    if value is None:
        return None
    if isinstance(value, int):
        return value
    if not _NUMERIC_STRING.fullmatch(value):
        return None
    number = float(value)
    if not number.is_integer():
        return None
    return int(number)


@dc.dataclass(slots=True, frozen=True)
class CourseContext:
    """Permission context of a single course."""

    course_id: int

    @classmethod
    def instance(cls, course_id: int) -> CourseContext:
        """Return the context for ``course_id``."""
        return cls(course_id=course_id)


@dc.dataclass(slots=True, frozen=True)
class User:
    """The user a page is rendered for."""

    id: int
    username: str
    fullname: str = ""


@dc.dataclass(slots=True)
class PageRequest:
    """The incoming page request: URL, query parameters and editing mode."""

    url: str = "/course/view.php"
    params: dict[str, str] = dc.field(default_factory=dict)
    editing: bool = False

    def get_param(self, name: str) -> str | None:
        """Return the raw query parameter ``name`` or ``None`` when absent."""
        return self.params.get(name)

    def user_is_editing(self) -> bool:
        """Return ``True`` when the page is in editing mode."""
        return self.editing


class CapabilityChecker:
    """Resolve capabilities from role definitions and role assignments."""

    def __init__(
        self,
        roles: cabc.Mapping[str, frozenset[str]],
        assignments: cabc.Mapping[int, cabc.Sequence[str]],
    ) -> None:
        self._roles = dict(roles)
        self._assignments = {
            user_id: tuple(role_names) for user_id, role_names in assignments.items()
        }

    @classmethod
    def from_site_config(cls, site: SiteConfig) -> CapabilityChecker:
        """Build a checker from the roles and users of a loaded site config."""
        return cls(
            roles=site.roles,
            assignments={user.id: user.roles for user in site.users.values()},
        )

    def has_capability(
        self,
        capability: str,
        context: CourseContext,  # noqa: ARG002
        user: User,
    ) -> bool:
        """Return ``True`` when ``user`` holds ``capability`` in ``context``.

        Role assignments are site-wide, so every course context resolves the
        same way. Unknown users hold no capabilities.
        """
        return any(
            capability in self._roles.get(role, frozenset())
            for role in self._assignments.get(user.id, ())
        )


__all__ = [
    "CapabilityChecker",
    "CourseContext",
    "PageRequest",
    "User",
    "parse_section_number",
]
