"""Semantic version parsing and ordering helpers built on ``semver``.

Release names keep their SemVer spelling, so ``4.16.0-rc.1`` stays
``4.16.0-rc.1`` and sorts below ``4.16.0``. Channel tokens carry only
``major.minor`` and parse with a zero patch.
"""

from __future__ import annotations

from typing import Iterable, List, Optional

from semver import Version

from upgrade_graph.errors import InvalidVersionError


def _clean(text: str) -> str:
    text = text.strip()
    if text[:1] in ("v", "V"):
        text = text[1:]
    return text


def parse_version(text: str) -> Version:
    """Parse ``text`` into a comparable :class:`semver.Version`.

    A leading ``v`` is accepted and missing minor or patch components
    default to zero.

    Raises
    ------
    InvalidVersionError
        If ``text`` is not a valid semantic version.
    """

    try:
        return Version.parse(_clean(text), optional_minor_and_patch=True)
    except ValueError as error:
        raise InvalidVersionError(f"invalid version {text!r}") from error


def normalize_version(text: str) -> str:
    """Return the normalized form of ``text``, or ``text`` when unparseable."""

    try:
        return str(parse_version(text))
    except InvalidVersionError:
        return text


def meets_minimum(version: Optional[Version], minimum: Version) -> bool:
    """Return ``True`` when ``version`` is present and ``>= minimum``."""

    return version is not None and version >= minimum


def sort_versions(versions: Iterable[str]) -> List[str]:
    """Return version strings sorted ascending by SemVer precedence."""

    return sorted(versions, key=parse_version)
