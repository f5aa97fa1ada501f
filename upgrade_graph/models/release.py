"""Release records produced by discovery."""

from __future__ import annotations

from dataclasses import dataclass, replace
from typing import Dict, Iterable, Tuple


@dataclass(frozen=True)
class Release:
    """A discovered release and the versions it can upgrade to.

    ``available_upgrades`` keeps insertion order and never holds duplicates.
    Instances are immutable; use :meth:`with_upgrades` to derive an updated
    copy and store it back into its table.
    """

    version: str
    channel: str
    arch: str
    payload: str
    available_upgrades: Tuple[str, ...] = ()

    def with_upgrades(self, targets: Iterable[str]) -> "Release":
        """Return a copy with ``targets`` appended, skipping known entries."""

        merged = list(self.available_upgrades)
        for target in targets:
            if target not in merged:
                merged.append(target)
        if len(merged) == len(self.available_upgrades):
            return self
        return replace(self, available_upgrades=tuple(merged))


VersionReleases = Dict[str, Release]
"""Maps a version string to its release within one channel or group."""

ReleasesByChannel = Dict[str, VersionReleases]
"""Maps a channel (or channel group) name to its releases."""
