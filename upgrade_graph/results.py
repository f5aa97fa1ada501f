from __future__ import annotations

"""Utilities for transforming discovered releases into CLI output records."""

import json
from typing import Any, Dict, List, Mapping, Sequence

from upgrade_graph.models.release import Release, ReleasesByChannel
from upgrade_graph.versions import parse_version, sort_versions

OUTPUT_FIELD_ORDER: Sequence[str] = (
    "group",
    "version",
    "channel",
    "arch",
    "payload",
    "available_upgrades",
)


class ResultsFormatter:
    """Format releases into NDJSON-ready rows.

    Groups (or channels) are emitted in name order and releases ascending by
    version, each with its upgrade targets in version order.
    """

    def format_releases(
        self,
        releases_by_group: ReleasesByChannel,
    ) -> List[Dict[str, Any]]:
        rows: List[Dict[str, Any]] = []
        for group in sorted(releases_by_group):
            releases = releases_by_group[group]
            for version in sorted(releases, key=parse_version):
                rows.append(self._format_release(group, releases[version]))
        return rows

    def _format_release(self, group: str, release: Release) -> Dict[str, Any]:
        values: Mapping[str, Any] = {
            "group": group,
            "version": release.version,
            "channel": release.channel,
            "arch": release.arch,
            "payload": release.payload,
            "available_upgrades": sort_versions(release.available_upgrades),
        }
        return {key: values[key] for key in OUTPUT_FIELD_ORDER}


def to_ndjson_line(record: Mapping[str, Any]) -> str:
    """Serialize a record as one compact JSON line, keeping key order."""

    return json.dumps(record, separators=(",", ":"))
