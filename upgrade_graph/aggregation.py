"""Merge per-channel releases into channel-group views."""

from __future__ import annotations

import logging
from dataclasses import replace

from upgrade_graph.discovery.channels import channel_group
from upgrade_graph.errors import AggregationError, InvalidVersionError
from upgrade_graph.models.release import (Release, ReleasesByChannel,
                                          VersionReleases)
from upgrade_graph.versions import parse_version

logger = logging.getLogger(__name__)


def aggregate_by_group(
    releases_by_channel: ReleasesByChannel,
) -> ReleasesByChannel:
    """Group channel tables by prefix and merge their releases.

    ``stable-4.16`` and ``stable-4.17`` both land in ``stable``. When a
    version appears in several channels of a group the first release seen
    is kept and the upgrade targets of all of them are unioned. Every
    merged upgrade list is then sorted ascending by version.

    The minimum version is not applied again: only already discovered
    releases are merged.

    Raises
    ------
    AggregationError
        If an upgrade target is not a valid version.
    """

    aggregated: ReleasesByChannel = {}
    for channel, releases in releases_by_channel.items():
        group = aggregated.setdefault(channel_group(channel), {})
        for version, release in releases.items():
            existing = group.get(version)
            if existing is None:
                group[version] = release
            else:
                group[version] = existing.with_upgrades(
                    release.available_upgrades
                )

    for name, group in aggregated.items():
        aggregated[name] = _sorted_group(group)
        logger.debug(
            "Group %s holds %d releases", name, len(aggregated[name])
        )
    return aggregated


def _sorted_group(group: VersionReleases) -> VersionReleases:
    return {version: _sort_upgrades(release) for version, release in group.items()}


def _sort_upgrades(release: Release) -> Release:
    keyed = []
    for index, target in enumerate(release.available_upgrades):
        try:
            keyed.append((parse_version(target), target))
        except InvalidVersionError as error:
            raise AggregationError(
                f"{release.version}: invalid version in "
                f"available_upgrades[{index}]={target!r}"
            ) from error
    keyed.sort(key=lambda item: item[0])
    return replace(
        release, available_upgrades=tuple(target for _, target in keyed)
    )
