"""Breadth-first release discovery across update graph channels.

Traversal starts from one or more seed channels. Every fetched graph
contributes the releases that meet the minimum version, and every node can
point at further channels of the same group prefix which are queued in FIFO
order. Each channel is fetched at most once. Any fetch, parse or structural
failure aborts the whole run and no partial result is returned.
"""

from __future__ import annotations

import logging
from collections import deque
from typing import Deque, Iterable, List, Optional, Sequence, Set

from semver import Version

from upgrade_graph.clients.graph_client import GraphSource
from upgrade_graph.discovery.channels import (channel_threshold,
                                              discover_channels)
from upgrade_graph.discovery.edges import (apply_conditional_edges,
                                           apply_edges)
from upgrade_graph.discovery.extractor import create_release
from upgrade_graph.errors import (DiscoveryError, GraphFetchError,
                                  GraphParseError, GraphStructureError,
                                  InputError)
from upgrade_graph.models.graph import Graph
from upgrade_graph.models.release import ReleasesByChannel


class ReleaseDiscoverer:
    """Walk channel graphs served by a :class:`GraphSource`."""

    def __init__(
        self,
        graph_source: GraphSource,
        *,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._source = graph_source
        self._logger = logger or logging.getLogger(__name__)

    def discover(
        self,
        start_channel: str,
        arch: str,
        allowed_risks: Iterable[str] = (),
    ) -> ReleasesByChannel:
        """Discover releases reachable from ``start_channel``.

        The minimum version and the discovery prefix both come from the
        start channel name, e.g. ``stable-4.16`` only follows ``stable-``
        channels and keeps releases ``>= 4.16``.
        """

        return self.discover_from_channels([start_channel], arch, allowed_risks)

    def discover_from_channels(
        self,
        start_channels: Sequence[str],
        arch: str,
        allowed_risks: Iterable[str] = (),
    ) -> ReleasesByChannel:
        """Discover releases from several seeds in a single traversal.

        The lowest seed version is the global minimum and the prefixes of
        all seeds are followed.
        """

        if not start_channels:
            raise InputError("at least one start channel is required")

        thresholds = [channel_threshold(channel) for channel in start_channels]
        prefixes: List[str] = []
        for prefix, _ in thresholds:
            if prefix not in prefixes:
                prefixes.append(prefix)

        return self._traverse(
            start_channels,
            arch,
            frozenset(allowed_risks),
            prefixes=prefixes,
            min_version=min(version for _, version in thresholds),
        )

    def fetch_channels(
        self,
        channels: Sequence[str],
        arch: str,
        allowed_risks: Iterable[str] = (),
    ) -> ReleasesByChannel:
        """Fetch each of ``channels`` once without following other channels.

        Every channel is filtered against its own version token.
        """

        allowed = frozenset(allowed_risks)
        thresholds = [channel_threshold(channel) for channel in channels]

        results: ReleasesByChannel = {}
        for channel, (_, min_version) in zip(channels, thresholds):
            if channel in results:
                continue
            results.update(
                self._traverse(
                    [channel],
                    arch,
                    allowed,
                    prefixes=(),
                    min_version=min_version,
                )
            )
        return results

    def _traverse(
        self,
        seeds: Iterable[str],
        arch: str,
        allowed_risks: frozenset,
        *,
        prefixes: Sequence[str],
        min_version: Version,
    ) -> ReleasesByChannel:
        queue: Deque[str] = deque()
        queued: Set[str] = set()
        processed: Set[str] = set()
        for seed in seeds:
            if seed not in queued:
                queue.append(seed)
                queued.add(seed)

        results: ReleasesByChannel = {}
        while queue:
            channel = queue.popleft()
            if channel in processed:
                continue
            processed.add(channel)

            graph = self._fetch(channel, arch)
            releases = results.setdefault(channel, {})

            for node in graph.nodes:
                release = create_release(node, channel, arch, min_version)
                if release is not None:
                    releases[release.version] = release
                for found in discover_channels(node, prefixes, min_version):
                    if found in queued or found in processed:
                        continue
                    self._logger.debug(
                        "Queueing channel %s discovered from %s",
                        found,
                        channel,
                    )
                    queue.append(found)
                    queued.add(found)

            try:
                apply_edges(graph, releases)
            except GraphStructureError as error:
                raise GraphStructureError(
                    f"{arch} graph for channel {channel}: {error}"
                ) from error
            apply_conditional_edges(
                graph.conditional_edges, allowed_risks, releases
            )
            self._logger.info(
                "Channel %s (%s): %d qualifying releases",
                channel,
                arch,
                len(releases),
            )

        return results

    def _fetch(self, channel: str, arch: str) -> Graph:
        self._logger.info("Fetching %s graph for channel %s", arch, channel)
        try:
            return self._source.fetch_graph(channel, arch)
        except (GraphFetchError, GraphParseError) as error:
            self._logger.error(
                "Aborting discovery: %s graph for channel %s failed: %s",
                arch,
                channel,
                error,
            )
            raise DiscoveryError(arch, channel, error) from error


def discover_releases(
    graph_source: GraphSource,
    start_channel: str,
    arch: str,
    allowed_risks: Iterable[str] = (),
) -> ReleasesByChannel:
    """Discover releases reachable from ``start_channel``.

    Shortcut for ``ReleaseDiscoverer(graph_source).discover(...)``.
    """

    return ReleaseDiscoverer(graph_source).discover(
        start_channel, arch, allowed_risks
    )
