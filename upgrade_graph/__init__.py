"""Release discovery over channel-partitioned update graphs."""

from upgrade_graph.aggregation import aggregate_by_group
from upgrade_graph.clients.graph_client import GraphClient
from upgrade_graph.discovery.engine import ReleaseDiscoverer, discover_releases
from upgrade_graph.models.release import (Release, ReleasesByChannel,
                                          VersionReleases)

__version__ = "0.1.0"

__all__ = [
    "GraphClient",
    "Release",
    "ReleaseDiscoverer",
    "ReleasesByChannel",
    "VersionReleases",
    "aggregate_by_group",
    "discover_releases",
]
