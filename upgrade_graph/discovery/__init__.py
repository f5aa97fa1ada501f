"""Channel traversal and upgrade edge resolution."""

from upgrade_graph.discovery.channels import (channel_group, channel_version,
                                              discover_channels,
                                              split_channel)
from upgrade_graph.discovery.engine import ReleaseDiscoverer, discover_releases

__all__ = [
    "ReleaseDiscoverer",
    "channel_group",
    "channel_version",
    "discover_channels",
    "discover_releases",
    "split_channel",
]
