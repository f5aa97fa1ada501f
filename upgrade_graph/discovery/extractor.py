"""Turn graph nodes into release records."""

from __future__ import annotations

from typing import Optional

from semver import Version

from upgrade_graph.models.graph import Node
from upgrade_graph.models.release import Release
from upgrade_graph.versions import meets_minimum


def create_release(
    node: Node,
    channel: str,
    arch: str,
    min_version: Version,
) -> Optional[Release]:
    """Return a release for ``node`` or ``None`` when it does not qualify.

    Nodes without a version, or older than ``min_version``, are dropped.
    """

    if not meets_minimum(node.version, min_version):
        return None
    return Release(
        version=str(node.version),
        channel=channel,
        arch=arch,
        payload=node.payload,
    )
