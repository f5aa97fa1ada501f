"""Resolve graph edges into per-release upgrade targets.

Both resolvers update a :data:`VersionReleases` table in place by replacing
release values. An edge only takes effect when its source release is already
in the table, which means it passed the minimum version filter when it was
created.
"""

from __future__ import annotations

from typing import AbstractSet, Iterable

from upgrade_graph.errors import GraphStructureError
from upgrade_graph.models.graph import ConditionalEdgeGroup, Graph
from upgrade_graph.models.release import VersionReleases
from upgrade_graph.versions import normalize_version


def _add_upgrade(releases: VersionReleases, source: str, target: str) -> None:
    current = releases.get(source)
    if current is not None:
        releases[source] = current.with_upgrades([target])


def apply_edges(graph: Graph, releases: VersionReleases) -> None:
    """Record every unconditional edge whose source release is known.

    Raises
    ------
    GraphStructureError
        When an edge has fewer than two indices or points outside the node
        list. Nothing is skipped silently.
    """

    node_count = len(graph.nodes)
    for index, edge in enumerate(graph.edges):
        if len(edge) < 2:
            raise GraphStructureError(
                f"invalid edge format: expected 2 ints, got: {list(edge)}"
            )
        source_index, target_index = edge[0], edge[1]
        if not (0 <= source_index < node_count) or not (
            0 <= target_index < node_count
        ):
            raise GraphStructureError(
                f"invalid edge indices: {list(edge)} at index: {index}"
            )

        source = graph.nodes[source_index].version_string
        target = graph.nodes[target_index].version_string
        if source is None or target is None:
            continue
        _add_upgrade(releases, source, target)


def risks_accepted(
    group: ConditionalEdgeGroup,
    allowed: AbstractSet[str],
) -> bool:
    """Return ``True`` when every risk of ``group`` is in ``allowed``."""

    return all(name in allowed for name in group.risk_names)


def apply_conditional_edges(
    groups: Iterable[ConditionalEdgeGroup],
    allowed_risks: Iterable[str],
    releases: VersionReleases,
) -> None:
    """Record conditional edges of every group whose risks are all accepted."""

    allowed = frozenset(allowed_risks)
    for group in groups:
        if not risks_accepted(group, allowed):
            continue
        for edge in group.edges:
            _add_upgrade(
                releases,
                normalize_version(edge.from_version),
                normalize_version(edge.to_version),
            )
