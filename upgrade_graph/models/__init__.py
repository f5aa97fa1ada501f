"""Domain model package exports."""

from .graph import (ConditionalEdge, ConditionalEdgeGroup, Edge, Graph, Node,
                    Risk)
from .release import Release, ReleasesByChannel, VersionReleases

__all__ = [
    "ConditionalEdge",
    "ConditionalEdgeGroup",
    "Edge",
    "Graph",
    "Node",
    "Release",
    "ReleasesByChannel",
    "Risk",
    "VersionReleases",
]
