"""
Upgrade Graph Repository
Introductory remarks: This module is part of the upgrade-graph codebase.

Domain models for a fetched channel graph and helpers to build them from JSON.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, Dict, Mapping, Optional, Sequence, Tuple

from semver import Version

from upgrade_graph.errors import GraphParseError, InvalidVersionError
from upgrade_graph.versions import parse_version

Edge = Tuple[int, ...]


@dataclass(frozen=True)
class Node:
    """One release entry of a graph."""

    version: Optional[Version]
    payload: str = ""
    metadata: Mapping[str, str] = field(default_factory=dict)

    @property
    def version_string(self) -> Optional[str]:
        """Normalized version string, or ``None`` for version-less nodes."""
        if self.version is None:
            return None
        return str(self.version)


@dataclass(frozen=True)
class Risk:
    """Named risk attached to a conditional edge group."""

    name: str


@dataclass(frozen=True)
class ConditionalEdge:
    """Upgrade path identified by version strings rather than node indices."""

    from_version: str
    to_version: str


@dataclass(frozen=True)
class ConditionalEdgeGroup:
    """Edges that are only usable when every listed risk is accepted."""

    edges: Tuple[ConditionalEdge, ...] = ()
    risks: Tuple[Risk, ...] = ()

    @property
    def risk_names(self) -> Tuple[str, ...]:
        return tuple(risk.name for risk in self.risks)


@dataclass(frozen=True)
class Graph:
    """Nodes and edges served for one (channel, architecture) pair."""

    nodes: Tuple[Node, ...] = ()
    edges: Tuple[Edge, ...] = ()
    conditional_edges: Tuple[ConditionalEdgeGroup, ...] = ()

    @classmethod
    def from_payload(cls, payload: Any) -> "Graph":
        """Build a graph from a decoded JSON document.

        Missing ``edges`` or ``conditionalEdges`` are treated as empty. Any
        other deviation from the expected shape raises
        :class:`GraphParseError`.
        """

        document = _expect_mapping(payload, "graph document")
        nodes = tuple(
            _parse_node(raw, index)
            for index, raw in enumerate(_list_field(document, "nodes"))
        )
        edges = tuple(
            _parse_edge(raw, index)
            for index, raw in enumerate(_list_field(document, "edges"))
        )
        groups = tuple(
            _parse_group(raw, index)
            for index, raw in enumerate(
                _list_field(document, "conditionalEdges")
            )
        )
        return cls(nodes=nodes, edges=edges, conditional_edges=groups)


def _expect_mapping(value: Any, label: str) -> Mapping[str, Any]:
    if not isinstance(value, Mapping):
        raise GraphParseError(
            f"{label} must be an object, got {type(value).__name__}"
        )
    return value


def _list_field(document: Mapping[str, Any], key: str) -> Sequence[Any]:
    value = document.get(key)
    if value is None:
        return ()
    if not isinstance(value, list):
        raise GraphParseError(f"'{key}' must be a list")
    return value


def _string_field(source: Mapping[str, Any], key: str, label: str) -> str:
    value = source.get(key)
    if value is None:
        return ""
    if not isinstance(value, str):
        raise GraphParseError(f"{label}: '{key}' must be a string")
    return value


def _parse_node(raw: Any, index: int) -> Node:
    label = f"nodes[{index}]"
    entry = _expect_mapping(raw, label)

    raw_version = entry.get("version")
    version: Optional[Version] = None
    if raw_version is not None:
        if not isinstance(raw_version, str):
            raise GraphParseError(f"{label}: 'version' must be a string")
        try:
            version = parse_version(raw_version)
        except InvalidVersionError as error:
            raise GraphParseError(f"{label}: {error}") from error

    metadata: Dict[str, str] = {}
    raw_metadata = entry.get("metadata")
    if raw_metadata is not None:
        for key, value in _expect_mapping(
            raw_metadata, f"{label}.metadata"
        ).items():
            if not isinstance(value, str):
                raise GraphParseError(
                    f"{label}.metadata['{key}'] must be a string"
                )
            metadata[str(key)] = value

    return Node(
        version=version,
        payload=_string_field(entry, "payload", label),
        metadata=metadata,
    )


def _parse_edge(raw: Any, index: int) -> Edge:
    # Short pairs are left for the edge resolver to reject.
    if not isinstance(raw, list):
        raise GraphParseError(f"edges[{index}] must be a list of integers")
    for item in raw:
        if isinstance(item, bool) or not isinstance(item, int):
            raise GraphParseError(
                f"edges[{index}] must be a list of integers, got {raw!r}"
            )
    return tuple(raw)


def _parse_group(raw: Any, index: int) -> ConditionalEdgeGroup:
    label = f"conditionalEdges[{index}]"
    entry = _expect_mapping(raw, label)

    edges = []
    for edge_index, raw_edge in enumerate(_list_field(entry, "edges")):
        edge_label = f"{label}.edges[{edge_index}]"
        edge = _expect_mapping(raw_edge, edge_label)
        edges.append(
            ConditionalEdge(
                from_version=_string_field(edge, "from", edge_label),
                to_version=_string_field(edge, "to", edge_label),
            )
        )

    risks = []
    for risk_index, raw_risk in enumerate(_list_field(entry, "risks")):
        risk_label = f"{label}.risks[{risk_index}]"
        risk = _expect_mapping(raw_risk, risk_label)
        risks.append(Risk(name=_string_field(risk, "name", risk_label)))

    return ConditionalEdgeGroup(edges=tuple(edges), risks=tuple(risks))
