"""Client for the channel update graph service with rate limiting."""

from __future__ import annotations

import logging
from typing import Any, Optional, Protocol
from urllib.parse import parse_qsl, urlencode, urlsplit, urlunsplit

import requests  # type: ignore[import]

from upgrade_graph.clients.base_client import BaseClient, SessionWithGet
from upgrade_graph.config import (DEFAULT_MAX_CALLS, DEFAULT_PERIOD_SECONDS,
                                  REQUEST_TIMEOUT_SECONDS)
from upgrade_graph.errors import (GraphFetchError, GraphParseError,
                                  GraphURLRequiredError)
from upgrade_graph.models.graph import Graph
from upgrade_graph.net.rate_limiter import RateLimiter

ACCEPT_JSON = {"Accept": "application/json"}


class GraphSource(Protocol):
    """Anything able to return the graph of one channel and architecture."""

    def fetch_graph(self, channel: str, arch: str) -> Graph: ...


def build_graph_url(graph_url: str, channel: str, arch: str) -> str:
    """Return ``graph_url`` with ``channel`` and ``arch`` query parameters.

    Existing query parameters are kept; keys are emitted in sorted order so
    the resulting locator is stable.
    """

    parts = urlsplit(graph_url)
    params = parse_qsl(parts.query, keep_blank_values=True)
    params.append(("channel", channel))
    params.append(("arch", arch))
    params.sort(key=lambda item: item[0])
    return urlunsplit(parts._replace(query=urlencode(params)))


class GraphClient(BaseClient):
    """Fetch channel graphs from an update graph endpoint."""

    service_name = "graph"

    def __init__(
        self,
        graph_url: Optional[str],
        *,
        rate_limiter: Optional[RateLimiter] = None,
        logger: Optional[logging.Logger] = None,
        session: Optional[SessionWithGet] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ) -> None:
        limiter = rate_limiter or RateLimiter(
            max_calls=DEFAULT_MAX_CALLS,
            period_seconds=DEFAULT_PERIOD_SECONDS,
        )
        super().__init__(
            limiter, session=session, timeout=timeout, logger=logger
        )
        self._graph_url = (graph_url or "").strip()

    @property
    def graph_url(self) -> str:
        """Endpoint without the per-request query, empty when unset."""
        return self._graph_url

    def fetch_graph(self, channel: str, arch: str) -> Graph:
        """Download and decode the graph for ``channel`` and ``arch``.

        Raises
        ------
        GraphURLRequiredError
            If the client was built without an endpoint. No request is made.
        GraphFetchError
            On transport failures and non-200 responses.
        GraphParseError
            When the body is not a graph document.
        """

        if not self._graph_url:
            raise GraphURLRequiredError()

        url = build_graph_url(self._graph_url, channel, arch)
        self._logger.debug("Requesting graph from %s", url)
        try:
            response = self._get(
                url, headers=ACCEPT_JSON, name=f"graph({arch}, {channel})"
            )
        except requests.RequestException as error:
            raise GraphFetchError(
                f"error fetching data from {url}: {error}",
                url=url,
            ) from error

        if response.status_code != 200:
            raise GraphFetchError(
                f"error: status {response.status_code} "
                f"when fetching data from {url}",
                url=url,
                status_code=response.status_code,
            )
        return self._decode(response, url)

    @staticmethod
    def _decode(response: Any, url: str) -> Graph:
        try:
            payload = response.json()
        except ValueError as error:
            raise GraphParseError(
                f"error parsing JSON from {url}: {error}"
            ) from error

        try:
            return Graph.from_payload(payload)
        except GraphParseError as error:
            raise GraphParseError(
                f"error parsing JSON from {url}: {error}"
            ) from error
