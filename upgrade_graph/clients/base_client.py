"""Shared transport for rate-limited HTTP clients of the graph service."""

from __future__ import annotations

import logging
import time
from typing import Any, Callable, Dict, Optional, Protocol, TypeVar, cast

import requests  # type: ignore[import]

from upgrade_graph.config import REQUEST_TIMEOUT_SECONDS
from upgrade_graph.net.rate_limiter import RateLimiter

T = TypeVar("T")


class SessionWithGet(Protocol):
    def get(
        self,
        url: str,
        headers: Optional[Dict[str, str]] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
    ) -> Any: ...


class BaseClient:
    """Own a ``requests`` session, pace it with a limiter and keep tallies.

    Subclasses set ``service_name`` so request labels in the debug log read
    ``<service>.<operation>``. Every operation counts as completed; the ones
    that raised are also counted as failed.
    """

    service_name = "client"

    def __init__(
        self,
        rate_limiter: RateLimiter,
        *,
        session: Optional[SessionWithGet] = None,
        timeout: float = REQUEST_TIMEOUT_SECONDS,
        logger: Optional[logging.Logger] = None,
    ) -> None:
        self._rate_limiter = rate_limiter
        self._session: SessionWithGet = cast(
            SessionWithGet, session or requests.Session()
        )
        self._timeout = timeout
        self._logger = logger or logging.getLogger(self.__class__.__name__)
        self._completed_requests = 0
        self._failed_requests = 0

    @property
    def completed_requests(self) -> int:
        return self._completed_requests

    @property
    def failed_requests(self) -> int:
        return self._failed_requests

    def _get(
        self,
        url: str,
        *,
        headers: Optional[Dict[str, str]] = None,
        name: Optional[str] = None,
    ) -> Any:
        """Issue a paced GET with the client timeout and return the response."""

        def _send() -> Any:
            return self._session.get(url, headers=headers, timeout=self._timeout)

        return self._execute_with_rate_limit(_send, name=name or "get")

    def _execute_with_rate_limit(
        self,
        operation: Callable[[], T],
        *,
        name: Optional[str] = None,
    ) -> T:
        label = name or getattr(operation, "__name__", "<anonymous>")
        self._rate_limiter.acquire()

        started_at = time.perf_counter()
        try:
            return operation()
        except Exception:
            self._failed_requests += 1
            raise
        finally:
            self._completed_requests += 1
            self._logger.debug(
                "Request %s.%s finished after %.2f ms",
                self.service_name,
                label,
                (time.perf_counter() - started_at) * 1000.0,
            )
