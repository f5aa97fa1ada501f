"""Common errors raised while discovering and aggregating releases."""

from __future__ import annotations

from typing import Optional


class UpgradeGraphError(RuntimeError):
    """Base class for upgrade graph failures."""


class InputError(UpgradeGraphError, ValueError):
    """Raised when caller-supplied input is rejected before any work starts."""


class GraphURLRequiredError(InputError):
    """Raised when no graph endpoint was configured."""

    def __init__(self) -> None:
        super().__init__("graph URL is required")


class ChannelFormatError(InputError):
    """Raised when a channel name has no group separator."""

    def __init__(self, channel: str) -> None:
        super().__init__(f"invalid channel format: {channel}")
        self.channel = channel


class InvalidVersionError(InputError):
    """Raised when a string is not a valid version."""


class ChannelVersionError(InvalidVersionError):
    """Raised when a channel's trailing token is not a valid version."""

    def __init__(self, channel: str, token: str) -> None:
        super().__init__(
            f"error parsing channel version from {channel}: "
            f"invalid version {token!r}"
        )
        self.channel = channel
        self.token = token


class GraphFetchError(UpgradeGraphError):
    """Raised when the graph endpoint cannot be reached or answers non-200."""

    def __init__(
        self,
        message: str,
        *,
        url: str,
        status_code: Optional[int] = None,
    ) -> None:
        super().__init__(message)
        self.url = url
        self.status_code = status_code


class GraphParseError(UpgradeGraphError):
    """Raised when a graph response body does not have the expected shape."""


class GraphStructureError(UpgradeGraphError):
    """Raised when graph edges reference malformed or missing nodes."""


class DiscoveryError(UpgradeGraphError):
    """Raised when a channel graph could not be fetched during traversal."""

    def __init__(self, arch: str, channel: str, cause: Exception) -> None:
        super().__init__(
            f"error fetching {arch} graph for channel {channel}: {cause}"
        )
        self.arch = arch
        self.channel = channel


class AggregationError(UpgradeGraphError):
    """Raised when aggregated upgrade targets cannot be ordered."""
