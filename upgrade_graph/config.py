"""
Upgrade Graph Repository
Introductory remarks: This module is part of the upgrade-graph codebase.

Central configuration constants for release discovery.
"""

from __future__ import annotations

# Graph service ---------------------------------------------------------------

DEFAULT_GRAPH_URL = "https://api.openshift.com/api/upgrades_info/graph"
"""Public update graph endpoint used when nothing else is configured."""

DEFAULT_ARCH = "multi"
"""Architecture queried when the caller does not choose one."""

DEFAULT_START_CHANNEL = "stable-4.16"
"""Channel that seeds the traversal when none is given on the command line."""

REQUEST_TIMEOUT_SECONDS = 30
"""Per-request timeout handed to the HTTP session."""

# Rate limiting ---------------------------------------------------------------

DEFAULT_MAX_CALLS = 5
DEFAULT_PERIOD_SECONDS = 1.0

# Graph document conventions --------------------------------------------------

CHANNELS_METADATA_KEY = "io.openshift.upgrades.graph.release.channels"
"""Node metadata key listing every channel a release appears in."""

CHANNEL_SEPARATOR = "-"
"""Separates the channel group prefix from its version token."""
