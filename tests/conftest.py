"""
Upgrade Graph Repository
Introductory remarks: This module is part of the upgrade-graph codebase.

Shared fixtures for the test suite.
"""

from __future__ import annotations

from pathlib import Path

import pytest

from upgrade_graph import logging_config
from upgrade_graph.utils import env


@pytest.fixture(autouse=True)
def _isolated_environment(
    monkeypatch: pytest.MonkeyPatch,
    tmp_path: Path,
) -> None:
    """Keep tests away from real .env files and process-wide settings."""

    monkeypatch.chdir(tmp_path)
    monkeypatch.setattr(env, "_ENV_LOADED", False)
    monkeypatch.setattr(logging_config, "_CONFIGURED", False)
    for key in (
        "UPGRADE_GRAPH_URL",
        "UPGRADE_GRAPH_ARCH",
        "UPGRADE_GRAPH_CHANNELS",
        "UPGRADE_GRAPH_ACCEPT_RISKS",
        "UPGRADE_GRAPH_TIMEOUT",
        "LOG_LEVEL",
        "LOG_FILE",
    ):
        monkeypatch.delenv(key, raising=False)
