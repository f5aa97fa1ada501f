"""Tests for output record formatting."""

from __future__ import annotations

import json

from upgrade_graph.models import Release
from upgrade_graph.results import (OUTPUT_FIELD_ORDER, ResultsFormatter,
                                   to_ndjson_line)


def test_rows_are_ordered_by_group_then_version() -> None:
    rows = ResultsFormatter().format_releases(
        {
            "stable": {
                "4.16.10": Release("4.16.10", "stable-4.16", "multi", "p10"),
                "4.16.2": Release(
                    "4.16.2", "stable-4.16", "multi", "p2", ("4.16.10", "4.16.9")
                ),
            },
            "fast": {"4.17.0": Release("4.17.0", "fast-4.17", "multi", "p")},
        }
    )

    assert [(row["group"], row["version"]) for row in rows] == [
        ("fast", "4.17.0"),
        ("stable", "4.16.2"),
        ("stable", "4.16.10"),
    ]
    assert rows[1]["available_upgrades"] == ["4.16.9", "4.16.10"]
    assert list(rows[0]) == list(OUTPUT_FIELD_ORDER)


def test_to_ndjson_line_is_compact_and_ordered() -> None:
    record = {
        "group": "stable",
        "version": "4.16.1",
        "available_upgrades": ["4.16.2"],
    }

    line = to_ndjson_line(record)

    assert line == (
        '{"group":"stable","version":"4.16.1","available_upgrades":["4.16.2"]}'
    )
    assert json.loads(line) == record
