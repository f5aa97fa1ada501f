"""Tests for channel-group aggregation."""

from __future__ import annotations

from typing import Tuple

import pytest

from upgrade_graph.aggregation import aggregate_by_group
from upgrade_graph.errors import AggregationError
from upgrade_graph.models import Release, ReleasesByChannel


def _release(
    version: str,
    upgrades: Tuple[str, ...] = (),
    *,
    channel: str = "stable-4.16",
    payload: str = "",
) -> Release:
    return Release(version, channel, "amd64", payload or f"p-{version}", upgrades)


def test_single_channel_is_renamed_to_its_group() -> None:
    result = aggregate_by_group(
        {"stable-4.16": {"4.16.1": _release("4.16.1", ("4.16.2",))}}
    )

    assert result == {"stable": {"4.16.1": _release("4.16.1", ("4.16.2",))}}


def test_merges_upgrades_of_shared_versions_sorted() -> None:
    result = aggregate_by_group(
        {
            "stable-4.16": {
                "4.16.1": _release("4.16.1", ("4.16.2",)),
                "4.16.2": _release("4.16.2"),
            },
            "stable-4.17": {
                "4.16.1": _release("4.16.1", ("4.16.5",), channel="stable-4.17"),
                "4.16.3": _release("4.16.3", ("4.16.7",), channel="stable-4.17"),
            },
        }
    )

    assert list(result) == ["stable"]
    group = result["stable"]
    assert group["4.16.1"].available_upgrades == ("4.16.2", "4.16.5")
    assert group["4.16.2"].available_upgrades == ()
    assert group["4.16.3"].available_upgrades == ("4.16.7",)


def test_union_has_no_duplicates_and_version_order() -> None:
    result = aggregate_by_group(
        {
            "fast-4.16": {"4.16.1": _release("4.16.1", ("4.16.10", "4.16.2"))},
            "fast-4.17": {"4.16.1": _release("4.16.1", ("4.16.9", "4.16.2"))},
        }
    )

    assert result["fast"]["4.16.1"].available_upgrades == (
        "4.16.2",
        "4.16.9",
        "4.16.10",
    )


def test_pre_release_targets_sort_below_final_release() -> None:
    result = aggregate_by_group(
        {
            "candidate-4.16": {
                "4.15.9": _release("4.15.9", ("4.16.0", "4.16.0-rc.1"))
            },
            "candidate-4.17": {
                "4.15.9": _release("4.15.9", ("4.16.0-ec.3",))
            },
        }
    )

    assert result["candidate"]["4.15.9"].available_upgrades == (
        "4.16.0-ec.3",
        "4.16.0-rc.1",
        "4.16.0",
    )


def test_first_seen_release_keeps_scalar_fields() -> None:
    result = aggregate_by_group(
        {
            "stable-4.16": {"4.16.1": _release("4.16.1", payload="first")},
            "stable-4.17": {
                "4.16.1": _release(
                    "4.16.1", payload="second", channel="stable-4.17"
                )
            },
        }
    )

    merged = result["stable"]["4.16.1"]
    assert merged.payload == "first"
    assert merged.channel == "stable-4.16"


def test_groups_are_kept_apart() -> None:
    result = aggregate_by_group(
        {
            "stable-4.16": {"4.16.1": _release("4.16.1", ("4.16.2",))},
            "fast-4.16": {"4.16.1": _release("4.16.1", ("4.16.3",))},
            "nightly": {"4.18.0": _release("4.18.0")},
        }
    )

    assert set(result) == {"stable", "fast", "nightly"}
    assert result["stable"]["4.16.1"].available_upgrades == ("4.16.2",)
    assert result["fast"]["4.16.1"].available_upgrades == ("4.16.3",)


def test_minimum_version_is_not_applied_again() -> None:
    result = aggregate_by_group(
        {"stable-4.16": {"4.15.1": _release("4.15.1", ("4.16.0",))}}
    )

    assert set(result["stable"]) == {"4.15.1"}


def test_merge_does_not_depend_on_channel_order() -> None:
    first: ReleasesByChannel = {
        "stable-4.16": {"4.16.1": _release("4.16.1", ("4.16.2",))},
        "stable-4.17": {"4.16.1": _release("4.16.1", ("4.16.5", "4.16.2"))},
        "stable-4.18": {"4.16.1": _release("4.16.1", ("4.16.4",))},
    }
    second: ReleasesByChannel = dict(reversed(list(first.items())))

    assert aggregate_by_group(first) == aggregate_by_group(second)


def test_input_is_not_modified() -> None:
    original = _release("4.16.1", ("4.16.9", "4.16.2"))
    releases: ReleasesByChannel = {"stable-4.16": {"4.16.1": original}}

    aggregate_by_group(releases)

    assert releases["stable-4.16"]["4.16.1"] is original
    assert original.available_upgrades == ("4.16.9", "4.16.2")


def test_invalid_upgrade_target_is_fatal() -> None:
    with pytest.raises(AggregationError) as excinfo:
        aggregate_by_group(
            {"stable-4.16": {"4.16.1": _release("4.16.1", ("4.16.2", "bogus"))}}
        )

    assert "4.16.1" in str(excinfo.value)
    assert "available_upgrades[1]='bogus'" in str(excinfo.value)
