import pytest

from upgrade_graph.errors import InvalidVersionError
from upgrade_graph.versions import (meets_minimum, normalize_version,
                                    parse_version, sort_versions)


class TestParseVersion:
    def test_orders_numerically(self) -> None:
        assert parse_version("4.16.10") > parse_version("4.16.9")

    def test_two_component_channel_tokens(self) -> None:
        assert parse_version("4.16.0") >= parse_version("4.16")
        assert parse_version("4.15.99") < parse_version("4.16")

    def test_rejects_garbage(self) -> None:
        with pytest.raises(InvalidVersionError):
            parse_version("four.sixteen")


class TestHelpers:
    def test_meets_minimum(self) -> None:
        minimum = parse_version("4.16")
        assert meets_minimum(parse_version("4.16.1"), minimum)
        assert not meets_minimum(parse_version("4.15.3"), minimum)
        assert not meets_minimum(None, minimum)

    def test_normalize_version(self) -> None:
        assert normalize_version("v4.16.1") == "4.16.1"
        assert normalize_version("not-a-version") == "not-a-version"

    def test_sort_versions(self) -> None:
        assert sort_versions(["4.16.10", "4.16.2", "4.17.0"]) == [
            "4.16.2",
            "4.16.10",
            "4.17.0",
        ]


class TestPreReleases:
    def test_pre_release_sorts_below_final_release(self) -> None:
        assert parse_version("4.16.0-rc.1") < parse_version("4.16.0")
        assert parse_version("4.16.0-ec.3") < parse_version("4.16.0-rc.1")
        assert parse_version("4.16.0-rc.2") < parse_version("4.16.0-rc.10")

    def test_pre_release_keeps_its_spelling(self) -> None:
        assert str(parse_version("4.16.0-rc.1")) == "4.16.0-rc.1"
        assert normalize_version("4.16.0-ec.3") == "4.16.0-ec.3"
        assert normalize_version("v4.16.0-rc.1") == "4.16.0-rc.1"

    def test_two_component_token_gains_zero_patch(self) -> None:
        assert normalize_version("4.16") == "4.16.0"

    def test_python_style_pre_release_is_rejected(self) -> None:
        with pytest.raises(InvalidVersionError):
            parse_version("4.16.0rc1")

    def test_sort_versions_orders_pre_releases_first(self) -> None:
        assert sort_versions(
            ["4.16.1", "4.16.0", "4.16.0-rc.1", "4.16.0-ec.3"]
        ) == ["4.16.0-ec.3", "4.16.0-rc.1", "4.16.0", "4.16.1"]
