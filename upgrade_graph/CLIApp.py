"""CLI wiring that discovers releases and emits NDJSON records."""

from __future__ import annotations

import argparse
import logging
import sys
from typing import Any, Dict, List, Optional, Sequence

from upgrade_graph.aggregation import aggregate_by_group
from upgrade_graph.clients.base_client import BaseClient
from upgrade_graph.clients.graph_client import GraphClient, GraphSource
from upgrade_graph.config import DEFAULT_START_CHANNEL
from upgrade_graph.discovery.engine import ReleaseDiscoverer
from upgrade_graph.errors import UpgradeGraphError
from upgrade_graph.logging_config import configure_logging
from upgrade_graph.models.release import ReleasesByChannel
from upgrade_graph.results import ResultsFormatter, to_ndjson_line
from upgrade_graph.utils.env import load_settings

logger = logging.getLogger(__name__)


class CLIApp:
    """Command-line entry point for release discovery."""

    def __init__(
        self,
        start_channels: Sequence[str],
        arch: str,
        *,
        graph_source: GraphSource,
        accepted_risks: Sequence[str] = (),
        extra_channels: Sequence[str] = (),
        by_channel: bool = False,
    ) -> None:
        self._start_channels = list(start_channels)
        self._arch = arch
        self._discoverer = ReleaseDiscoverer(graph_source)
        self._accepted_risks = list(accepted_risks)
        self._extra_channels = list(extra_channels)
        self._by_channel = by_channel

    def discover(self) -> ReleasesByChannel:
        """Traverse from the start channels, then fetch extra channels."""
        releases = self._discoverer.discover_from_channels(
            self._start_channels,
            self._arch,
            self._accepted_risks,
        )
        pending = [ch for ch in self._extra_channels if ch not in releases]
        if pending:
            releases.update(
                self._discoverer.fetch_channels(
                    pending,
                    self._arch,
                    self._accepted_risks,
                )
            )
        return releases

    def generate_results(self) -> List[Dict[str, Any]]:
        releases = self.discover()
        if not self._by_channel:
            releases = aggregate_by_group(releases)
        return ResultsFormatter().format_releases(releases)

    def run(self) -> int:
        """Execute the workflow and emit NDJSON to stdout."""
        for record in self.generate_results():
            print(to_ndjson_line(record))
        return 0


def build_arg_parser() -> argparse.ArgumentParser:
    argument_parser = argparse.ArgumentParser(
        description=(
            "Discover reachable releases and their upgrade paths "
            "from a channel update graph."
        )
    )
    argument_parser.add_argument(
        "--channel",
        dest="channels",
        action="append",
        metavar="CHANNEL",
        help=(
            "Start channel, e.g. stable-4.16. Repeat to seed several "
            "channels (default: $UPGRADE_GRAPH_CHANNELS or "
            f"{DEFAULT_START_CHANNEL})."
        ),
    )
    argument_parser.add_argument(
        "--arch",
        default=None,
        help="Architecture to query (default: $UPGRADE_GRAPH_ARCH or multi).",
    )
    argument_parser.add_argument(
        "--graph-url",
        default=None,
        help="Graph endpoint (default: $UPGRADE_GRAPH_URL or the public one).",
    )
    argument_parser.add_argument(
        "--accept-risk",
        dest="accepted_risks",
        action="append",
        default=[],
        metavar="RISK",
        help=(
            "Accept a conditional edge risk by name. Repeatable "
            "(default: $UPGRADE_GRAPH_ACCEPT_RISKS)."
        ),
    )
    argument_parser.add_argument(
        "--extra-channel",
        dest="extra_channels",
        action="append",
        default=[],
        metavar="CHANNEL",
        help="Fetch this channel directly without traversing from it.",
    )
    argument_parser.add_argument(
        "--by-channel",
        action="store_true",
        help="Print per-channel results instead of channel groups.",
    )
    argument_parser.add_argument(
        "-v",
        "--verbose",
        action="count",
        default=None,
        help="Log progress to stderr (-vv for debug output).",
    )
    return argument_parser


def main(
    argv: Optional[Sequence[str]] = None,
    *,
    graph_source: Optional[GraphSource] = None,
) -> int:
    argument_parser = build_arg_parser()
    parsed_args = argument_parser.parse_args(argv)
    configure_logging(parsed_args.verbose)

    source = graph_source
    try:
        settings = load_settings()
        if source is None:
            source = GraphClient(
                parsed_args.graph_url or settings.graph_url,
                timeout=settings.timeout,
            )
        app = CLIApp(
            parsed_args.channels or settings.start_channels,
            parsed_args.arch or settings.arch,
            graph_source=source,
            accepted_risks=parsed_args.accepted_risks or settings.accepted_risks,
            extra_channels=parsed_args.extra_channels,
            by_channel=parsed_args.by_channel,
        )
        return app.run()
    except UpgradeGraphError as error:
        logger.error("Release discovery failed: %s", error)
        print(f"error: {error}", file=sys.stderr)
        return 1
    finally:
        if isinstance(source, BaseClient):
            logger.info(
                "Made %d graph requests, %d failed",
                source.completed_requests,
                source.failed_requests,
            )


if __name__ == "__main__":
    sys.exit(main())
