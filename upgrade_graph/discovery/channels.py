"""Channel name handling and discovery of co-member channels.

A channel name such as ``stable-4.16`` is made of a group prefix
(``stable-``, separator included) and a trailing version token (``4.16``).
Nodes list every channel they belong to under
:data:`~upgrade_graph.config.CHANNELS_METADATA_KEY`; the discoverer turns that
list into new channels worth traversing.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Tuple

from semver import Version

from upgrade_graph.config import CHANNEL_SEPARATOR, CHANNELS_METADATA_KEY
from upgrade_graph.errors import (ChannelFormatError, ChannelVersionError,
                                  InvalidVersionError)
from upgrade_graph.models.graph import Node
from upgrade_graph.versions import meets_minimum, parse_version

logger = logging.getLogger(__name__)


def split_channel(channel: str) -> Tuple[str, str]:
    """Split ``channel`` into ``(prefix_with_separator, version_token)``.

    >>> split_channel("stable-4.16")
    ('stable-', '4.16')
    """

    index = channel.find(CHANNEL_SEPARATOR)
    if index == -1:
        raise ChannelFormatError(channel)
    cut = index + len(CHANNEL_SEPARATOR)
    return channel[:cut], channel[cut:]


def channel_version(channel: str, prefix: str) -> Version:
    """Parse the version token that follows ``prefix`` in ``channel``."""

    token = channel[len(prefix):].strip()
    try:
        return parse_version(token)
    except InvalidVersionError as error:
        raise ChannelVersionError(channel, token) from error


def channel_threshold(channel: str) -> Tuple[str, Version]:
    """Return the group prefix of ``channel`` and its minimum version."""

    prefix, _ = split_channel(channel)
    return prefix, channel_version(channel, prefix)


def channel_group(channel: str) -> str:
    """Return the group key: everything before the first separator."""

    index = channel.find(CHANNEL_SEPARATOR)
    if index == -1:
        return channel
    return channel[:index]


def discover_channels(
    node: Node,
    prefixes: Iterable[str],
    min_version: Version,
) -> List[str]:
    """Return channels listed on ``node`` that are worth traversing.

    A listed channel qualifies when it starts with one of ``prefixes`` and its
    version token is at least ``min_version``. Entries whose version token
    does not parse are logged and skipped.
    """

    listed = node.metadata.get(CHANNELS_METADATA_KEY)
    if not listed:
        return []

    prefixes = tuple(prefixes)
    found: List[str] = []
    for entry in listed.split(","):
        channel = entry.strip()
        prefix = next((p for p in prefixes if channel.startswith(p)), None)
        if prefix is None:
            continue
        try:
            version = channel_version(channel, prefix)
        except ChannelVersionError as error:
            logger.warning("Skipping channel %r: %s", channel, error)
            continue
        if meets_minimum(version, min_version) and channel not in found:
            found.append(channel)
    return found
