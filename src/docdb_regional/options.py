"""Per-call request options.

Each option is a callable applied to an OutboundRequest before it is sent,
e.g. ``client.read(link, partition_key("tenant-1"), result_type=Doc)``.
"""

from __future__ import annotations

import json
from collections.abc import Callable
from typing import Any

from docdb_regional.engine.types import OutboundRequest

CallOption = Callable[[OutboundRequest], None]

HEADER_PARTITION_KEY = "x-ms-documentdb-partitionkey"
HEADER_UPSERT = "x-ms-documentdb-is-upsert"
HEADER_CONSISTENCY = "x-ms-consistency-level"
HEADER_SESSION_TOKEN = "x-ms-session-token"
HEADER_CONTINUATION = "x-ms-continuation"
HEADER_MAX_ITEM_COUNT = "x-ms-max-item-count"
HEADER_CROSS_PARTITION = "x-ms-documentdb-query-enablecrosspartition"
HEADER_IF_MATCH = "If-Match"

CONSISTENCY_LEVELS = ("Strong", "BoundedStaleness", "Session", "Eventual", "ConsistentPrefix")


def header(name: str, value: str) -> CallOption:
    def apply(request: OutboundRequest) -> None:
        request.headers[name] = value

    return apply


def partition_key(value: Any) -> CallOption:
    """Target a single partition; the value is sent as a one-element JSON array."""
    return header(HEADER_PARTITION_KEY, json.dumps([value]))


def upsert() -> CallOption:
    return header(HEADER_UPSERT, "true")


def consistency_level(level: str) -> CallOption:
    if level not in CONSISTENCY_LEVELS:
        raise ValueError(f"Unknown consistency level '{level}'")
    return header(HEADER_CONSISTENCY, level)


def session_token(token: str) -> CallOption:
    return header(HEADER_SESSION_TOKEN, token)


def continuation(token: str) -> CallOption:
    return header(HEADER_CONTINUATION, token)


def max_item_count(count: int) -> CallOption:
    if count < -1 or count == 0:
        raise ValueError("max_item_count must be -1 (service default) or positive")
    return header(HEADER_MAX_ITEM_COUNT, str(count))


def enable_cross_partition() -> CallOption:
    return header(HEADER_CROSS_PARTITION, "true")


def if_match(etag: str) -> CallOption:
    return header(HEADER_IF_MATCH, etag)
