"""Unit tests for call options, status validators, and the query model."""

import pytest

from docdb_regional.engine.types import OutboundRequest
from docdb_regional.engine.validators import expect_status, expect_status_class
from docdb_regional.models.query import Query
from docdb_regional.options import (
    consistency_level,
    continuation,
    enable_cross_partition,
    header,
    if_match,
    max_item_count,
    partition_key,
    session_token,
    upsert,
)


def _apply(*opts) -> dict[str, str]:
    request = OutboundRequest(method="GET", link="dbs/db1")
    for opt in opts:
        opt(request)
    return request.headers


class TestCallOptions:
    def test_partition_key_is_json_array(self):
        assert _apply(partition_key("tenant-1"))["x-ms-documentdb-partitionkey"] == '["tenant-1"]'

    def test_numeric_partition_key(self):
        assert _apply(partition_key(42))["x-ms-documentdb-partitionkey"] == "[42]"

    def test_upsert(self):
        assert _apply(upsert())["x-ms-documentdb-is-upsert"] == "true"

    def test_consistency_level(self):
        assert _apply(consistency_level("Session"))["x-ms-consistency-level"] == "Session"

    def test_unknown_consistency_level_rejected(self):
        with pytest.raises(ValueError):
            consistency_level("Sometimes")

    def test_paging_options(self):
        headers = _apply(continuation("abc"), max_item_count(50), enable_cross_partition())
        assert headers["x-ms-continuation"] == "abc"
        assert headers["x-ms-max-item-count"] == "50"
        assert headers["x-ms-documentdb-query-enablecrosspartition"] == "true"

    @pytest.mark.parametrize("count", [0, -2])
    def test_invalid_max_item_count(self, count: int):
        with pytest.raises(ValueError):
            max_item_count(count)

    def test_session_and_etag(self):
        headers = _apply(session_token("0:12"), if_match('"etag-1"'))
        assert headers["x-ms-session-token"] == "0:12"
        assert headers["If-Match"] == '"etag-1"'

    def test_later_option_wins(self):
        assert _apply(header("x-custom", "a"), header("x-custom", "b"))["x-custom"] == "b"


class TestValidators:
    def test_expect_status_exact(self):
        validator = expect_status(200)
        assert validator(200) is True
        assert validator(201) is False

    def test_expect_status_multiple(self):
        validator = expect_status(200, 304)
        assert validator(304) is True

    @pytest.mark.parametrize("status,expected", [(200, True), (201, True), (299, True), (199, False), (300, False)])
    def test_expect_status_class(self, status: int, expected: bool):
        assert expect_status_class(200)(status) is expected


class TestQuery:
    def test_build_prefixes_parameter_names(self):
        query = Query.build("SELECT * FROM c WHERE c.a = @a AND c.b = @b", a=1, **{"@b": "x"})
        assert [(p.name, p.value) for p in query.parameters] == [("@a", 1), ("@b", "x")]

    def test_empty_query_rejected(self):
        with pytest.raises(ValueError):
            Query(query="")
