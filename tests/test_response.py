"""Tests for decoded query responses."""

from datetime import datetime, timezone

import pytest

from banyandb_client.errors import UnrecognizedVariantError
from banyandb_client.proto.banyandb import QueryResponse, Tag, TagValue
from banyandb_client.response import RowEntity, TraceQueryResponse
from banyandb_client.tag import LongTagPair, NullTagPair, StringTagPair
from banyandb_client.testing import make_entity

WHEN = datetime(2024, 5, 1, 12, 30, tzinfo=timezone.utc)


class TestRowEntity:
    """Tests for RowEntity.from_proto."""

    def test_fields(self) -> None:
        entity = make_entity(
            "trace-1",
            [("duration", 42), ("service", "gateway")],
            timestamp=WHEN,
            binary=b"span",
        )
        row = RowEntity.from_proto(entity)
        assert row.id == "trace-1"
        assert row.timestamp == WHEN
        assert row.binary == b"span"
        assert row.tags == (
            LongTagPair("duration", 42),
            StringTagPair("service", "gateway"),
        )

    def test_missing_timestamp(self) -> None:
        row = RowEntity.from_proto(make_entity("trace-1"))
        assert row.timestamp is None
        assert row.tags == ()

    def test_tag_lookup(self) -> None:
        row = RowEntity.from_proto(make_entity("t", [("status", None)]))
        assert row.tag("status") == NullTagPair("status")
        assert row.tag("missing") is None


class TestTraceQueryResponse:
    """Tests for TraceQueryResponse."""

    def test_entities_in_order(self) -> None:
        raw = QueryResponse(entities=[make_entity("a"), make_entity("b"), make_entity("c")])
        response = TraceQueryResponse(raw)
        assert len(response) == 3
        assert [e.id for e in response] == ["a", "b", "c"]
        assert response[1].id == "b"
        assert response.raw is raw

    def test_entities_returns_copy(self) -> None:
        response = TraceQueryResponse(QueryResponse(entities=[make_entity("a")]))
        response.entities.clear()
        assert len(response) == 1

    def test_empty(self) -> None:
        response = TraceQueryResponse(QueryResponse())
        assert response.entities == []

    def test_one_bad_tag_fails_whole_response(self) -> None:
        """No partially decoded response is ever produced."""
        bad = make_entity("b")
        bad.fields.append(Tag(key="broken", value=TagValue()))
        raw = QueryResponse(entities=[make_entity("a", [("n", 1)]), bad])
        with pytest.raises(UnrecognizedVariantError):
            TraceQueryResponse(raw)
