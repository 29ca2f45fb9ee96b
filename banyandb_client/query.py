"""Fluent builder for trace queries."""

import enum
from datetime import datetime
from typing import Iterable, Optional

from google.protobuf.timestamp_pb2 import Timestamp

from .errors import InvalidArgumentError
from .proto.banyandb import (
    Metadata,
    PairQuery,
    Projection,
    QueryOrder,
    QueryRequest,
    Tag,
    TimeRange,
)
from .tag import PythonTagValue, tag_value


class BinaryOp(enum.IntEnum):
    """Comparison applied by a query condition."""

    EQ = PairQuery.BINARY_OP_EQ
    NE = PairQuery.BINARY_OP_NE
    LT = PairQuery.BINARY_OP_LT
    GT = PairQuery.BINARY_OP_GT
    LE = PairQuery.BINARY_OP_LE
    GE = PairQuery.BINARY_OP_GE
    HAVING = PairQuery.BINARY_OP_HAVING
    NOT_HAVING = PairQuery.BINARY_OP_NOT_HAVING


class Sort(enum.IntEnum):
    """Result ordering."""

    DESC = QueryOrder.SORT_DESC
    ASC = QueryOrder.SORT_ASC


def _timestamp(dt: datetime) -> Timestamp:
    ts = Timestamp()
    ts.FromDatetime(dt)
    return ts


class TraceQuery:
    """Criteria for a trace query.

    The group is not part of the query; the client supplies it when the
    query is compiled, so one TraceQuery can be reused across clients.
    """

    def __init__(
        self,
        name: str,
        begin: Optional[datetime] = None,
        end: Optional[datetime] = None,
        projections: Iterable[str] = (),
    ):
        if not name:
            raise InvalidArgumentError("trace name must not be empty")
        if begin is not None and end is not None and begin > end:
            raise InvalidArgumentError("time range begin is after end")
        self._name = name
        self._begin = begin
        self._end = end
        self._projections = list(projections)
        self._conditions: list[PairQuery] = []
        self._limit: int = 0
        self._offset: int = 0
        self._order: Optional[QueryOrder] = None

    @property
    def name(self) -> str:
        return self._name

    def where(self, tag: str, op: BinaryOp, value: PythonTagValue) -> "TraceQuery":
        """Add a condition on a tag. Conditions are ANDed."""
        condition = PairQuery(op=int(op), condition=Tag(key=tag, value=tag_value(value)))
        self._conditions.append(condition)
        return self

    def where_equal(self, tag: str, value: PythonTagValue) -> "TraceQuery":
        """Add an equality condition on a tag."""
        return self.where(tag, BinaryOp.EQ, value)

    def limit(self, limit: int) -> "TraceQuery":
        """Return at most ``limit`` entities (0 leaves it to the server)."""
        if limit < 0:
            raise InvalidArgumentError(f"limit must not be negative, got {limit}")
        self._limit = limit
        return self

    def offset(self, offset: int) -> "TraceQuery":
        """Skip the first ``offset`` entities."""
        if offset < 0:
            raise InvalidArgumentError(f"offset must not be negative, got {offset}")
        self._offset = offset
        return self

    def order_by(self, tag: str, sort: Sort = Sort.DESC) -> "TraceQuery":
        """Order results by an indexed tag."""
        self._order = QueryOrder(key_name=tag, sort=int(sort))
        return self

    def build(self, group: str) -> QueryRequest:
        """Compile the criteria into a wire QueryRequest for ``group``."""
        request = QueryRequest(
            metadata=Metadata(group=group, name=self._name),
            offset=self._offset,
            limit=self._limit,
        )
        if self._begin is not None or self._end is not None:
            time_range = TimeRange()
            if self._begin is not None:
                time_range.begin.CopyFrom(_timestamp(self._begin))
            if self._end is not None:
                time_range.end.CopyFrom(_timestamp(self._end))
            request.time_range.CopyFrom(time_range)
        if self._order is not None:
            request.order_by.CopyFrom(self._order)
        request.fields.extend(self._conditions)
        if self._projections:
            request.projection.CopyFrom(Projection(key_names=self._projections))
        return request
