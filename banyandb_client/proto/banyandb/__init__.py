"""BanyanDB v1 proto definitions."""

from ._schema import (
    TRACE_SERVICE,
    Metadata,
    Str,
    Int,
    StrArray,
    IntArray,
    TagValue,
    Tag,
    PairQuery,
    QueryOrder,
    Projection,
    TimeRange,
    Entity,
    QueryRequest,
    QueryResponse,
    EntityValue,
    WriteRequest,
    WriteResponse,
)
from .trace_grpc import (
    TraceServiceStub,
    TraceServiceServicer,
    add_TraceServiceServicer_to_server,
)

__all__ = [
    "TRACE_SERVICE",
    # banyandb.common.v1
    "Metadata",
    # banyandb.model.v1
    "Str",
    "Int",
    "StrArray",
    "IntArray",
    "TagValue",
    "Tag",
    "PairQuery",
    "QueryOrder",
    "Projection",
    "TimeRange",
    # banyandb.trace.v1
    "Entity",
    "QueryRequest",
    "QueryResponse",
    "EntityValue",
    "WriteRequest",
    "WriteResponse",
    # Services
    "TraceServiceStub",
    "TraceServiceServicer",
    "add_TraceServiceServicer_to_server",
]
