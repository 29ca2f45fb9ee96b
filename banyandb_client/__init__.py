"""BanyanDB Python client library for the v1 trace gRPC API."""

from .client import BanyanDBClient, SHUTDOWN_GRACE_SECONDS
from .errors import (
    ClientError,
    ConnectionError,
    RemoteCallError,
    UnrecognizedVariantError,
    InvalidArgumentError,
)
from .options import Options
from .log import configure_logging
from .query import TraceQuery, BinaryOp, Sort
from .response import TraceQueryResponse, RowEntity
from .tag import (
    TagAndValue,
    StringTagPair,
    StringArrayTagPair,
    LongTagPair,
    LongArrayTagPair,
    BinaryTagPair,
    NullTagPair,
    tag_pair,
    tag_value,
)
from .write import TraceBulkWriteProcessor, TraceWrite

__all__ = [
    # Client
    "BanyanDBClient",
    "SHUTDOWN_GRACE_SECONDS",
    "Options",
    "configure_logging",
    # Errors
    "ClientError",
    "ConnectionError",
    "RemoteCallError",
    "UnrecognizedVariantError",
    "InvalidArgumentError",
    # Query
    "TraceQuery",
    "BinaryOp",
    "Sort",
    "TraceQueryResponse",
    "RowEntity",
    # Tag values
    "TagAndValue",
    "StringTagPair",
    "StringArrayTagPair",
    "LongTagPair",
    "LongArrayTagPair",
    "BinaryTagPair",
    "NullTagPair",
    "tag_pair",
    "tag_value",
    # Writes
    "TraceBulkWriteProcessor",
    "TraceWrite",
]
