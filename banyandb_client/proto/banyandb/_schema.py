"""Descriptors for the BanyanDB v1 trace API.

The files mirror ``proto/banyandb/**/*.proto`` and are added to the default
descriptor pool in the same serialized form protoc output uses, so the
resulting message classes behave exactly like generated ``*_pb2`` classes.
"""

from google.protobuf import descriptor_pb2, descriptor_pool, message_factory

# Registers google/protobuf/{struct,timestamp}.proto in the default pool.
from google.protobuf import struct_pb2, timestamp_pb2  # noqa: F401

_F = descriptor_pb2.FieldDescriptorProto

COMMON_PACKAGE = "banyandb.common.v1"
MODEL_PACKAGE = "banyandb.model.v1"
TRACE_PACKAGE = "banyandb.trace.v1"
TRACE_SERVICE = f"{TRACE_PACKAGE}.TraceService"


def _message(file: descriptor_pb2.FileDescriptorProto, name: str):
    return file.message_type.add(name=name)


def _field(
    message: descriptor_pb2.DescriptorProto,
    name: str,
    number: int,
    type_: int,
    type_name: str = "",
    repeated: bool = False,
    oneof_index=None,
) -> None:
    field = message.field.add(
        name=name,
        number=number,
        type=type_,
        label=_F.LABEL_REPEATED if repeated else _F.LABEL_OPTIONAL,
    )
    if type_name:
        field.type_name = type_name
    if oneof_index is not None:
        field.oneof_index = oneof_index


def _enum(message: descriptor_pb2.DescriptorProto, name: str, values: list[str]) -> None:
    enum = message.enum_type.add(name=name)
    for number, value in enumerate(values):
        enum.value.add(name=value, number=number)


def _common_file() -> descriptor_pb2.FileDescriptorProto:
    f = descriptor_pb2.FileDescriptorProto(
        name="banyandb/common/v1/common.proto",
        package=COMMON_PACKAGE,
        syntax="proto3",
    )
    metadata = _message(f, "Metadata")
    _field(metadata, "group", 1, _F.TYPE_STRING)
    _field(metadata, "name", 2, _F.TYPE_STRING)
    return f


def _model_file() -> descriptor_pb2.FileDescriptorProto:
    m = f".{MODEL_PACKAGE}"
    f = descriptor_pb2.FileDescriptorProto(
        name="banyandb/model/v1/query.proto",
        package=MODEL_PACKAGE,
        syntax="proto3",
        dependency=["google/protobuf/struct.proto", "google/protobuf/timestamp.proto"],
    )

    _field(_message(f, "Str"), "value", 1, _F.TYPE_STRING)
    _field(_message(f, "Int"), "value", 1, _F.TYPE_INT64)
    _field(_message(f, "StrArray"), "value", 1, _F.TYPE_STRING, repeated=True)
    _field(_message(f, "IntArray"), "value", 1, _F.TYPE_INT64, repeated=True)

    tag_value = _message(f, "TagValue")
    tag_value.oneof_decl.add(name="value")
    _field(tag_value, "null", 1, _F.TYPE_ENUM, ".google.protobuf.NullValue", oneof_index=0)
    _field(tag_value, "str", 2, _F.TYPE_MESSAGE, f"{m}.Str", oneof_index=0)
    _field(tag_value, "str_array", 3, _F.TYPE_MESSAGE, f"{m}.StrArray", oneof_index=0)
    _field(tag_value, "int", 4, _F.TYPE_MESSAGE, f"{m}.Int", oneof_index=0)
    _field(tag_value, "int_array", 5, _F.TYPE_MESSAGE, f"{m}.IntArray", oneof_index=0)
    _field(tag_value, "binary_data", 6, _F.TYPE_BYTES, oneof_index=0)

    tag = _message(f, "Tag")
    _field(tag, "key", 1, _F.TYPE_STRING)
    _field(tag, "value", 2, _F.TYPE_MESSAGE, f"{m}.TagValue")

    pair_query = _message(f, "PairQuery")
    _enum(
        pair_query,
        "BinaryOp",
        [
            "BINARY_OP_UNSPECIFIED",
            "BINARY_OP_EQ",
            "BINARY_OP_NE",
            "BINARY_OP_LT",
            "BINARY_OP_GT",
            "BINARY_OP_LE",
            "BINARY_OP_GE",
            "BINARY_OP_HAVING",
            "BINARY_OP_NOT_HAVING",
        ],
    )
    _field(pair_query, "op", 1, _F.TYPE_ENUM, f"{m}.PairQuery.BinaryOp")
    _field(pair_query, "condition", 2, _F.TYPE_MESSAGE, f"{m}.Tag")

    query_order = _message(f, "QueryOrder")
    _enum(query_order, "Sort", ["SORT_UNSPECIFIED", "SORT_DESC", "SORT_ASC"])
    _field(query_order, "key_name", 1, _F.TYPE_STRING)
    _field(query_order, "sort", 2, _F.TYPE_ENUM, f"{m}.QueryOrder.Sort")

    _field(_message(f, "Projection"), "key_names", 1, _F.TYPE_STRING, repeated=True)

    time_range = _message(f, "TimeRange")
    _field(time_range, "begin", 1, _F.TYPE_MESSAGE, ".google.protobuf.Timestamp")
    _field(time_range, "end", 2, _F.TYPE_MESSAGE, ".google.protobuf.Timestamp")
    return f


def _trace_file() -> descriptor_pb2.FileDescriptorProto:
    m = f".{MODEL_PACKAGE}"
    t = f".{TRACE_PACKAGE}"
    f = descriptor_pb2.FileDescriptorProto(
        name="banyandb/trace/v1/trace.proto",
        package=TRACE_PACKAGE,
        syntax="proto3",
        dependency=[
            "google/protobuf/timestamp.proto",
            "banyandb/common/v1/common.proto",
            "banyandb/model/v1/query.proto",
        ],
    )

    entity = _message(f, "Entity")
    _field(entity, "entity_id", 1, _F.TYPE_STRING)
    _field(entity, "timestamp", 2, _F.TYPE_MESSAGE, ".google.protobuf.Timestamp")
    _field(entity, "data_binary", 3, _F.TYPE_BYTES)
    _field(entity, "fields", 4, _F.TYPE_MESSAGE, f"{m}.Tag", repeated=True)

    request = _message(f, "QueryRequest")
    _field(request, "metadata", 1, _F.TYPE_MESSAGE, f".{COMMON_PACKAGE}.Metadata")
    _field(request, "time_range", 2, _F.TYPE_MESSAGE, f"{m}.TimeRange")
    _field(request, "offset", 3, _F.TYPE_UINT32)
    _field(request, "limit", 4, _F.TYPE_UINT32)
    _field(request, "order_by", 5, _F.TYPE_MESSAGE, f"{m}.QueryOrder")
    _field(request, "fields", 6, _F.TYPE_MESSAGE, f"{m}.PairQuery", repeated=True)
    _field(request, "projection", 7, _F.TYPE_MESSAGE, f"{m}.Projection")

    _field(_message(f, "QueryResponse"), "entities", 1, _F.TYPE_MESSAGE, f"{t}.Entity", repeated=True)

    entity_value = _message(f, "EntityValue")
    _field(entity_value, "entity_id", 1, _F.TYPE_STRING)
    _field(entity_value, "timestamp", 2, _F.TYPE_MESSAGE, ".google.protobuf.Timestamp")
    _field(entity_value, "data_binary", 3, _F.TYPE_BYTES)
    _field(entity_value, "fields", 4, _F.TYPE_MESSAGE, f"{m}.TagValue", repeated=True)

    write_request = _message(f, "WriteRequest")
    _field(write_request, "metadata", 1, _F.TYPE_MESSAGE, f".{COMMON_PACKAGE}.Metadata")
    _field(write_request, "entity", 2, _F.TYPE_MESSAGE, f"{t}.EntityValue")

    _message(f, "WriteResponse")

    service = f.service.add(name="TraceService")
    service.method.add(
        name="Query",
        input_type=f"{t}.QueryRequest",
        output_type=f"{t}.QueryResponse",
    )
    service.method.add(
        name="Write",
        input_type=f"{t}.WriteRequest",
        output_type=f"{t}.WriteResponse",
        client_streaming=True,
        server_streaming=True,
    )
    return f


_pool = descriptor_pool.Default()
for _file in (_common_file(), _model_file(), _trace_file()):
    _pool.AddSerializedFile(_file.SerializeToString())


def _message_class(full_name: str):
    return message_factory.GetMessageClass(_pool.FindMessageTypeByName(full_name))


# banyandb.common.v1
Metadata = _message_class(f"{COMMON_PACKAGE}.Metadata")

# banyandb.model.v1
Str = _message_class(f"{MODEL_PACKAGE}.Str")
Int = _message_class(f"{MODEL_PACKAGE}.Int")
StrArray = _message_class(f"{MODEL_PACKAGE}.StrArray")
IntArray = _message_class(f"{MODEL_PACKAGE}.IntArray")
TagValue = _message_class(f"{MODEL_PACKAGE}.TagValue")
Tag = _message_class(f"{MODEL_PACKAGE}.Tag")
PairQuery = _message_class(f"{MODEL_PACKAGE}.PairQuery")
QueryOrder = _message_class(f"{MODEL_PACKAGE}.QueryOrder")
Projection = _message_class(f"{MODEL_PACKAGE}.Projection")
TimeRange = _message_class(f"{MODEL_PACKAGE}.TimeRange")

# banyandb.trace.v1
Entity = _message_class(f"{TRACE_PACKAGE}.Entity")
QueryRequest = _message_class(f"{TRACE_PACKAGE}.QueryRequest")
QueryResponse = _message_class(f"{TRACE_PACKAGE}.QueryResponse")
EntityValue = _message_class(f"{TRACE_PACKAGE}.EntityValue")
WriteRequest = _message_class(f"{TRACE_PACKAGE}.WriteRequest")
WriteResponse = _message_class(f"{TRACE_PACKAGE}.WriteResponse")
