"""Client and server classes for the banyandb.trace.v1.TraceService."""

import grpc

from ._schema import (
    TRACE_SERVICE,
    QueryRequest,
    QueryResponse,
    WriteRequest,
    WriteResponse,
)


class TraceServiceStub:
    """Stub for TraceService.

    The same stub serves blocking calls (``stub.Query(req, timeout=...)``)
    and non-blocking ones (``stub.Query.future(...)``, ``stub.Write(iter)``).
    """

    def __init__(self, channel: grpc.Channel):
        self.Query = channel.unary_unary(
            f"/{TRACE_SERVICE}/Query",
            request_serializer=QueryRequest.SerializeToString,
            response_deserializer=QueryResponse.FromString,
        )
        self.Write = channel.stream_stream(
            f"/{TRACE_SERVICE}/Write",
            request_serializer=WriteRequest.SerializeToString,
            response_deserializer=WriteResponse.FromString,
        )


class TraceServiceServicer:
    """Base class for TraceService implementations."""

    def Query(self, request, context):
        context.set_code(grpc.StatusCode.UNIMPLEMENTED)
        context.set_details("Method not implemented!")
        raise NotImplementedError("Method not implemented!")

    def Write(self, request_iterator, context):
        context.set_code(grpc.StatusCode.UNIMPLEMENTED)
        context.set_details("Method not implemented!")
        raise NotImplementedError("Method not implemented!")


def add_TraceServiceServicer_to_server(servicer: TraceServiceServicer, server: grpc.Server) -> None:
    rpc_method_handlers = {
        "Query": grpc.unary_unary_rpc_method_handler(
            servicer.Query,
            request_deserializer=QueryRequest.FromString,
            response_serializer=QueryResponse.SerializeToString,
        ),
        "Write": grpc.stream_stream_rpc_method_handler(
            servicer.Write,
            request_deserializer=WriteRequest.FromString,
            response_serializer=WriteResponse.SerializeToString,
        ),
    }
    generic_handler = grpc.method_handlers_generic_handler(TRACE_SERVICE, rpc_method_handlers)
    server.add_generic_rpc_handlers((generic_handler,))
