"""In-process TraceService for tests and local development.

MockTraceServer runs a real gRPC server on a loopback port, so clients
under test go through genuine channels, deadlines and cancellation.
"""

import threading
from concurrent import futures
from datetime import datetime
from typing import Iterable, Optional, Union

import grpc
from google.protobuf.timestamp_pb2 import Timestamp
from grpc_health.v1 import health, health_pb2, health_pb2_grpc

from .client import BanyanDBClient
from .log import get_logger
from .options import Options
from .proto.banyandb import (
    TRACE_SERVICE,
    Entity,
    QueryResponse,
    TraceServiceServicer,
    WriteResponse,
    add_TraceServiceServicer_to_server,
)
from .tag import PythonTagValue, TagAndValue, tag_pair

logger = get_logger(__name__)


def make_entity(
    entity_id: str,
    tags: Iterable[tuple[str, Union[PythonTagValue, TagAndValue]]] = (),
    timestamp: Optional[datetime] = None,
    binary: bytes = b"",
) -> Entity:
    """Build a wire Entity from (name, value) pairs."""
    entity = Entity(entity_id=entity_id, data_binary=binary)
    if timestamp is not None:
        ts = Timestamp()
        ts.FromDatetime(timestamp)
        entity.timestamp.CopyFrom(ts)
    for name, value in tags:
        pair = value if isinstance(value, TagAndValue) else tag_pair(name, value)
        entity.fields.append(pair.to_tag())
    return entity


class MockTraceService(TraceServiceServicer):
    """Canned TraceService that records what it receives.

    Attributes:
        entities: Returned by every Query.
        delay: Seconds Query sleeps before answering.
        abort_code: If set, Query aborts with this status instead of answering.
        queries: Every QueryRequest received.
        writes: Every WriteRequest received.
    """

    def __init__(self, entities: Iterable[Entity] = ()):
        self.entities = list(entities)
        self.delay = 0.0
        self.abort_code: Optional[grpc.StatusCode] = None
        self.queries = []
        self.writes = []
        self._lock = threading.Lock()
        self._released = threading.Event()

    def release(self) -> None:
        """Wake any Query that is still sleeping."""
        self._released.set()

    def Query(self, request, context: grpc.ServicerContext) -> QueryResponse:
        with self._lock:
            self.queries.append(request)
        if self.delay:
            self._released.wait(self.delay)
        if self.abort_code is not None:
            context.abort(self.abort_code, "mock failure")
        return QueryResponse(entities=self.entities)

    def Write(self, request_iterator, context: grpc.ServicerContext):
        for request in request_iterator:
            with self._lock:
                self.writes.append(request)
            yield WriteResponse()


class MockTraceServer:
    """A gRPC server hosting a MockTraceService plus health checking."""

    def __init__(
        self,
        service: Optional[MockTraceService] = None,
        host: str = "127.0.0.1",
        port: int = 0,
        max_workers: int = 10,
    ):
        self.service = service or MockTraceService()
        self.host = host
        self._server = grpc.server(futures.ThreadPoolExecutor(max_workers=max_workers))

        add_TraceServiceServicer_to_server(self.service, self._server)

        health_servicer = health.HealthServicer()
        health_pb2_grpc.add_HealthServicer_to_server(health_servicer, self._server)
        health_servicer.set("", health_pb2.HealthCheckResponse.SERVING)
        health_servicer.set(TRACE_SERVICE, health_pb2.HealthCheckResponse.SERVING)

        self.port = self._server.add_insecure_port(f"{host}:{port}")

    @property
    def address(self) -> str:
        return f"{self.host}:{self.port}"

    def start(self) -> "MockTraceServer":
        self._server.start()
        logger.info("mock_server_started", address=self.address)
        return self

    def stop(self, grace: Optional[float] = None) -> None:
        self.service.release()
        self._server.stop(grace).wait()
        logger.info("mock_server_stopped", address=self.address)

    def __enter__(self) -> "MockTraceServer":
        return self.start()

    def __exit__(self, *exc) -> None:
        self.stop()

    def client(self, group: str, options: Optional[Options] = None) -> BanyanDBClient:
        """Return an unconnected client pointed at this server."""
        return BanyanDBClient(self.host, self.port, group, options)
