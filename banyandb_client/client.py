"""BanyanDB client built on the v1 trace gRPC API."""

import os
import threading
from typing import Callable, NamedTuple, Optional

import grpc

from .errors import ConnectionError, InvalidArgumentError, RemoteCallError
from .log import get_logger
from .options import Options
from .proto.banyandb import TraceServiceStub
from .query import TraceQuery
from .response import TraceQueryResponse
from .write import TraceBulkWriteProcessor

logger = get_logger(__name__)

DEFAULT_ADDRESS = "localhost:17912"
ENV_ADDRESS = "BANYANDB_ADDRESS"

# Seconds close() lets in-flight calls finish before the channel is torn down.
SHUTDOWN_GRACE_SECONDS = 5

ChannelFactory = Callable[..., grpc.Channel]


class _Connection(NamedTuple):
    channel: grpc.Channel
    stub: TraceServiceStub


class BanyanDBClient:
    """A client for one BanyanDB server and group.

    The client owns at most one channel. ``connect()`` and ``close()`` are
    serialized by a single lock and are both idempotent, so they are safe to
    call from any thread. Queries do not take that lock; any number may run
    concurrently on a connected client.
    """

    def __init__(
        self,
        host: str,
        port: int,
        group: str,
        options: Optional[Options] = None,
        channel_factory: Optional[ChannelFactory] = None,
    ):
        self.host = host
        self.port = port
        self.group = group
        self.options = options or Options()
        self._channel_factory = channel_factory or grpc.insecure_channel
        self._lock = threading.RLock()
        self._connection: Optional[_Connection] = None
        self._inflight = 0
        self._inflight_cond = threading.Condition()

    @classmethod
    def from_env(
        cls,
        group: str,
        env_var: str = ENV_ADDRESS,
        default: str = DEFAULT_ADDRESS,
        options: Optional[Options] = None,
    ) -> "BanyanDBClient":
        """Create a client from a ``host:port`` environment variable with fallback."""
        address = os.environ.get(env_var, default)
        host, sep, port = address.rpartition(":")
        if not sep or not host or not port.isdigit():
            raise InvalidArgumentError(f"{env_var}={address!r} is not host:port")
        return cls(host.strip("[]"), int(port), group, options or Options.from_env())

    @property
    def target(self) -> str:
        """The gRPC target string for the configured endpoint."""
        if ":" in self.host:
            return f"[{self.host}]:{self.port}"
        return f"{self.host}:{self.port}"

    @property
    def is_connected(self) -> bool:
        return self._connection is not None

    def __enter__(self) -> "BanyanDBClient":
        self.connect()
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    def connect(self) -> None:
        """Open a plaintext channel to the server.

        Blocks until the channel is ready or ``options.connect_timeout``
        elapses. A no-op when already connected.

        Raises:
            ConnectionError: the channel could not be made ready.
        """
        with self._lock:
            if self._connection is not None:
                return
            channel = self._channel_factory(
                self.target, options=self.options.channel_options()
            )
            try:
                grpc.channel_ready_future(channel).result(
                    timeout=self.options.connect_timeout
                )
            except grpc.FutureTimeoutError as e:
                channel.close()
                raise ConnectionError(
                    f"{self.target} not ready after {self.options.connect_timeout}s", e
                ) from e
            self._publish(channel)

    def connect_channel(self, channel: grpc.Channel) -> None:
        """Adopt an existing channel, e.g. one to an in-process server.

        The client owns the channel afterwards and closes it in close().
        A no-op when already connected.
        """
        with self._lock:
            if self._connection is not None:
                return
            self._publish(channel)

    def _publish(self, channel: grpc.Channel) -> None:
        connection = _Connection(channel=channel, stub=TraceServiceStub(channel))
        with self._inflight_cond:
            self._connection = connection
        logger.info("channel_connected", target=self.target, group=self.group)

    def close(self) -> None:
        """Close the channel, letting in-flight calls drain first.

        Waits up to SHUTDOWN_GRACE_SECONDS for running calls to finish, then
        closes the channel, which cancels anything still running. A no-op
        when not connected.
        """
        with self._lock:
            with self._inflight_cond:
                connection = self._connection
                if connection is None:
                    return
                self._connection = None
                drained = self._inflight_cond.wait_for(
                    lambda: self._inflight == 0, timeout=SHUTDOWN_GRACE_SECONDS
                )
            if not drained:
                logger.warning(
                    "channel_drain_timeout",
                    target=self.target,
                    inflight=self._inflight,
                    grace_seconds=SHUTDOWN_GRACE_SECONDS,
                )
            connection.channel.close()
            logger.info("channel_closed", target=self.target, group=self.group)

    def _acquire(self) -> _Connection:
        with self._inflight_cond:
            connection = self._connection
            if connection is None:
                raise RemoteCallError("client is not connected")
            self._inflight += 1
            return connection

    def _release(self) -> None:
        with self._inflight_cond:
            self._inflight -= 1
            self._inflight_cond.notify_all()

    def query_traces(self, query: TraceQuery) -> TraceQueryResponse:
        """Run a trace query bounded by ``options.deadline``.

        Raises:
            RemoteCallError: not connected, deadline exceeded, call cancelled
                by close(), or the server failed the call.
            UnrecognizedVariantError: the response holds a tag value this
                client cannot decode.
        """
        request = query.build(self.group)
        connection = self._acquire()
        try:
            response = connection.stub.Query(request, timeout=self.options.deadline)
        except grpc.RpcError as e:
            raise RemoteCallError(f"query {query.name!r} failed", e) from e
        except ValueError as e:
            # grpc raises ValueError when invoked on a closed channel
            raise RemoteCallError(f"query {query.name!r} failed", e) from e
        finally:
            self._release()
        return TraceQueryResponse(response)

    def build_trace_write_processor(
        self, max_bulk_size: int, flush_interval: float, concurrency: int
    ) -> TraceBulkWriteProcessor:
        """Create a bulk write processor bound to the current connection.

        Args:
            max_bulk_size: Flush once this many writes are buffered.
            flush_interval: Seconds after which a partial batch is flushed anyway.
            concurrency: Maximum number of flushes in flight at once.

        Raises:
            ConnectionError: the client is not connected.
        """
        connection = self._connection
        if connection is None:
            raise ConnectionError("client is not connected")
        return TraceBulkWriteProcessor(
            self.group,
            connection.stub,
            max_bulk_size,
            flush_interval,
            concurrency,
            timeout=self.options.deadline,
        )
