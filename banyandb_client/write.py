"""Batched trace writes.

TraceBulkWriteProcessor buffers TraceWrite items and ships them to the
server as ``TraceService/Write`` streams. A batch is flushed when it reaches
``max_bulk_size`` items or when ``flush_interval`` seconds pass, whichever
comes first. At most ``concurrency`` streams are open at once; further
batches queue behind them.
"""

import threading
from concurrent.futures import Future, ThreadPoolExecutor
from datetime import datetime
from typing import Iterable, Optional, Union

import grpc
from google.protobuf.timestamp_pb2 import Timestamp

from .errors import InvalidArgumentError, RemoteCallError
from .log import get_logger
from .proto.banyandb import EntityValue, Metadata, TraceServiceStub, WriteRequest
from .tag import PythonTagValue, TagAndValue, tag_value

logger = get_logger(__name__)


class TraceWrite:
    """One trace entity to be written.

    ``fields`` are positional, in the order the trace schema declares them.
    They are encoded here, so an unsupported value raises
    InvalidArgumentError before the write reaches a batch.
    """

    def __init__(
        self,
        name: str,
        entity_id: str,
        timestamp: datetime,
        binary: bytes = b"",
        fields: Iterable[Union[PythonTagValue, TagAndValue]] = (),
    ):
        if not name:
            raise InvalidArgumentError("trace name must not be empty")
        if not entity_id:
            raise InvalidArgumentError("entity_id must not be empty")
        self.name = name
        self.entity_id = entity_id
        self.timestamp = timestamp
        self.binary = binary
        self.fields = [tag_value(f) for f in fields]

    def build(self, group: str) -> WriteRequest:
        """Compile into a wire WriteRequest for ``group``."""
        ts = Timestamp()
        ts.FromDatetime(self.timestamp)
        entity = EntityValue(
            entity_id=self.entity_id,
            timestamp=ts,
            data_binary=self.binary,
            fields=self.fields,
        )
        return WriteRequest(metadata=Metadata(group=group, name=self.name), entity=entity)


class TraceBulkWriteProcessor:
    """Buffers trace writes and flushes them in bulk on a worker pool."""

    def __init__(
        self,
        group: str,
        stub: TraceServiceStub,
        max_bulk_size: int,
        flush_interval: float,
        concurrency: int,
        timeout: Optional[float] = None,
    ):
        if max_bulk_size <= 0:
            raise InvalidArgumentError(f"max_bulk_size must be positive, got {max_bulk_size}")
        if flush_interval <= 0:
            raise InvalidArgumentError(f"flush_interval must be positive, got {flush_interval}")
        if concurrency <= 0:
            raise InvalidArgumentError(f"concurrency must be positive, got {concurrency}")
        self._group = group
        self._stub = stub
        self._max_bulk_size = max_bulk_size
        self._flush_interval = flush_interval
        self._timeout = timeout

        self._lock = threading.Lock()
        self._buffer: list[TraceWrite] = []
        self._closed = False
        self._stop = threading.Event()
        self._executor = ThreadPoolExecutor(
            max_workers=concurrency, thread_name_prefix="banyandb-trace-write"
        )
        self._timer = threading.Thread(
            target=self._run, name="banyandb-trace-flush", daemon=True
        )
        self._timer.start()

    def __enter__(self) -> "TraceBulkWriteProcessor":
        return self

    def __exit__(self, *exc) -> None:
        self.close()

    @property
    def pending(self) -> int:
        """Number of buffered writes not yet handed to a flush."""
        with self._lock:
            return len(self._buffer)

    def add(self, write: TraceWrite) -> None:
        """Buffer a write, flushing if the batch is full."""
        with self._lock:
            if self._closed:
                raise InvalidArgumentError("write processor is closed")
            self._buffer.append(write)
            if len(self._buffer) < self._max_bulk_size:
                return
            self._submit(self._drain())

    def flush(self) -> Future:
        """Flush whatever is buffered.

        Returns a Future resolving to the number of writes sent, or raising
        RemoteCallError if the stream failed.
        """
        with self._lock:
            return self._submit(self._drain())

    def close(self) -> None:
        """Stop the timer, flush the remainder and wait for open streams."""
        with self._lock:
            if self._closed:
                return
            self._closed = True
        self._stop.set()
        self._timer.join()
        # add() refuses new writes once closed and batches are submitted under
        # the lock, so nothing reaches the executor after this flush.
        self.flush()
        self._executor.shutdown(wait=True)

    # Both run under self._lock.
    def _drain(self) -> list[TraceWrite]:
        batch, self._buffer = self._buffer, []
        return batch

    def _submit(self, batch: list[TraceWrite]) -> Future:
        if not batch:
            done: Future = Future()
            done.set_result(0)
            return done
        future = self._executor.submit(self._send, batch)
        future.add_done_callback(self._report)
        return future

    def _send(self, batch: list[TraceWrite]) -> int:
        requests = [w.build(self._group) for w in batch]
        try:
            for _ in self._stub.Write(iter(requests), timeout=self._timeout):
                pass
        except grpc.RpcError as e:
            raise RemoteCallError("trace write failed", e) from e
        return len(requests)

    def _report(self, future: Future) -> None:
        error = future.exception()
        if error is not None:
            logger.warning("trace_write_failed", group=self._group, error=str(error))

    def _run(self) -> None:
        while not self._stop.wait(self._flush_interval):
            self.flush()
