"""Error types for the BanyanDB client library."""

from typing import Optional

import grpc


class ClientError(Exception):
    """Base class for client errors."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message)
        self.message = message
        self.cause = cause

    def __str__(self) -> str:
        if self.cause:
            return f"{self.message}: {self.cause}"
        return self.message


class ConnectionError(ClientError):
    """Failed to establish connection to the server, or none is active."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(f"connection failed: {message}", cause)


class RemoteCallError(ClientError):
    """A query or write call against the server failed."""

    def __init__(self, message: str, cause: Optional[Exception] = None):
        super().__init__(message, cause)

    @property
    def code(self) -> Optional[grpc.StatusCode]:
        """Return the gRPC status code, or None if the call never reached gRPC."""
        # grpc raises errors that are also grpc.Call, which carries the status
        if isinstance(self.cause, grpc.RpcError) and hasattr(self.cause, "code"):
            return self.cause.code()
        return None

    @property
    def details(self) -> str:
        """Return the error details."""
        if isinstance(self.cause, grpc.RpcError) and hasattr(self.cause, "details"):
            return self.cause.details() or ""
        return ""

    def is_deadline_exceeded(self) -> bool:
        """Return True if the call ran out of time."""
        return self.code == grpc.StatusCode.DEADLINE_EXCEEDED

    def is_cancelled(self) -> bool:
        """Return True if the call was cancelled, e.g. by closing the client."""
        return self.code == grpc.StatusCode.CANCELLED

    def is_unavailable(self) -> bool:
        """Return True if the server could not be reached."""
        return self.code == grpc.StatusCode.UNAVAILABLE


class UnrecognizedVariantError(ClientError):
    """A tag value used a oneof case this client does not know.

    Seen only when client and server disagree on the schema version.
    """

    def __init__(self, tag_name: str, variant: Optional[str]):
        super().__init__(
            f"unrecognized tag value variant {variant or '<unset>'} for tag {tag_name!r}"
        )
        self.tag_name = tag_name
        self.variant = variant


class InvalidArgumentError(ClientError):
    """Invalid argument provided by caller."""

    def __init__(self, message: str):
        super().__init__(f"invalid argument: {message}")
