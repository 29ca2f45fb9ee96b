"""Tests for error types."""

import grpc
import pytest

from banyandb_client.errors import (
    ClientError,
    ConnectionError,
    RemoteCallError,
    UnrecognizedVariantError,
    InvalidArgumentError,
)


class MockRpcError(grpc.RpcError):
    """Mock RpcError for testing.

    grpc.RpcError itself doesn't have code/details methods - those come
    from grpc.Call. Real gRPC errors inherit from both.
    """

    def __init__(self, code: grpc.StatusCode, details: str = ""):
        super().__init__()
        self._code = code
        self._details = details

    def code(self) -> grpc.StatusCode:
        return self._code

    def details(self) -> str:
        return self._details


class TestClientError:
    """Tests for the ClientError base class."""

    def test_message_only(self) -> None:
        """Error with message only."""
        err = ClientError("something went wrong")
        assert err.message == "something went wrong"
        assert err.cause is None
        assert str(err) == "something went wrong"

    def test_with_cause(self) -> None:
        """Error with underlying cause."""
        cause = ValueError("underlying issue")
        err = ClientError("wrapper", cause)
        assert err.cause is cause
        assert str(err) == "wrapper: underlying issue"


class TestConnectionError:
    """Tests for ConnectionError."""

    def test_message_formatting(self) -> None:
        """Connection error prefixes message."""
        err = ConnectionError("host unreachable")
        assert str(err) == "connection failed: host unreachable"
        assert err.cause is None

    def test_keeps_cause(self) -> None:
        cause = TimeoutError()
        err = ConnectionError("not ready", cause)
        assert err.cause is cause
        assert isinstance(err, ClientError)


class TestRemoteCallError:
    """Tests for RemoteCallError."""

    def test_code_and_details_from_rpc_error(self) -> None:
        """Status code and details are read from the wrapped RpcError."""
        err = RemoteCallError("query failed", MockRpcError(grpc.StatusCode.INTERNAL, "boom"))
        assert err.code == grpc.StatusCode.INTERNAL
        assert err.details == "boom"
        assert isinstance(err, ClientError)

    @pytest.mark.parametrize(
        "code,predicate",
        [
            (grpc.StatusCode.DEADLINE_EXCEEDED, "is_deadline_exceeded"),
            (grpc.StatusCode.CANCELLED, "is_cancelled"),
            (grpc.StatusCode.UNAVAILABLE, "is_unavailable"),
        ],
    )
    def test_status_predicates(self, code: grpc.StatusCode, predicate: str) -> None:
        err = RemoteCallError("failed", MockRpcError(code))
        assert getattr(err, predicate)()

    def test_without_rpc_cause(self) -> None:
        """Errors raised before reaching gRPC carry no status."""
        err = RemoteCallError("client is not connected")
        assert err.code is None
        assert err.details == ""
        assert not err.is_deadline_exceeded()
        assert str(err) == "client is not connected"


class TestUnrecognizedVariantError:
    """Tests for UnrecognizedVariantError."""

    def test_names_tag_and_variant(self) -> None:
        err = UnrecognizedVariantError("status", "float")
        assert err.tag_name == "status"
        assert err.variant == "float"
        assert "float" in str(err)
        assert "'status'" in str(err)

    def test_unset_variant(self) -> None:
        err = UnrecognizedVariantError("status", None)
        assert "<unset>" in str(err)


class TestInvalidArgumentError:
    """Tests for InvalidArgumentError."""

    def test_message_formatting(self) -> None:
        err = InvalidArgumentError("bad value")
        assert str(err) == "invalid argument: bad value"
