"""Unit tests for the client exception hierarchy."""

import pytest

from client.exceptions import (
    APIError,
    ConflictError,
    ConnectionError,
    FileManagerClientError,
    NotFoundError,
    ServerError,
    TimeoutError,
    ValidationError,
)


class TestHierarchy:
    @pytest.mark.parametrize(
        "error_cls", [ValidationError, NotFoundError, ConflictError, ServerError]
    )
    def test_api_errors(self, error_cls):
        error = error_cls(message="x", status_code=400)
        assert isinstance(error, APIError)
        assert isinstance(error, FileManagerClientError)

    def test_transport_errors_are_not_api_errors(self):
        assert not isinstance(ConnectionError("x"), APIError)
        assert not isinstance(TimeoutError("x"), APIError)
        assert isinstance(ConnectionError("x"), FileManagerClientError)

    def test_distinct_from_builtins(self):
        import builtins

        assert ConnectionError is not builtins.ConnectionError
        assert not issubclass(TimeoutError, builtins.TimeoutError)


class TestStringRepresentations:
    def test_base(self):
        assert str(FileManagerClientError("broken")) == "broken"

    def test_connection_with_url(self):
        error = ConnectionError("Failed", url="http://test/health")
        assert str(error) == "Failed (url: http://test/health)"

    def test_timeout(self):
        assert str(TimeoutError("Slow", timeout=5.0)) == "Slow (timeout: 5.0s)"
        assert str(TimeoutError("Slow")) == "Slow"

    def test_api_error_with_type(self):
        error = ConflictError(
            message="taken", status_code=409, error_type="PathCollisionError"
        )
        assert str(error) == "[HTTP 409] [PathCollisionError] taken"

    def test_api_error_without_type(self):
        assert str(APIError(message="teapot", status_code=418)) == "[HTTP 418] teapot"

    def test_attributes(self):
        error = NotFoundError(
            message="gone",
            status_code=404,
            details={"node_id": "x"},
            response_body={"detail": "gone"},
        )
        assert error.details == {"node_id": "x"}
        assert error.response_body == {"detail": "gone"}
