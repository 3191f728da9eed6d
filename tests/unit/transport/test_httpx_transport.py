"""Unit tests for HttpxTransport."""

import json

import httpx
import pytest

from bitbucket_runners.client import RunnerClient
from bitbucket_runners.errors import StatusError, TransportError
from bitbucket_runners.transport import HttpxTransport
from tests.mocks import BASE_URL, RUNNER_JSON, WORKSPACE_UUID


class RecordingHandler:
    """MockTransport handler that records requests and replies with a fixed response."""

    def __init__(self, status_code: int = 200, content: bytes = b"", raises: Exception | None = None):
        self.requests: list[httpx.Request] = []
        self._status_code = status_code
        self._content = content
        self._raises = raises

    def __call__(self, request: httpx.Request) -> httpx.Response:
        self.requests.append(request)
        if self._raises is not None:
            raise self._raises
        return httpx.Response(self._status_code, content=self._content)


def make_transport(handler: RecordingHandler) -> HttpxTransport:
    return HttpxTransport(httpx.Client(transport=httpx.MockTransport(handler)))


class TestHttpxTransportRequests:
    """Tests for the requests HttpxTransport sends."""

    def test_get(self):
        """Test GET is sent to the exact URL."""
        handler = RecordingHandler(200, b"ok")
        transport = make_transport(handler)

        response = transport.get("https://api.example.com/runners?pagelen=100")

        assert handler.requests[0].method == "GET"
        assert str(handler.requests[0].url) == "https://api.example.com/runners?pagelen=100"
        assert response.status_code == 200
        assert response.read() == b"ok"

    def test_post(self):
        """Test POST carries the body and content type."""
        handler = RecordingHandler(201)
        transport = make_transport(handler)

        transport.post("https://api.example.com/runners", "application/json", b'{"name":"r"}')

        request = handler.requests[0]
        assert request.method == "POST"
        assert request.headers["Content-Type"] == "application/json"
        assert request.content == b'{"name":"r"}'

    def test_execute(self):
        """Test a prepared request is sent unchanged."""
        handler = RecordingHandler(204)
        transport = make_transport(handler)

        request = httpx.Request("PUT", "https://api.example.com/state", content=b"{}")
        response = transport.execute(request)

        assert handler.requests[0].method == "PUT"
        assert handler.requests[0].content == b"{}"
        assert response.status_code == 204

    def test_transport_errors_propagate(self):
        """Test connection errors are raised as httpx errors."""
        handler = RecordingHandler(raises=httpx.ConnectError("connection refused"))
        transport = make_transport(handler)

        with pytest.raises(httpx.ConnectError, match="connection refused"):
            transport.get("https://api.example.com/")


class TestHttpxTransportLifecycle:
    """Tests for client ownership."""

    def test_wrapped_client_not_closed(self):
        """Test a caller-supplied client stays open."""
        client = httpx.Client(transport=httpx.MockTransport(RecordingHandler()))
        with HttpxTransport(client):
            pass
        assert client.is_closed is False
        client.close()

    def test_owned_client_closed(self):
        """Test a client built by the transport is closed with it."""
        transport = HttpxTransport(timeout=5.0)
        transport.close()
        assert transport._client.is_closed is True

    def test_timeout_applied(self):
        """Test the timeout reaches the owned client."""
        with HttpxTransport(timeout=7.5) as transport:
            assert transport._client.timeout == httpx.Timeout(7.5)


class TestRunnerClientOverHttpx:
    """End-to-end RunnerClient calls through HttpxTransport."""

    def test_create_runner(self):
        """Test create sends JSON and decodes the response."""
        handler = RecordingHandler(201, RUNNER_JSON.encode())
        client = RunnerClient(make_transport(handler), BASE_URL, WORKSPACE_UUID)

        runner = client.create_runner("a name", ["linux"])

        request = handler.requests[0]
        assert request.method == "POST"
        assert str(request.url) == f"{BASE_URL}/workspaces/{WORKSPACE_UUID}/pipelines-config/runners"
        assert json.loads(request.content) == {"name": "a name", "labels": ["linux"]}
        assert runner.name == "test"

    def test_set_runner_status(self):
        """Test status PUT goes through execute with a JSON header."""
        handler = RecordingHandler(200)
        client = RunnerClient(make_transport(handler), BASE_URL, WORKSPACE_UUID)

        client.set_runner_status("r1", "DISABLED")

        request = handler.requests[0]
        assert request.method == "PUT"
        assert request.url.path.endswith("/runners/r1/state")
        assert request.headers["Content-Type"] == "application/json"

    def test_delete_error_status(self):
        """Test a delete error carries the body text."""
        handler = RecordingHandler(404, b'{"error": "not found"}')
        client = RunnerClient(make_transport(handler), BASE_URL, WORKSPACE_UUID)

        with pytest.raises(StatusError) as exc_info:
            client.delete_runner("r1")

        assert exc_info.value.body == '{"error": "not found"}'

    def test_connection_failure(self):
        """Test a connection error surfaces as TransportError."""
        handler = RecordingHandler(raises=httpx.ConnectError("connection refused"))
        client = RunnerClient(make_transport(handler), BASE_URL, WORKSPACE_UUID)

        with pytest.raises(TransportError, match="connection refused"):
            client.list_runners()
