"""Runner resource client.

Maps the five runner operations onto HTTP requests and maps responses back
to models or to a classified RunnerClientError.
"""

from __future__ import annotations

import logging
from collections.abc import Callable, Collection, Iterable
from contextlib import closing
from typing import Any, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from bitbucket_runners.errors import create_error
from bitbucket_runners.models import (
    PostRunnerRequest,
    Runner,
    RunnerList,
    StatusUpdateRequest,
)
from bitbucket_runners.transport import HTTPTransport

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

CONTENT_TYPE_JSON = "application/json"

# Exceptions a transport raises when a request cannot be sent or read
_TRANSPORT_ERRORS = (httpx.HTTPError, OSError)


def describe_validation_error(error: ValidationError) -> str:
    """Flatten a pydantic error into one diagnostic line.

    Args:
        error: Validation error raised while decoding a body

    Returns:
        ``"<loc>: <msg>"`` entries joined with ``"; "``
    """
    parts = []
    for item in error.errors(include_url=False):
        loc = ".".join(str(part) for part in item["loc"])
        parts.append(f"{loc}: {item['msg']}" if loc else item["msg"])
    return "; ".join(parts)


def _is_retryable_status(status_code: int) -> bool:
    return status_code == 429 or status_code >= 500


class RunnerClient:
    """Client for the workspace runners API.

    Holds no state between calls besides its constructor arguments, so it is
    safe to share across threads when the transport is.
    """

    RUNNERS_PATH = "/workspaces/{workspace}/pipelines-config/runners"
    RUNNER_PATH = "/workspaces/{workspace}/pipelines-config/runners/{runner}"
    RUNNER_STATE_PATH = "/workspaces/{workspace}/pipelines-config/runners/{runner}/state"
    PAGELEN = 100

    def __init__(self, transport: HTTPTransport, base_url: str, workspace_uuid: str):
        """Initialize runner client.

        Args:
            transport: HTTP transport, usually already authenticating
            base_url: API base URL, used verbatim as the path prefix
            workspace_uuid: Workspace identifier embedded in every path
        """
        self._transport = transport
        self._base_url = base_url
        self._workspace_uuid = workspace_uuid

    @property
    def transport(self) -> HTTPTransport:
        """Transport this client sends through."""
        return self._transport

    @property
    def workspace_uuid(self) -> str:
        return self._workspace_uuid

    # ─────────────────────────────────────────────────────────────
    # Operations
    # ─────────────────────────────────────────────────────────────

    def list_runners(self) -> RunnerList:
        """Fetch the first page of runners.

        Returns:
            Decoded RunnerList

        Raises:
            TransportError: If the request could not be sent
            BodyReadError: If the response body could not be read
            StatusError: If the status is not 200
            DecodeError: If the body is not a valid runner list
        """
        operation = "list runners"
        url = self._url(self.RUNNERS_PATH) + f"?pagelen={self.PAGELEN}"

        response = self._send(operation, self._transport.get, url)
        with closing(response):
            body = self._read_body(response, operation)
            self._check_status(response, body, operation, "fetch runners", accepted={200})
            return self._decode(RunnerList, body, operation, "DECODE_FAILURE")

    def get_runner(self, runner_uuid: str) -> Runner:
        """Fetch a single runner.

        Args:
            runner_uuid: Runner identifier, embedded in the path as-is

        Returns:
            Decoded Runner

        Raises:
            TransportError: If the request could not be sent
            BodyReadError: If the response body could not be read
            StatusError: If the status is not 200
            DecodeError: If the body is not a valid runner
        """
        operation = "get runner"
        url = self._url(self.RUNNER_PATH, runner=runner_uuid)

        response = self._send(operation, self._transport.get, url)
        with closing(response):
            body = self._read_body(response, operation)
            self._check_status(response, body, operation, "fetch runner", accepted={200})
            return self._decode(Runner, body, operation, "DECODE_FAILURE")

    def delete_runner(self, runner_uuid: str) -> None:
        """Delete a runner.

        Success is exactly 204 and the body is not read. On any other status
        the body is read best-effort for the error message.

        Raises:
            TransportError: If the request could not be sent
            StatusError: If the status is not 204
        """
        operation = "delete runner"
        url = self._url(self.RUNNER_PATH, runner=runner_uuid)
        request = httpx.Request("DELETE", url)

        response = self._send(operation, self._transport.execute, request)
        with closing(response):
            if response.status_code == 204:
                logger.debug(f"Deleted runner {runner_uuid}")
                return
            body = self._read_body_best_effort(response, operation)
            self._check_status(response, body, operation, "delete runner", accepted={204})

    def create_runner(self, name: str, labels: Iterable[str]) -> Runner:
        """Create a runner.

        Args:
            name: Runner name
            labels: Runner labels, sent in the given order

        Returns:
            The created Runner, including its server-issued OAuth client

        Raises:
            TransportError: If the request could not be sent
            BodyReadError: If the response body could not be read
            StatusError: If the status is neither 200 nor 201
            DecodeError: If the body is not a valid runner
        """
        operation = "create runner"
        url = self._url(self.RUNNERS_PATH)
        payload = PostRunnerRequest(name=name, labels=list(labels))
        content = payload.model_dump_json().encode()

        response = self._send(operation, self._transport.post, url, CONTENT_TYPE_JSON, content)
        with closing(response):
            body = self._read_body(response, operation)
            self._check_status(response, body, operation, "create runner", accepted={200, 201})
            return self._decode(Runner, body, operation, "CREATE_DECODE_FAILURE")

    def set_runner_status(self, runner_uuid: str, status: str) -> None:
        """Transition a runner to a new status.

        Any 2xx status is success; 300 and above are failures. On failure
        the body is read best-effort for the error message.

        Args:
            runner_uuid: Runner identifier
            status: New status, passed to the server unvalidated

        Raises:
            TransportError: If the request could not be sent
            StatusError: If the status is outside 200-299
        """
        operation = "set runner status"
        url = self._url(self.RUNNER_STATE_PATH, runner=runner_uuid)
        payload = StatusUpdateRequest(status=status)
        request = httpx.Request(
            "PUT",
            url,
            content=payload.model_dump_json().encode(),
            headers={"Content-Type": CONTENT_TYPE_JSON},
        )

        response = self._send(operation, self._transport.execute, request)
        with closing(response):
            if 200 <= response.status_code < 300:
                logger.debug(f"Runner {runner_uuid} status set to {status}")
                return
            body = self._read_body_best_effort(response, operation)
            self._check_status(
                response, body, operation, "update runner status", accepted=range(200, 300)
            )

    # ─────────────────────────────────────────────────────────────
    # Helpers
    # ─────────────────────────────────────────────────────────────

    def _url(self, template: str, **params: str) -> str:
        return self._base_url + template.format(workspace=self._workspace_uuid, **params)

    def _send(
        self, operation: str, call: Callable[..., httpx.Response], *args: Any
    ) -> httpx.Response:
        """Invoke the transport, classifying failures as TransportError."""
        try:
            response = call(*args)
        except _TRANSPORT_ERRORS as e:
            logger.debug(f"{operation}: transport failure: {e}")
            raise create_error("TRANSPORT_FAILURE", cause=e, operation=operation) from e
        logger.debug(f"{operation}: status {response.status_code}")
        return response

    def _read_body(self, response: httpx.Response, operation: str) -> bytes:
        try:
            return response.read()
        except _TRANSPORT_ERRORS as e:
            raise create_error("BODY_READ_FAILURE", cause=e, operation=operation) from e

    def _read_body_best_effort(self, response: httpx.Response, operation: str) -> bytes:
        try:
            return response.read()
        except _TRANSPORT_ERRORS as e:
            logger.debug(f"{operation}: ignoring unreadable error body: {e}")
            return b""

    def _check_status(
        self,
        response: httpx.Response,
        body: bytes,
        operation: str,
        action: str,
        accepted: Collection[int],
    ) -> None:
        status_code = response.status_code
        if status_code in accepted:
            return
        raise create_error(
            "STATUS_ERROR",
            action=action,
            operation=operation,
            status_code=status_code,
            body=body.decode("utf-8", errors="replace"),
            retryable=_is_retryable_status(status_code),
        )

    def _decode(self, model: type[ModelT], body: bytes, operation: str, code: str) -> ModelT:
        try:
            return model.model_validate_json(body)
        except ValidationError as e:
            raise create_error(
                code, cause=e, operation=operation, reason=describe_validation_error(e)
            ) from e
