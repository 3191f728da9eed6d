"""Bitbucket Runners - Client for the workspace pipelines runners API.

Lists, fetches, creates, deletes and changes the status of self-hosted
runners, raising classified errors for transport, status and decode failures.
"""

from bitbucket_runners.client import RunnerClient, new_runner_client, runner_client_from_config
from bitbucket_runners.errors import (
    BodyReadError,
    DecodeError,
    RunnerClientError,
    StatusError,
    TransportError,
)
from bitbucket_runners.models import Runner, RunnerList, State

__version__ = "0.1.0"
__all__ = [
    "__version__",
    "RunnerClient",
    "new_runner_client",
    "runner_client_from_config",
    "Runner",
    "RunnerList",
    "State",
    "RunnerClientError",
    "TransportError",
    "BodyReadError",
    "StatusError",
    "DecodeError",
]
