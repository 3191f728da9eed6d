"""Runner resource client."""

from .client import CONTENT_TYPE_JSON, RunnerClient, describe_validation_error
from .factory import new_runner_client, runner_client_from_config

__all__ = [
    "RunnerClient",
    "CONTENT_TYPE_JSON",
    "describe_validation_error",
    "new_runner_client",
    "runner_client_from_config",
]
