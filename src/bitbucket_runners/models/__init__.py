"""Runner API models."""

from .common import Timestamp
from .runner import (
    OauthClient,
    PostRunnerRequest,
    Runner,
    RunnerList,
    State,
    StatusUpdateRequest,
)

__all__ = [
    "Timestamp",
    # Read models
    "Runner",
    "RunnerList",
    "State",
    "OauthClient",
    # Write models
    "PostRunnerRequest",
    "StatusUpdateRequest",
]
