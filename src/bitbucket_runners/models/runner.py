"""Runner resource models.

Read models mirror what the pipelines-config API returns. Write models carry
only the fields a caller may set; identifiers and server-assigned fields are
never sent.
"""

from typing import Self

from pydantic import BaseModel, ConfigDict, Field, model_validator

from .common import Timestamp


# ─────────────────────────────────────────────────────────────────
# Read models
# ─────────────────────────────────────────────────────────────────


class State(BaseModel):
    """Runner state as reported by the server."""

    model_config = ConfigDict(frozen=True)

    status: str = Field(description="Runner status, e.g. UNREGISTERED, ONLINE, DISABLED")
    updated_on: Timestamp = Field(description="Time of the last status change")
    cordoned: bool = Field(default=False, description="Excluded from scheduling by the server")


class OauthClient(BaseModel):
    """Credentials the server issued for the runner itself."""

    model_config = ConfigDict(frozen=True)

    id: str = ""
    token_endpoint: str = ""
    audience: str = ""


class Runner(BaseModel):
    """A self-hosted runner."""

    model_config = ConfigDict(frozen=True)

    uuid: str = Field(min_length=1, description="Server-assigned identifier")
    name: str = Field(default="", description="Human-readable runner name")
    labels: tuple[str, ...] = Field(default=(), description="Labels in wire order")
    state: State
    oauth_client: OauthClient = Field(default_factory=OauthClient)
    created_on: Timestamp
    updated_on: Timestamp

    @model_validator(mode="after")
    def _check_timestamps(self) -> Self:
        if self.updated_on < self.created_on:
            raise ValueError("updated_on is earlier than created_on")
        return self


class RunnerList(BaseModel):
    """One page of runners."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    page: int = Field(default=1, ge=1)
    size: int = Field(default=0, ge=0, description="Total count reported by the server")
    page_length: int = Field(default=0, ge=0, alias="pagelen")
    values: tuple[Runner, ...] = ()


# ─────────────────────────────────────────────────────────────────
# Write models
# ─────────────────────────────────────────────────────────────────


class PostRunnerRequest(BaseModel):
    """Body of a create-runner call."""

    name: str
    labels: list[str] = Field(default_factory=list)


class StatusUpdateRequest(BaseModel):
    """Body of a status transition call."""

    status: str
