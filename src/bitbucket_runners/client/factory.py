"""Builders for authenticated runner clients."""

from collections.abc import Iterable

from bitbucket_runners.auth import ClientCredentialsAuth
from bitbucket_runners.config import RunnerClientConfig
from bitbucket_runners.transport import HttpxTransport

from .client import RunnerClient


def new_runner_client(
    workspace_uuid: str,
    base_url: str,
    access_token_url: str,
    client_id: str,
    client_secret: str,
    *,
    scopes: Iterable[str] = (),
    timeout: float = 30.0,
) -> RunnerClient:
    """Create a RunnerClient that authenticates with client credentials.

    The returned client's transport owns its ``httpx.Client``; close it with
    ``client.transport.close()`` when done.

    Args:
        workspace_uuid: Workspace identifier
        base_url: API base URL
        access_token_url: OAuth2 token endpoint
        client_id: OAuth consumer key
        client_secret: OAuth consumer secret
        scopes: Optional OAuth scopes
        timeout: Request timeout in seconds

    Returns:
        RunnerClient instance
    """
    auth = ClientCredentialsAuth(
        token_url=access_token_url,
        client_id=client_id,
        client_secret=client_secret,
        scopes=scopes,
    )
    transport = HttpxTransport(timeout=timeout, auth=auth)
    return RunnerClient(transport, base_url, workspace_uuid)


def runner_client_from_config(config: RunnerClientConfig) -> RunnerClient:
    """Create a RunnerClient from loaded configuration."""
    return new_runner_client(
        workspace_uuid=config.workspace_uuid,
        base_url=config.base_url,
        access_token_url=config.oauth.token_url,
        client_id=config.oauth.client_id,
        client_secret=config.oauth.client_secret,
        scopes=config.oauth.scopes,
        timeout=config.http.timeout,
    )
