"""Authentication for the runners API."""

from .oauth import ClientCredentialsAuth, TokenResponse

__all__ = ["ClientCredentialsAuth", "TokenResponse"]
