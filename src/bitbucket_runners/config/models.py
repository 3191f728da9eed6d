"""Runner client configuration data models."""

from dataclasses import dataclass, field
from enum import Enum


class LogLevel(str, Enum):
    """Log verbosity level."""

    DEBUG = "DEBUG"
    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"


class LogFormat(str, Enum):
    """Log output format."""

    JSON = "json"
    PLAIN = "plain"


@dataclass
class OAuthConfig:
    """OAuth consumer used for the client-credentials grant."""

    token_url: str = "https://bitbucket.org/site/oauth2/access_token"
    client_id: str = ""
    client_secret: str = ""
    scopes: list[str] = field(default_factory=list)


@dataclass
class HTTPConfig:
    """Transport settings."""

    timeout: float = 30.0


@dataclass
class LoggingConfig:
    """Logging configuration."""

    level: LogLevel = LogLevel.INFO
    format: LogFormat = LogFormat.JSON


@dataclass
class RunnerClientConfig:
    """Root configuration."""

    base_url: str = "https://api.bitbucket.org/internal"
    workspace_uuid: str = ""
    oauth: OAuthConfig = field(default_factory=OAuthConfig)
    http: HTTPConfig = field(default_factory=HTTPConfig)
    logging: LoggingConfig = field(default_factory=LoggingConfig)
