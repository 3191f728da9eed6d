"""Runner client configuration."""

from .loader import ConfigLoader, get_config_loader, load_config, resolve_env_vars
from .models import (
    HTTPConfig,
    LogFormat,
    LoggingConfig,
    LogLevel,
    OAuthConfig,
    RunnerClientConfig,
)
from .validation import ValidationIssue, ValidationResult

__all__ = [
    # Models
    "RunnerClientConfig",
    "OAuthConfig",
    "HTTPConfig",
    "LoggingConfig",
    "LogLevel",
    "LogFormat",
    # Loading
    "ConfigLoader",
    "get_config_loader",
    "load_config",
    "resolve_env_vars",
    # Validation
    "ValidationIssue",
    "ValidationResult",
]
