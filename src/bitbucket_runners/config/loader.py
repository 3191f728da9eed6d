"""Runner client configuration loader."""

import logging
import os
import re
import typing
from dataclasses import fields, is_dataclass
from enum import Enum
from pathlib import Path
from typing import Any

import yaml

from bitbucket_runners.errors import create_error

from .models import LogFormat, LogLevel, RunnerClientConfig
from .validation import ValidationIssue, ValidationResult

logger = logging.getLogger(__name__)

CONFIG_PATH_ENV = "BITBUCKET_RUNNERS_CONFIG"
LOCAL_CONFIG_FILE = "runners-config.yaml"

_TOP_LEVEL_KEYS = {"base_url", "workspace_uuid", "oauth", "http", "logging"}


def resolve_env_vars(value: str) -> str:
    """Resolve environment variable references in string.

    Supports:
    - ${VAR} - Required, error if not set
    - ${VAR:-default} - With default value
    - ${VAR:?error message} - Required with custom error

    Args:
        value: String with potential env var references

    Returns:
        String with env vars resolved

    Raises:
        ConfigError: If required var not set
    """
    # Pattern: ${VAR}, ${VAR:-default}, ${VAR:?error}
    pattern = r"\$\{([^}:]+)(?::([?-])([^}]*))?\}"

    def replacer(match: re.Match[str]) -> str:
        var_name = match.group(1)
        operator = match.group(2)  # '-' or '?' or None
        operand = match.group(3)  # default value or error message

        env_value = os.environ.get(var_name)

        if env_value is not None:
            return env_value

        if operator == "-":
            return operand or ""
        elif operator == "?":
            error_msg = operand or f"Required environment variable {var_name} not set"
            raise create_error("CONFIG_INVALID", detail=error_msg)
        else:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Required environment variable {var_name} not set",
            )

    return re.sub(pattern, replacer, value)


def _resolve_env_vars_recursive(data: Any) -> Any:
    """Recursively resolve env vars in data structure."""
    if isinstance(data, dict):
        return {k: _resolve_env_vars_recursive(v) for k, v in data.items()}
    elif isinstance(data, list):
        return [_resolve_env_vars_recursive(item) for item in data]
    elif isinstance(data, str):
        return resolve_env_vars(data)
    else:
        return data


def _is_non_empty_str(value: Any) -> bool:
    return isinstance(value, str) and bool(value.strip())


class ConfigLoader:
    """Load and validate runner client configuration."""

    def __init__(self) -> None:
        self._config: RunnerClientConfig | None = None
        self._config_path: Path | None = None

    def load(self, path: str | Path | None = None) -> RunnerClientConfig:
        """Load configuration from a YAML file.

        Resolution order if path not specified:
        1. BITBUCKET_RUNNERS_CONFIG environment variable
        2. ./runners-config.yaml
        3. ~/.config/bitbucket-runners/config.yaml

        Args:
            path: Optional path to config file

        Returns:
            Loaded RunnerClientConfig instance

        Raises:
            ConfigError: If the file is missing or invalid
        """
        if path is None:
            path = self._resolve_config_path()

        config_path = Path(path)

        if not config_path.exists():
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration file not found: {config_path}",
            )

        try:
            with config_path.open() as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Invalid YAML in config file: {e}",
            ) from e

        if not isinstance(data, dict):
            raise create_error(
                "CONFIG_INVALID",
                detail=f"Configuration root must be a mapping: {config_path}",
            )

        data = _resolve_env_vars_recursive(data)

        return self.load_from_dict(data, config_path)

    def load_from_dict(
        self, data: dict[str, Any], config_path: Path | None = None
    ) -> RunnerClientConfig:
        """Load configuration from dictionary.

        Args:
            data: Configuration dictionary
            config_path: Optional path to config file (for tracking)

        Returns:
            Loaded RunnerClientConfig instance

        Raises:
            ConfigError: If configuration is invalid
        """
        validation = self.validate(data)
        for warning in validation.warnings:
            logger.warning(f"{warning.path}: {warning.message}")
        if not validation.valid:
            error_messages = [f"- {issue.path}: {issue.message}" for issue in validation.errors]
            raise create_error(
                "CONFIG_INVALID",
                detail="Configuration validation failed:\n" + "\n".join(error_messages),
            )

        config = self._convert_field(RunnerClientConfig, data)

        self._config = config
        self._config_path = config_path
        logger.debug("Configuration loaded successfully")

        return config

    def validate(self, data: dict[str, Any]) -> ValidationResult:
        """Validate config data without loading.

        Args:
            data: Configuration dictionary

        Returns:
            ValidationResult with errors and warnings
        """
        errors: list[ValidationIssue] = []
        warnings: list[ValidationIssue] = []

        for key in data:
            if key not in _TOP_LEVEL_KEYS:
                warnings.append(
                    ValidationIssue(
                        path=key,
                        message=f"Unknown configuration key: {key}",
                        severity="warning",
                    )
                )

        if not _is_non_empty_str(data.get("workspace_uuid")):
            errors.append(
                ValidationIssue(path="workspace_uuid", message="workspace_uuid is required")
            )

        if "base_url" in data:
            base_url = data["base_url"]
            if not isinstance(base_url, str) or not base_url.startswith(("http://", "https://")):
                errors.append(
                    ValidationIssue(
                        path="base_url",
                        message="base_url must be an http:// or https:// URL",
                    )
                )

        oauth = data.get("oauth")
        if not isinstance(oauth, dict):
            errors.append(ValidationIssue(path="oauth", message="oauth must be a dictionary"))
        else:
            for key in ("client_id", "client_secret"):
                if not _is_non_empty_str(oauth.get(key)):
                    errors.append(
                        ValidationIssue(path=f"oauth.{key}", message=f"{key} is required")
                    )
            scopes = oauth.get("scopes", [])
            if not isinstance(scopes, list) or not all(isinstance(s, str) for s in scopes):
                errors.append(
                    ValidationIssue(path="oauth.scopes", message="scopes must be a list of strings")
                )

        if "http" in data:
            http = data["http"]
            if not isinstance(http, dict):
                errors.append(ValidationIssue(path="http", message="http must be a dictionary"))
            elif "timeout" in http:
                timeout = http["timeout"]
                if isinstance(timeout, bool) or not isinstance(timeout, int | float) or timeout <= 0:
                    errors.append(
                        ValidationIssue(
                            path="http.timeout", message="timeout must be a positive number"
                        )
                    )

        if "logging" in data:
            logging_section = data["logging"]
            if not isinstance(logging_section, dict):
                errors.append(
                    ValidationIssue(path="logging", message="logging must be a dictionary")
                )
            else:
                for key, enum_type in (("level", LogLevel), ("format", LogFormat)):
                    if key in logging_section:
                        allowed = [member.value for member in enum_type]
                        if logging_section[key] not in allowed:
                            errors.append(
                                ValidationIssue(
                                    path=f"logging.{key}",
                                    message=f"{key} must be one of {', '.join(allowed)}",
                                )
                            )

        return ValidationResult(valid=True, errors=errors, warnings=warnings)

    def get(self) -> RunnerClientConfig:
        """Get current configuration.

        Raises:
            ConfigError: If configuration not loaded
        """
        if self._config is None:
            raise create_error("CONFIG_INVALID", detail="Configuration not loaded")
        return self._config

    def _resolve_config_path(self) -> Path:
        """Resolve config file path using resolution order."""
        env_path = os.environ.get(CONFIG_PATH_ENV)
        if env_path:
            return Path(env_path)

        local_path = Path(LOCAL_CONFIG_FILE)
        if local_path.exists():
            return local_path

        home_path = Path.home() / ".config" / "bitbucket-runners" / "config.yaml"
        if home_path.exists():
            return home_path

        # Not found - use local path so the error names it
        return local_path

    def _convert_field(self, field_type: Any, value: Any) -> Any:
        """Convert a validated value to the declared field type."""
        if value is None:
            return None

        origin = typing.get_origin(field_type)

        if origin is list:
            args = typing.get_args(field_type)
            if args and isinstance(value, list):
                return [self._convert_field(args[0], item) for item in value]
            return value

        if is_dataclass(field_type) and isinstance(value, dict):
            kwargs = {
                f.name: self._convert_field(f.type, value[f.name])
                for f in fields(field_type)
                if f.name in value
            }
            return field_type(**kwargs)

        if isinstance(field_type, type) and issubclass(field_type, Enum):
            return field_type(value)

        if field_type is float and isinstance(value, int):
            return float(value)

        return value


# Convenience singleton
_default_loader: ConfigLoader | None = None


def get_config_loader() -> ConfigLoader:
    """Get default config loader singleton."""
    global _default_loader  # noqa: PLW0603
    if _default_loader is None:
        _default_loader = ConfigLoader()
    return _default_loader


def load_config(path: str | Path | None = None) -> RunnerClientConfig:
    """Convenience function to load config.

    Args:
        path: Optional path to config file

    Returns:
        Loaded RunnerClientConfig instance
    """
    return get_config_loader().load(path)
