"""Error registry for creating errors from templates."""

from typing import Any

from .errors import (
    BodyReadError,
    ConfigError,
    DecodeError,
    ErrorKind,
    ErrorTemplate,
    RunnerClientError,
    StatusError,
    TransportError,
)


class ErrorRegistry:
    """Registry of error templates. Creates errors from templates + context."""

    def __init__(self) -> None:
        """Initialize error registry with built-in templates."""
        self._templates: dict[str, ErrorTemplate] = {}
        self._load_builtin_templates()

    def get_template(self, code: str) -> ErrorTemplate | None:
        """Get template by error code.

        Args:
            code: Error code to look up

        Returns:
            ErrorTemplate if found, None otherwise
        """
        return self._templates.get(code)

    def list_codes(self) -> list[str]:
        """List all registered error codes."""
        return list(self._templates.keys())

    def register(self, template: ErrorTemplate) -> None:
        """Add or replace a template."""
        self._templates[template.code] = template

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
    ) -> RunnerClientError:
        """Create error instance from template + context.

        Recognised context keys besides template variables are
        ``operation``, ``status_code``, ``body`` and ``retryable``.

        Args:
            code: Error code
            context: Context variables for template interpolation
            cause: Optional underlying exception

        Returns:
            Instance of the template's error class

        Raises:
            ValueError: If error code not found
        """
        template = self.get_template(code)
        if not template:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = dict(context or {})
        if cause is not None:
            context.setdefault("reason", str(cause))

        message = self._interpolate(template.message_template, context)
        detail = self._interpolate(template.detail_template, context)

        if message is None:
            message = f"Error {code}"

        retryable = context.get("retryable")
        if retryable is None:
            retryable = template.default_retryable

        return template.error_class(
            code=template.code,
            kind=template.kind,
            message=message,
            detail=detail,
            retryable=retryable,
            operation=context.get("operation"),
            status_code=context.get("status_code"),
            body=context.get("body"),
            cause=cause,
        )

    def _interpolate(
        self,
        template: str | None,
        context: dict[str, Any],
    ) -> str | None:
        """Safe string interpolation.

        Args:
            template: Template string with {var} placeholders
            context: Context variables

        Returns:
            Interpolated string or None if template is None
        """
        if template is None:
            return None

        try:
            return template.format(**context)
        except KeyError:
            # Missing context variable - return template as-is
            return template

    def _load_builtin_templates(self) -> None:
        """Load hardcoded built-in templates."""
        self._templates["TRANSPORT_FAILURE"] = ErrorTemplate(
            code="TRANSPORT_FAILURE",
            kind=ErrorKind.TRANSPORT,
            error_class=TransportError,
            message_template="{reason}",
            detail_template="The request for '{operation}' could not be sent or got no response",
            default_retryable=True,
        )

        self._templates["BODY_READ_FAILURE"] = ErrorTemplate(
            code="BODY_READ_FAILURE",
            kind=ErrorKind.BODY_READ,
            error_class=BodyReadError,
            message_template="{reason}",
            detail_template="The response body for '{operation}' could not be read",
            default_retryable=True,
        )

        self._templates["STATUS_ERROR"] = ErrorTemplate(
            code="STATUS_ERROR",
            kind=ErrorKind.STATUS,
            error_class=StatusError,
            message_template="failed to {action}, status: {status_code}, body: {body}",
        )

        self._templates["DECODE_FAILURE"] = ErrorTemplate(
            code="DECODE_FAILURE",
            kind=ErrorKind.DECODE,
            error_class=DecodeError,
            message_template="{reason}",
            detail_template="The '{operation}' response did not match the expected shape",
        )

        self._templates["CREATE_DECODE_FAILURE"] = ErrorTemplate(
            code="CREATE_DECODE_FAILURE",
            kind=ErrorKind.DECODE,
            error_class=DecodeError,
            message_template="error decoding create runner response: {reason}",
            detail_template="The runner may have been created even though the response was unusable",
        )

        self._templates["CONFIG_INVALID"] = ErrorTemplate(
            code="CONFIG_INVALID",
            kind=ErrorKind.CONFIG,
            error_class=ConfigError,
            message_template="Invalid configuration: {detail}",
            detail_template="{detail}",
        )
