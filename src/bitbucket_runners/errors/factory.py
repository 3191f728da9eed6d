"""Error factory for creating runner client errors."""

from typing import Any

from .errors import RunnerClientError
from .registry import ErrorRegistry


class ErrorFactory:
    """Creates RunnerClientErrors from codes and context."""

    def __init__(self, registry: ErrorRegistry | None = None):
        """Initialize error factory.

        Args:
            registry: Error registry (defaults to new ErrorRegistry())
        """
        self.registry = registry or ErrorRegistry()

    def create(
        self,
        code: str,
        context: dict[str, Any] | None = None,
        cause: BaseException | None = None,
        **kwargs: Any,
    ) -> RunnerClientError:
        """Create an error directly from code.

        Args:
            code: Error code
            context: Context variables for template interpolation
            cause: Optional underlying exception
            **kwargs: Additional context variables

        Returns:
            RunnerClientError subclass instance
        """
        merged_context = dict(context or {})
        merged_context.update(kwargs)

        return self.registry.create(code=code, context=merged_context, cause=cause)


# Convenience singleton
_default_factory: ErrorFactory | None = None


def get_error_factory() -> ErrorFactory:
    """Get default error factory singleton."""
    global _default_factory  # noqa: PLW0603
    if _default_factory is None:
        _default_factory = ErrorFactory()
    return _default_factory


def create_error(code: str, cause: BaseException | None = None, **context: Any) -> RunnerClientError:
    """Convenience function to create error.

    Args:
        code: Error code
        cause: Optional underlying exception
        **context: Context variables for template interpolation

    Returns:
        RunnerClientError subclass instance
    """
    return get_error_factory().create(code, context, cause=cause)
