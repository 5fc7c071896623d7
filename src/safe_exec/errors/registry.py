"""Error registry for creating errors from templates."""

from typing import Any

from .errors import ErrorCategory, ErrorTemplate, SafeExecError


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

    def create(self, code: str, context: dict[str, Any] | None = None) -> SafeExecError:
        """Create error instance from template + context.

        Args:
            code: Error code
            context: Context variables for template interpolation. A ``detail``
                key overrides the template's detail text.

        Returns:
            SafeExecError instance

        Raises:
            ValueError: If error code not found
        """
        template = self.get_template(code)
        if not template:
            msg = f"Unknown error code: {code}"
            raise ValueError(msg)

        context = context or {}

        message = self._interpolate(template.message_template, context)
        detail = context.get("detail") or self._interpolate(template.detail_template, context)
        suggestion = self._interpolate(template.suggestion_template, context)

        return SafeExecError(
            code=template.code,
            category=template.category,
            message=message or f"Error {code}",
            detail=detail,
            suggestion=suggestion,
        )

    def _interpolate(self, template: str | None, context: dict[str, Any]) -> str | None:
        """Safe string interpolation.

        Missing context variables leave the template untouched.
        """
        if template is None:
            return None

        try:
            return template.format(**context)
        except (KeyError, IndexError):
            return template

    def _load_builtin_templates(self) -> None:
        """Load hardcoded built-in templates."""
        # REGISTRY Errors
        self._templates["MATCHER_INVALID"] = ErrorTemplate(
            code="MATCHER_INVALID",
            category=ErrorCategory.REGISTRY,
            message_template="Unsupported matcher {matcher!r}",
            detail_template="Matchers must be a class, a string, a mapping or a callable",
            suggestion_template="Use category(), substring(), shape() or predicate()",
        )

        self._templates["HANDLER_INVALID"] = ErrorTemplate(
            code="HANDLER_INVALID",
            category=ErrorCategory.REGISTRY,
            message_template="Handler {handler!r} is not callable",
            suggestion_template="Register a function accepting (failure, context)",
        )

        self._templates["REGISTRY_FROZEN"] = ErrorTemplate(
            code="REGISTRY_FROZEN",
            category=ErrorCategory.REGISTRY,
            message_template="Handler registry is frozen",
            detail_template="No handlers can be registered after freeze()",
            suggestion_template="Finish registration before freezing the engine",
        )

        # DISPATCH Errors
        self._templates["CONTEXT_INVALID"] = ErrorTemplate(
            code="CONTEXT_INVALID",
            category=ErrorCategory.DISPATCH,
            message_template="{layer} must be a mapping, got {value!r}",
            suggestion_template="Pass context layers as dicts",
        )

        self._templates["UNHANDLED_FAILURE"] = ErrorTemplate(
            code="UNHANDLED_FAILURE",
            category=ErrorCategory.DISPATCH,
            message_template="Unhandled failure: {failure!r}",
            detail_template="No registered matcher applied and no fallback handler is set",
            suggestion_template="Register a matching handler or a catch_all() fallback",
        )

        # RESULT Errors
        self._templates["RESULT_INVALID"] = ErrorTemplate(
            code="RESULT_INVALID",
            category=ErrorCategory.RESULT,
            message_template="Cannot unwrap {result!r}",
            detail_template="Result objects must expose is_ok() with value/error accessors",
        )

        # CONFIG Errors
        self._templates["CONFIG_INVALID"] = ErrorTemplate(
            code="CONFIG_INVALID",
            category=ErrorCategory.CONFIG,
            message_template="Configuration is invalid",
            suggestion_template="Check the configuration file against the documented keys",
        )
