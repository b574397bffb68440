"""
Custom exceptions for MDB_MAPPER.

These exceptions provide specific error types for the mapping layer and the
repositories built on it, while staying compatible with the builtin
exception a caller would naturally expect (ValueError, TypeError, ...).
"""

from typing import Any, Dict, Optional


class MapperError(RuntimeError):
    """
    Base exception for MDB_MAPPER errors.

    Attributes:
        message: Error message
        context: Optional dictionary with additional context (collection,
                 field, value, etc.)
    """

    def __init__(self, message: str, context: Optional[Dict[str, Any]] = None) -> None:
        """
        Initialize the exception.

        Args:
            message: Error message
            context: Optional dictionary with additional context information
        """
        super().__init__(message)
        self.message = message
        self.context = context or {}

    def __str__(self) -> str:
        """Return formatted error message with context if available."""
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            return f"{self.message} (context: {context_str})"
        return self.message


class ObjectNotFoundError(MapperError):
    """
    Raised when a requested identifier has no corresponding document.

    Attributes:
        identifier: Document path or id that was not found
    """

    def __init__(
        self,
        identifier: Any,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        context["identifier"] = identifier
        super().__init__(message or "Object not found", context=context)
        self.identifier = identifier


class ObjectExistsError(MapperError):
    """
    Raised when an insert targets an identifier that already has a document.

    Attributes:
        identifier: Document path or id that already exists
    """

    def __init__(
        self,
        identifier: Any,
        message: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        context["identifier"] = identifier
        super().__init__(message or "Object already exists", context=context)
        self.identifier = identifier


class InvalidArgumentError(MapperError, ValueError):
    """
    Raised when a value cannot be converted.

    Covers unparseable numbers (in strict mode) and times, timestamps out of
    range, and attempts to convert a callable into a document.

    Attributes:
        argument: The offending value (if available)
    """

    def __init__(
        self,
        message: str,
        argument: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if argument is not None:
            context["argument"] = repr(argument)
        super().__init__(message, context=context)
        self.argument = argument


class MissingRequiredArgumentError(MapperError, TypeError):
    """
    Raised when a required argument was omitted.

    Attributes:
        argument: Name of the missing argument
    """

    def __init__(self, argument: str, context: Optional[Dict[str, Any]] = None) -> None:
        context = context or {}
        context["argument"] = argument
        super().__init__(f"Missing required argument: {argument}", context=context)
        self.argument = argument


class MethodNotImplementedError(MapperError, NotImplementedError):
    """
    Raised when a base implementation is invoked for an operation that
    concrete types must override.

    Attributes:
        method: Qualified name of the method
    """

    def __init__(self, method: str, context: Optional[Dict[str, Any]] = None) -> None:
        context = context or {}
        context["method"] = method
        super().__init__(f"Method not implemented: {method}", context=context)
        self.method = method


class UnrecognizedEnumerationValueError(InvalidArgumentError):
    """
    Raised when a stored value matches no member of an enumeration.

    Attributes:
        enumeration: The enumeration class
        value: The stored value
    """

    def __init__(self, enumeration: type, value: Any) -> None:
        super().__init__(
            f"Unrecognized {enumeration.__name__} value: {value!r}",
            context={"enumeration": enumeration.__name__},
        )
        self.enumeration = enumeration
        self.value = value


class ConfigurationError(MapperError):
    """
    Raised when configuration is invalid or missing.

    Attributes:
        config_key: Configuration key that caused the error (if available)
        config_value: Configuration value that caused the error (if available)
    """

    def __init__(
        self,
        message: str,
        config_key: Optional[str] = None,
        config_value: Optional[Any] = None,
        context: Optional[Dict[str, Any]] = None,
    ) -> None:
        context = context or {}
        if config_key:
            context["config_key"] = config_key
        if config_value is not None:
            context["config_value"] = config_value
        super().__init__(message, context=context)
        self.config_key = config_key
        self.config_value = config_value
