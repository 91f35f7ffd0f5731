"""
Custom exceptions for the article exporter.

Error philosophy:
  - ComponentError      → SKIP: the component is logged and left out, the export continues.
  - ParserError         → SKIP: the fragment yields no components, the export continues.
  - SpecValidationError → REJECT: a theme override is refused, the default spec stays in effect.
  - ThemeError / SettingsError → FAIL HARD: configuration cannot be read, the export stops.

Only exceptions with ``fatal = True`` are allowed to escape ``Exporter.export()``.
"""

from typing import Optional


class ExporterError(Exception):
    """Base exception for all article exporter errors."""

    fatal = False

    def __init__(self, message: str, details: Optional[dict] = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_response(self) -> dict:
        """Convert to a serializable error record."""
        return {
            "error": type(self).__name__,
            "message": self.message,
            "fatal": self.fatal,
            "details": self.details
        }


# --- SKIP: the export keeps going without the failing piece ---

class ComponentError(ExporterError):
    """
    Raised when a single component cannot be built or flattened.

    The builder logs it under ``component_errors`` and drops the component.
    """

    def __init__(
        self,
        message: str,
        component: str = "",
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.component = component


class ParserError(ExporterError):
    """Raised when no tree builder can load an HTML fragment."""
    pass


# --- REJECT: override never persisted ---

class SpecValidationError(ExporterError):
    """
    Raised when a spec override is empty or introduces tokens that the
    default spec does not declare.
    """

    def __init__(
        self,
        message: str,
        component: str = "",
        spec_name: str = "",
        invalid_tokens: Optional[list] = None,
        details: Optional[dict] = None
    ):
        super().__init__(message, details)
        self.component = component
        self.spec_name = spec_name
        self.invalid_tokens = invalid_tokens or []


# --- FAIL HARD: configuration is unusable ---

class ThemeError(ExporterError):
    """Raised when a theme cannot be found or loaded."""

    fatal = True


class SettingsError(ExporterError):
    """Raised when settings fail validation."""

    fatal = True
