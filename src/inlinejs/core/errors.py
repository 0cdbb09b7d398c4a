"""
Error types for inlinejs script extraction, bundling, and loading.
"""

from dataclasses import dataclass
from pathlib import Path
from typing import Optional


class InlineJsError(Exception):
    """Base exception for all inlinejs errors."""

    def __init__(self, message: str, context: Optional["ErrorContext"] = None):
        self.message = message
        self.context = context
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        """Format error message with context if available."""
        if self.context:
            return f"{self.context.format()}\n{self.message}"
        return self.message


# =============================================================================
# Build-time errors
# =============================================================================


class ExtractionSkip(InlineJsError):
    """
    Raised inside the extractor when a script declaration cannot be compiled.

    Never escapes the extractor: the declaration is skipped and the build
    carries on.

    Examples:
    - Open marker without a matching close marker
    - No literal content between the markers
    - Content that is empty after trimming
    """

    pass


class ManifestError(InlineJsError):
    """Raised when inlinejs.toml cannot be read or has invalid values."""

    pass


class RenderFileError(InlineJsError):
    """
    Raised when a render-instruction file cannot be loaded.

    The build pipeline logs it and skips the file.
    """

    pass


# =============================================================================
# Runtime errors
# =============================================================================


class DoubleAttachError(InlineJsError):
    """Raised when a render handle is attached to a script site twice."""

    pass


class ReinitializationError(InlineJsError):
    """Raised when parameters are assigned to an already initialized script site."""

    pass


class UnknownParameterError(InlineJsError):
    """Raised when a script site receives a parameter outside its allow-list."""

    def __init__(self, name: str):
        self.name = name
        super().__init__(f"Unknown parameter: {name}")


class ParameterValueError(InlineJsError):
    """Raised when a known parameter receives a value of the wrong type."""

    pass


class SiteStateError(InlineJsError):
    """Raised when a script site is used before initialization or after disposal."""

    pass


class OwnerResolutionError(InlineJsError):
    """
    Raised when the enclosing component of a script site cannot be determined.

    Only raised when an owner is required, i.e. no ScriptFile override was given.
    """

    pass


class ModuleLoadError(InlineJsError):
    """Raised when importing a script module yields no usable handle."""

    def __init__(self, path: str, reason: str | None = None):
        self.path = path
        message = f"Failed to load script {path}"
        if reason:
            message += f": {reason}"
        super().__init__(message)


@dataclass
class ErrorContext:
    """
    Context information for an error, including source location.

    Attributes:
        file: Path to the file being processed
        component: Optional qualified component name
        sequence: Optional render-instruction sequence number
    """

    file: Path
    component: str | None = None
    sequence: int | None = None

    def format(self) -> str:
        """
        Format error context as a human-readable string.

        Returns:
            Formatted string like: "Widget.render.json in component App.Widget @12"
        """
        location = str(self.file)
        if self.component:
            location += f" in component {self.component}"
        if self.sequence is not None:
            location += f" @{self.sequence}"
        return location


def make_render_file_error(
    message: str,
    file: Path,
    component: str | None = None,
) -> RenderFileError:
    """
    Helper to create a RenderFileError with context.

    Args:
        message: Error description
        file: Render file path
        component: Optional component being read

    Returns:
        RenderFileError with context attached
    """
    return RenderFileError(message, ErrorContext(file=file, component=component))
