"""
inlinejs - Inline scripts for UI components.

Extracts script source embedded in component definitions into generated
bundle files at build time, and loads those bundles for each component at
run time.
"""

from __future__ import annotations

from ._version import get_version

# Re-export commonly used types for convenience
from .core import ir
from .core.errors import (
    DoubleAttachError,
    InlineJsError,
    ModuleLoadError,
    OwnerResolutionError,
    ReinitializationError,
    UnknownParameterError,
)
from .core.naming import resolve_bundle_key

__version__ = get_version()

__all__ = [
    "__version__",
    "ir",
    "resolve_bundle_key",
    "InlineJsError",
    "DoubleAttachError",
    "ReinitializationError",
    "UnknownParameterError",
    "OwnerResolutionError",
    "ModuleLoadError",
]
