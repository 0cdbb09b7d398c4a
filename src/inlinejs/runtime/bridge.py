"""
Script engine bridge interface.

This module defines the abstract interface the runtime uses to talk to the
host's script engine, allowing swappable interop implementations. The
runtime never inspects module internals: it only imports, invokes exported
identifiers by name, and disposes.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

# Opaque reference to a module loaded by the script engine
ModuleHandle = Any


class ScriptEngineBridge(ABC):
    """
    Abstract interface for script engine interop.

    All methods are async: each call is a suspension point where the host
    scheduler may run other work.
    """

    @abstractmethod
    async def import_module(self, path: str) -> ModuleHandle | None:
        """Import the script module at ``path``; None when nothing was loaded."""
        pass

    @abstractmethod
    async def invoke(self, module: ModuleHandle, identifier: str, *args: Any) -> Any:
        """Call an exported identifier on a loaded module and return its result."""
        pass

    @abstractmethod
    async def dispose(self, module: ModuleHandle) -> None:
        """Release a loaded module."""
        pass
