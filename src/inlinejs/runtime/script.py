"""
Script sites: load, cache, initialize, and dispose bundle modules.

A ``ScriptSite`` is one runtime instance of the script component. Its
lifecycle follows the host's component protocol:

    attach(handle)          uninitialized -> attached
    set_parameters(params)  attached -> resolving   (once only)
    <module loaded>         resolving -> ready      (OnInit already run)
    dispose()               * -> disposed

The module load is lazy and memoized per site. Every caller (first render,
invocations, disposal) awaits the same future, so the OnInit hook always
completes before any invocation reaches the module.

Global bundles are loaded through the host's ``SharedModuleRegistry`` and
shared by every site resolving to the same location. Those modules belong to
the registry and are never disposed by a site.
"""

from __future__ import annotations

import asyncio
import logging
from collections.abc import Callable, Mapping
from dataclasses import dataclass
from enum import StrEnum
from typing import Any

from inlinejs.core.errors import (
    DoubleAttachError,
    ModuleLoadError,
    ReinitializationError,
    SiteStateError,
)
from inlinejs.core.manifest import ProjectManifest
from inlinejs.core.naming import js_class_name, qualify_identifier

from .bridge import ModuleHandle, ScriptEngineBridge
from .owner import ComponentOwnerLookup, OwnerInfo, OwnerLookup
from .parameters import ScriptParameters, bind_parameters
from .registry import SharedModuleRegistry
from .resolver import ModuleResolver, RuntimeSettings

logger = logging.getLogger(__name__)


class SiteState(StrEnum):
    """Lifecycle state of a script site."""

    UNINITIALIZED = "uninitialized"
    ATTACHED = "attached"
    RESOLVING = "resolving"
    READY = "ready"
    DISPOSED = "disposed"


@dataclass
class RenderHandle:
    """
    Handle the host attaches to a script site.

    Attributes:
        owner: Enclosing component (instance, class, or OwnerInfo)
        renderer: Callback requesting a render of the site
    """

    owner: Any = None
    renderer: Callable[[], None] | None = None

    def render(self) -> None:
        if self.renderer is not None:
            self.renderer()


class ScriptRuntime:
    """
    Host-level context shared by all script sites of an application.

    Owns the script engine bridge, the shared module registry, and the
    path/owner resolution used by every site it creates.
    """

    def __init__(
        self,
        bridge: ScriptEngineBridge,
        *,
        app_package: str = "app",
        settings: RuntimeSettings | None = None,
        registry: SharedModuleRegistry | None = None,
        owner_lookup: OwnerLookup | None = None,
    ):
        self.bridge = bridge
        self.settings = settings or RuntimeSettings()
        self.registry = registry if registry is not None else SharedModuleRegistry()
        self.owner_lookup = owner_lookup or ComponentOwnerLookup(app_package)
        self.resolver = ModuleResolver(self.settings)

    @classmethod
    def from_manifest(cls, bridge: ScriptEngineBridge, manifest: ProjectManifest) -> ScriptRuntime:
        """Create a runtime whose paths match the project's build output."""
        settings = RuntimeSettings(
            output_dir=manifest.build.output_dir,
            script_ext=manifest.build.script_ext,
            content_root=manifest.runtime.content_root,
            class_wrapping=manifest.build.class_wrapping,
        )
        return cls(bridge, app_package=manifest.name, settings=settings)

    def create_site(self) -> ScriptSite:
        return ScriptSite(self)

    async def aclose(self) -> None:
        """Dispose shared modules at application shutdown."""
        await self.registry.aclose(self.bridge)


class ScriptSite:
    """One script-loading site nested in a host component."""

    def __init__(self, runtime: ScriptRuntime):
        self._runtime = runtime
        self._handle: RenderHandle | None = None
        self._initialized = False
        self._waiting_for_first_render = True
        self._load: asyncio.Future[ModuleHandle] | None = None
        self._imported: ModuleHandle | None = None  # non-global handle owned by this site
        self._class_name: str | None = None

        self.state = SiteState.UNINITIALIZED
        self.parameters: ScriptParameters | None = None
        self.owner: OwnerInfo | None = None
        self.loaded_script_file: str | None = None

    @property
    def load_started(self) -> bool:
        """True once something has asked for the module."""
        return self._load is not None

    # Host protocol

    def attach(self, handle: RenderHandle) -> None:
        if self._handle is not None:
            raise DoubleAttachError(
                "The render handle is already set. Cannot initialize a script site more than once."
            )
        if self.state is SiteState.DISPOSED:
            raise SiteStateError("Cannot attach a disposed script site.")

        self._handle = handle
        self.state = SiteState.ATTACHED

    def set_parameters(self, parameters: Mapping[str, Any]) -> None:
        """
        Accept the site's configuration. Only the first call is allowed.

        Raises:
            ReinitializationError: If parameters were already assigned
            UnknownParameterError: For a parameter outside the allow-list
            ParameterValueError: For a value of the wrong type
            OwnerResolutionError: If no ScriptFile is set and no owner can be found
        """
        if self._initialized:
            raise ReinitializationError(
                "The script site has already been initialized - cannot change parameters after first init."
            )
        if self._handle is None:
            raise SiteStateError("Attach a render handle before assigning parameters.")
        self._initialized = True

        params = bind_parameters(parameters)
        resolver = self._runtime.resolver
        owner = None
        if resolver.needs_owner(params):
            owner = self._runtime.owner_lookup.lookup(self._handle.owner)

        self.parameters = params
        self.owner = owner
        self.loaded_script_file = resolver.resolve(params, owner)
        self._class_name = self._wrapping_class_name(params, owner)
        self.state = SiteState.RESOLVING

        self._handle.render()

    async def on_after_render(self) -> None:
        """Make sure the module is fetched after the first render."""
        if self._waiting_for_first_render:
            self._waiting_for_first_render = False
            await self.get_module()

    # Module access

    async def get_module(self) -> ModuleHandle:
        """
        Return the loaded module, loading it on first use.

        Raises:
            SiteStateError: If parameters were never assigned or the site is disposed
            ModuleLoadError: If the module cannot be loaded
        """
        if self.state is SiteState.DISPOSED:
            raise SiteStateError("The script site has been disposed.")
        if self.parameters is None:
            raise SiteStateError("The script site has no parameters yet.")

        if self._load is None:
            self._load = asyncio.ensure_future(self._load_module())
        return await asyncio.shield(self._load)

    async def invoke(self, identifier: str, *args: Any) -> Any:
        """Call an exported identifier once the module is ready."""
        module = await self.get_module()
        return await self._runtime.bridge.invoke(module, self.qualify(identifier), *args)

    async def invoke_void(self, identifier: str, *args: Any) -> None:
        await self.invoke(identifier, *args)

    def qualify(self, identifier: str) -> str:
        """Apply the wrapping class prefix, when class wrapping is in effect."""
        return qualify_identifier(identifier, self._class_name)

    # Disposal

    async def dispose(self) -> None:
        if self.state is SiteState.DISPOSED:
            return

        self.state = SiteState.DISPOSED
        params, load = self.parameters, self._load
        if params is None or params.global_bundle or load is None:
            return

        initialized = True
        try:
            await asyncio.shield(load)
        except ModuleLoadError as e:
            logger.debug("Nothing to release for %s: %s", self.loaded_script_file, e)
            return
        except Exception as e:
            # Imported but OnInit failed: release the handle without unloading
            logger.debug("Releasing %s after failed init: %s", self.loaded_script_file, e)
            initialized = False

        module, self._imported = self._imported, None
        if module is None:
            return

        bridge = self._runtime.bridge
        try:
            if initialized and params.on_unload is not None:
                await bridge.invoke(module, self.qualify(params.on_unload))
        finally:
            await bridge.dispose(module)

    async def __aenter__(self) -> ScriptSite:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.dispose()

    # Internals

    async def _load_module(self) -> ModuleHandle:
        assert self.parameters is not None and self.loaded_script_file is not None
        params, path = self.parameters, self.loaded_script_file

        if params.global_bundle:
            shared = self._runtime.registry.get_or_load(path, lambda: self._import(path))
            module = await asyncio.shield(shared)
        else:
            module = self._imported = await self._import(path)

        if params.on_init is not None:
            await self._runtime.bridge.invoke(module, self.qualify(params.on_init), params.host_ref)

        if self.state is SiteState.RESOLVING:
            self.state = SiteState.READY
        return module

    async def _import(self, path: str) -> ModuleHandle:
        try:
            module = await self._runtime.bridge.import_module(path)
        except ModuleLoadError:
            raise
        except Exception as e:
            raise ModuleLoadError(path, str(e)) from e

        if module is None:
            raise ModuleLoadError(path)
        logger.debug("Imported %s", path)
        return module

    def _wrapping_class_name(self, params: ScriptParameters, owner: OwnerInfo | None) -> str | None:
        if not (self._runtime.settings.class_wrapping and params.as_class):
            return None
        if params.class_name:
            return params.class_name
        return js_class_name(owner.identity) if owner is not None else None
