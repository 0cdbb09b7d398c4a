"""
Runtime loading of generated script bundles.

Script sites resolve the bundle written for their enclosing component,
load it once through the script engine bridge, and invoke its exports.
"""

from inlinejs.runtime.bridge import ModuleHandle, ScriptEngineBridge
from inlinejs.runtime.owner import ComponentOwnerLookup, OwnerInfo, OwnerLookup
from inlinejs.runtime.parameters import ALLOWED_PARAMETERS, ScriptParameters, bind_parameters
from inlinejs.runtime.registry import SharedModuleRegistry
from inlinejs.runtime.resolver import ModuleResolver, RuntimeSettings
from inlinejs.runtime.script import RenderHandle, ScriptRuntime, ScriptSite, SiteState

__all__ = [
    "ALLOWED_PARAMETERS",
    "ComponentOwnerLookup",
    "ModuleHandle",
    "ModuleResolver",
    "OwnerInfo",
    "OwnerLookup",
    "RenderHandle",
    "RuntimeSettings",
    "ScriptEngineBridge",
    "ScriptParameters",
    "ScriptRuntime",
    "ScriptSite",
    "SharedModuleRegistry",
    "SiteState",
    "bind_parameters",
]
