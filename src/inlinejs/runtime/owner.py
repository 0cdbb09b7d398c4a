"""
Owner identity lookup for script sites.

A script site without an explicit ScriptFile loads the bundle named after
the component it is nested in. The host tells the site which component that
is by passing the enclosing component (or its class) as the owner context
of the render handle; the lookup turns it into an ``OwnerInfo``.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Any

from pydantic import BaseModel, ConfigDict

from inlinejs.core.errors import OwnerResolutionError

# Method compiled components use to emit their render instructions
RENDER_METHOD = "build_render_tree"


class OwnerInfo(BaseModel):
    """
    Identity of the component enclosing a script site.

    Attributes:
        identity: Qualified component name used for bundle keys
        package_id: Package the component ships in
        is_from_lib: True when the package is a library, not the hosting app
    """

    identity: str
    package_id: str
    is_from_lib: bool = False

    model_config = ConfigDict(frozen=True)


class OwnerLookup(ABC):
    """Resolve the owner of a script site from its attachment context."""

    @abstractmethod
    def lookup(self, context: Any) -> OwnerInfo:
        """
        Return the owner described by ``context``.

        Raises:
            OwnerResolutionError: If no owner can be determined
        """
        pass


class ComponentOwnerLookup(OwnerLookup):
    """
    Owner lookup based on the enclosing component's Python class.

    The owner is the class that declares ``build_render_tree`` (subclasses of
    a compiled component share its bundle), falling back to the class itself.
    Results are cached per class.

    The identity is ``{module}.{qualname}``, e.g. ``app.components.widget.Widget``.
    Build-time bundle keys use ``{namespace}.{name}`` from the render file,
    so hosts relying on this lookup must write the component's full module
    path as its ``namespace`` (and its qualname as ``name``). Hosts with
    another naming scheme should pass an ``OwnerInfo`` or their own
    ``OwnerLookup``.
    """

    def __init__(self, app_package: str):
        self.app_package = app_package
        self._cache: dict[type, OwnerInfo] = {}

    def lookup(self, context: Any) -> OwnerInfo:
        if isinstance(context, OwnerInfo):
            return context
        if context is None:
            raise OwnerResolutionError(
                "Unable to retrieve parent component: script site has no enclosing component"
            )

        component_type = context if isinstance(context, type) else type(context)
        info = self._cache.get(component_type)
        if info is None:
            info = self._describe(_render_declaring_type(component_type))
            self._cache[component_type] = info
        return info

    def _describe(self, component_type: type) -> OwnerInfo:
        module = component_type.__module__
        package_id = module.split(".", 1)[0]
        return OwnerInfo(
            identity=f"{module}.{component_type.__qualname__}",
            package_id=package_id,
            is_from_lib=package_id != self.app_package,
        )


def _render_declaring_type(component_type: type) -> type:
    for klass in component_type.__mro__:
        if RENDER_METHOD in vars(klass):
            return klass
    return component_type
