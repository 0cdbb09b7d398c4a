"""
Script fragment and bundle types for inlinejs IR.

Fragments live for one build pass only; bundles are recomputed from the
full fragment set every pass.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field

from inlinejs.core.naming import GLOBAL_INDEX, js_class_name, resolve_bundle_key


class ScriptFragment(BaseModel):
    """
    One script embedded in a component definition.

    Attributes:
        owner_id: Qualified identity of the declaring component
        body: Script text, trimmed and never empty
        global_bundle: Share the bundle across all components
        bundle_name: Bundle name (defaults to "index")
        script_file: Explicit script file used by the runtime instead of a bundle
        as_class: Wrap the body in a class named after the owner
        class_name: Explicit wrapping class name
        add_to_global: Also publish the wrapping class on globalThis
        add_as_instance: Export an instance of the wrapping class instead of the class
    """

    owner_id: str
    body: str = Field(min_length=1)
    global_bundle: bool = False
    bundle_name: str | None = GLOBAL_INDEX
    script_file: str | None = None
    as_class: bool = True
    class_name: str | None = None
    add_to_global: bool = False
    add_as_instance: bool = False

    model_config = ConfigDict(frozen=True)

    @property
    def bundle_key(self) -> str:
        return resolve_bundle_key(self.global_bundle, self.bundle_name, self.owner_id)

    @property
    def effective_class_name(self) -> str:
        return self.class_name or js_class_name(self.owner_id)


class BundleGroup(BaseModel):
    """Fragments sharing one bundle key, in discovery order."""

    key: str
    fragments: list[ScriptFragment] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def is_empty(self) -> bool:
        return not any(fragment.body.strip() for fragment in self.fragments)
