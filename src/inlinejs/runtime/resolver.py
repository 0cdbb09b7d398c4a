"""
Runtime resolution of the script file a site loads.

Uses the same naming rules as the build emitter, so a site finds the
bundle written for its owner without any coordination with the build.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass

from inlinejs.core.naming import JS_OUTPUT, SCRIPT_EXT, bundle_filename, resolve_bundle_key

from .owner import OwnerInfo
from .parameters import ScriptParameters

logger = logging.getLogger(__name__)


@dataclass
class RuntimeSettings:
    """Runtime path conventions; must match the build configuration."""

    output_dir: str = JS_OUTPUT
    script_ext: str = SCRIPT_EXT
    content_root: str = "_content"
    class_wrapping: bool = False


class ModuleResolver:
    """Compute the path a script site imports its module from."""

    def __init__(self, settings: RuntimeSettings | None = None):
        self.settings = settings or RuntimeSettings()

    def needs_owner(self, parameters: ScriptParameters) -> bool:
        return parameters.script_file is None

    def resolve(self, parameters: ScriptParameters, owner: OwnerInfo | None = None) -> str:
        """
        Resolve the script path for a site.

        Returns ``ScriptFile`` verbatim when set. Otherwise the bundle path is
        ``./{origin}{output_dir}/{key}.g.{ext}``, where origin is empty for
        the hosting application and ``{content_root}/{package_id}/`` for a
        library.

        Raises:
            ValueError: If an owner is needed but not given
        """
        if parameters.script_file is not None:
            return parameters.script_file
        if owner is None:
            raise ValueError("An owner is required to resolve a bundle path")

        key = resolve_bundle_key(parameters.global_bundle, parameters.bundle_name, owner.identity)
        filename = bundle_filename(key, self.settings.script_ext)
        path = f"./{self.origin_root(owner)}{self.settings.output_dir}/{filename}"
        logger.debug("Resolved bundle %s for %s", path, owner.identity)
        return path

    def origin_root(self, owner: OwnerInfo) -> str:
        if owner.is_from_lib:
            return f"{self.settings.content_root}/{owner.package_id}/"
        return ""
