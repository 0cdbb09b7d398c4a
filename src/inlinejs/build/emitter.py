"""
Bundle emitter for inlinejs.

Groups extracted script fragments by bundle key and writes one script file
per non-empty bundle. Every pass regenerates each bundle from the full
fragment set, so the output depends only on the fragments given, never on
earlier builds or on extraction order across components.

Key features:
- Deterministic grouping (first-seen key order, discovery order inside a group)
- Optional class wrapping of fragment bodies
- Optional pruning of bundles no longer produced
"""

from __future__ import annotations

import logging
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from pathlib import Path
from typing import TYPE_CHECKING

from inlinejs.core.ir import BundleGroup
from inlinejs.core.naming import SCRIPT_EXT, bundle_filename

if TYPE_CHECKING:
    from inlinejs.core.ir import ScriptFragment

logger = logging.getLogger(__name__)

BANNER_PREFIX = "// Auto-generated bundle: "


@dataclass
class EmitterOptions:
    """Options for bundle file generation."""

    script_ext: str = SCRIPT_EXT
    class_wrapping: bool = False
    prune: bool = False


def group_fragments(fragments: Iterable[ScriptFragment]) -> list[BundleGroup]:
    """
    Group fragments by bundle key.

    Returns:
        Groups in first-seen key order, fragments in discovery order
    """
    grouped: dict[str, list[ScriptFragment]] = {}
    for fragment in fragments:
        grouped.setdefault(fragment.bundle_key, []).append(fragment)
    return [BundleGroup(key=key, fragments=items) for key, items in grouped.items()]


class BundleEmitter:
    """
    Write bundle files from script fragments.

    Each bundle file consists of:
    1. A banner comment naming the bundle key
    2. Fragment bodies, one per line, in discovery order
    """

    def __init__(self, options: EmitterOptions | None = None):
        self.options = options or EmitterOptions()

    def render_bundle(self, group: BundleGroup) -> str | None:
        """
        Render the file content of a bundle.

        Returns:
            File content, or None when the bundle has no script content
        """
        body = "".join(section + "\n" for section in self._render_sections(group.fragments))
        if not body.strip():
            return None
        return f"{BANNER_PREFIX}{group.key}\n{body}"

    def emit(self, fragments: Iterable[ScriptFragment], output_dir: Path) -> list[Path]:
        """
        Write one file per non-empty bundle.

        Args:
            fragments: All fragments discovered in this build pass
            output_dir: Directory receiving ``{key}.g.{ext}`` files

        Returns:
            Paths written, in bundle order
        """
        output_dir.mkdir(parents=True, exist_ok=True)
        written: list[Path] = []

        for group in group_fragments(fragments):
            content = self.render_bundle(group)
            if content is None:
                logger.debug("Bundle %s is empty, not written", group.key)
                continue

            path = output_dir / bundle_filename(group.key, self.options.script_ext)
            path.write_text(content, encoding="utf-8")
            logger.info("Wrote bundle %s (%d fragment(s))", path.name, len(group.fragments))
            written.append(path)

        if self.options.prune:
            self._prune(output_dir, written)

        return written

    def _render_sections(self, fragments: Sequence[ScriptFragment]) -> list[str]:
        """
        Render a group's fragments in discovery order.

        Wrapped fragments sharing a class name become one class declaration,
        placed where the first of them appears.
        """
        sections: list[str | list[ScriptFragment]] = []
        classes: dict[str, list[ScriptFragment]] = {}

        for fragment in fragments:
            if not (self.options.class_wrapping and fragment.as_class):
                sections.append(fragment.body)
                continue
            members = classes.get(fragment.effective_class_name)
            if members is None:
                members = classes[fragment.effective_class_name] = []
                sections.append(members)
            members.append(fragment)

        return [
            section if isinstance(section, str) else self._render_class(section)
            for section in sections
        ]

    def _render_class(self, members: list[ScriptFragment]) -> str:
        class_name = members[0].effective_class_name
        body = "\n".join(
            f"  {line}" if line else line
            for fragment in members
            for line in fragment.body.splitlines()
        )

        if any(fragment.add_as_instance for fragment in members):
            lines = [f"export const {class_name} = new (class {class_name} {{", body, "})();"]
        else:
            lines = [f"export class {class_name} {{", body, "}"]

        if any(fragment.add_to_global for fragment in members):
            lines.append(f"globalThis.{class_name} = {class_name};")
        return "\n".join(lines)

    def _prune(self, output_dir: Path, written: list[Path]) -> None:
        keep = {path.name for path in written}
        for stale in output_dir.glob(bundle_filename("*", self.options.script_ext)):
            if stale.name not in keep:
                logger.info("Removing stale bundle %s", stale.name)
                stale.unlink()


def emit_bundles(
    fragments: Iterable[ScriptFragment],
    output_dir: Path,
    options: EmitterOptions | None = None,
) -> list[Path]:
    """
    Write bundle files for a set of fragments.

    Args:
        fragments: Script fragments from one build pass
        output_dir: Directory to write bundles to
        options: Emitter options

    Returns:
        Paths of the bundle files written
    """
    return BundleEmitter(options).emit(fragments, output_dir)
