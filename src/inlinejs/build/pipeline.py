"""
Build pass utilities.

Provides the common discover → extract → emit pipeline over a project.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

from inlinejs.core.errors import RenderFileError
from inlinejs.core.fileset import discover_render_files, load_render_file
from inlinejs.core.ir import ScriptFragment
from inlinejs.core.manifest import ProjectManifest, find_manifest

from .emitter import BundleEmitter, EmitterOptions
from .extractor import ExtractorOptions, ScriptExtractor

logger = logging.getLogger(__name__)


@dataclass
class BuildResult:
    """Outcome of one build pass."""

    output_dir: Path
    fragments: list[ScriptFragment] = field(default_factory=list)
    written: list[Path] = field(default_factory=list)
    skipped_files: list[Path] = field(default_factory=list)


def collect_fragments(
    project_dir: Path,
    manifest: ProjectManifest,
    skipped_files: list[Path] | None = None,
) -> list[ScriptFragment]:
    """
    Extract the script fragments of every render file in a project.

    Unreadable render files are logged and skipped. Their paths are appended
    to ``skipped_files`` when given.
    """
    extractor = ScriptExtractor(ExtractorOptions(script_components=manifest.build.script_components))
    fragments: list[ScriptFragment] = []

    for path in discover_render_files(project_dir, manifest):
        try:
            components = load_render_file(path)
        except RenderFileError as e:
            logger.warning("%s", e)
            if skipped_files is not None:
                skipped_files.append(path)
            continue

        for component in components:
            fragments.extend(extractor.extract(component))

    return fragments


def build_project(
    project_dir: Path | str,
    manifest: ProjectManifest | None = None,
    output_dir: Path | None = None,
) -> BuildResult:
    """
    Run one build pass over a project.

    This performs the common pipeline:
    1. Load manifest (inlinejs.toml, defaults when missing)
    2. Discover render files
    3. Extract script fragments
    4. Write bundle files

    Args:
        project_dir: Path to the project root directory
        manifest: Optional manifest; loaded from project_dir when omitted
        output_dir: Optional explicit output directory

    Returns:
        BuildResult describing what was written

    Example:
        >>> from inlinejs.build import build_project
        >>> result = build_project("./my-app")
        >>> [p.name for p in result.written]
        ['App.Widget.index.g.js']
    """
    project_dir = Path(project_dir).resolve()
    if manifest is None:
        manifest = find_manifest(project_dir)
    if output_dir is None:
        output_dir = manifest.output_path(project_dir)

    result = BuildResult(output_dir=output_dir)
    result.fragments = collect_fragments(project_dir, manifest, result.skipped_files)

    emitter = BundleEmitter(
        EmitterOptions(
            script_ext=manifest.build.script_ext,
            class_wrapping=manifest.build.class_wrapping,
            prune=manifest.build.prune,
        )
    )
    result.written = emitter.emit(result.fragments, output_dir)
    return result
