"""
Build-time script extraction and bundle emission.

Component definitions are scanned for embedded scripts, which are grouped
into bundles and written as standalone script files.
"""

from inlinejs.build.emitter import BundleEmitter, EmitterOptions, emit_bundles, group_fragments
from inlinejs.build.extractor import ExtractorOptions, ScriptExtractor, extract_fragments
from inlinejs.build.pipeline import BuildResult, build_project, collect_fragments

__all__ = [
    "BuildResult",
    "BundleEmitter",
    "EmitterOptions",
    "ExtractorOptions",
    "ScriptExtractor",
    "build_project",
    "collect_fragments",
    "emit_bundles",
    "extract_fragments",
    "group_fragments",
]
