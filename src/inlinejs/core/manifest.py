import os
import tomllib
from dataclasses import dataclass, field
from pathlib import Path

from .errors import ManifestError
from .naming import JS_OUTPUT, SCRIPT_EXT

MANIFEST_FILENAME = "inlinejs.toml"

# Environment override for the generated bundle directory
OUTPUT_DIR_ENV_VAR = "INLINEJS_OUTPUT_DIR"


@dataclass
class BuildConfig:
    """Build-time extraction and emission configuration.

    Examples in inlinejs.toml:

        [build]
        sources = ["components/"]
        static_root = "wwwroot"
        output_dir = "inlinejs"
        class_wrapping = true
    """

    sources: list[str] = field(default_factory=lambda: ["."])
    static_root: str = "wwwroot"
    output_dir: str = JS_OUTPUT
    script_ext: str = SCRIPT_EXT
    script_components: list[str] = field(default_factory=lambda: ["Script"])
    class_wrapping: bool = False
    prune: bool = False  # Delete generated bundles not written by this pass


@dataclass
class RuntimeConfig:
    """Runtime path resolution configuration."""

    content_root: str = "_content"  # Static assets prefix for library packages


@dataclass
class ProjectManifest:
    """
    Project manifest loaded from inlinejs.toml.

    ``name`` is the application's package id; owners from any other package
    are treated as library components.
    """

    name: str = "app"
    build: BuildConfig = field(default_factory=BuildConfig)
    runtime: RuntimeConfig = field(default_factory=RuntimeConfig)

    def output_path(self, project_root: Path) -> Path:
        """Directory generated bundles are written to."""
        return project_root / self.build.static_root / self.build.output_dir


def _expect(value: object, kind: type, key: str) -> None:
    if not isinstance(value, kind):
        raise ManifestError(f"{MANIFEST_FILENAME}: '{key}' must be {kind.__name__}")


def load_manifest(path: Path) -> ProjectManifest:
    try:
        data = tomllib.loads(path.read_text(encoding="utf-8"))
    except (OSError, UnicodeDecodeError) as e:
        raise ManifestError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ManifestError(f"Invalid {path}: {e}") from e

    project = data.get("project", {})
    build_data = data.get("build", {})
    runtime_data = data.get("runtime", {})

    defaults = BuildConfig()
    build = BuildConfig(
        sources=build_data.get("sources", defaults.sources),
        static_root=build_data.get("static_root", defaults.static_root),
        output_dir=build_data.get("output_dir", defaults.output_dir),
        script_ext=build_data.get("script_ext", defaults.script_ext),
        script_components=build_data.get("script_components", defaults.script_components),
        class_wrapping=build_data.get("class_wrapping", defaults.class_wrapping),
        prune=build_data.get("prune", defaults.prune),
    )
    _expect(build.sources, list, "build.sources")
    _expect(build.script_components, list, "build.script_components")
    _expect(build.class_wrapping, bool, "build.class_wrapping")
    _expect(build.prune, bool, "build.prune")
    _expect(build.static_root, str, "build.static_root")
    _expect(build.output_dir, str, "build.output_dir")
    _expect(build.script_ext, str, "build.script_ext")

    runtime = RuntimeConfig(
        content_root=runtime_data.get("content_root", "_content"),
    )
    _expect(runtime.content_root, str, "runtime.content_root")

    manifest = ProjectManifest(
        name=project.get("name", "app"),
        build=build,
        runtime=runtime,
    )
    _expect(manifest.name, str, "project.name")
    return apply_env_overrides(manifest)


def apply_env_overrides(manifest: ProjectManifest) -> ProjectManifest:
    output_dir = os.environ.get(OUTPUT_DIR_ENV_VAR, "").strip()
    if output_dir:
        manifest.build.output_dir = output_dir
    return manifest


def find_manifest(project_root: Path) -> ProjectManifest:
    """Load inlinejs.toml from ``project_root``, falling back to defaults."""
    path = project_root / MANIFEST_FILENAME
    if not path.exists():
        return apply_env_overrides(ProjectManifest())
    return load_manifest(path)
