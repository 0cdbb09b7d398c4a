"""Tests for the build pass, render file discovery, and the manifest."""

import json
from pathlib import Path

import pytest

from inlinejs.build import build_project
from inlinejs.core.errors import ManifestError, RenderFileError
from inlinejs.core.fileset import discover_render_files, load_render_file
from inlinejs.core.manifest import ProjectManifest, find_manifest, load_manifest


class TestManifest:
    def test_defaults_without_file(self, tmp_path: Path) -> None:
        manifest = find_manifest(tmp_path)

        assert manifest.name == "app"
        assert manifest.build.static_root == "wwwroot"
        assert manifest.build.output_dir == "inlinejs"
        assert manifest.build.script_components == ["Script"]
        assert manifest.output_path(tmp_path) == tmp_path / "wwwroot" / "inlinejs"

    def test_load_values(self, tmp_path: Path) -> None:
        path = tmp_path / "inlinejs.toml"
        path.write_text(
            """
[project]
name = "shop"

[build]
sources = ["ui/"]
static_root = "public"
output_dir = "scripts"
class_wrapping = true

[runtime]
content_root = "_libs"
"""
        )
        manifest = load_manifest(path)

        assert manifest.name == "shop"
        assert manifest.build.sources == ["ui/"]
        assert manifest.build.class_wrapping is True
        assert manifest.runtime.content_root == "_libs"
        assert manifest.output_path(tmp_path) == tmp_path / "public" / "scripts"

    def test_env_override(self, tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> None:
        monkeypatch.setenv("INLINEJS_OUTPUT_DIR", "generated")
        assert find_manifest(tmp_path).build.output_dir == "generated"

    def test_invalid_toml(self, tmp_path: Path) -> None:
        path = tmp_path / "inlinejs.toml"
        path.write_text("[build\n")
        with pytest.raises(ManifestError):
            load_manifest(path)

    def test_invalid_type(self, tmp_path: Path) -> None:
        path = tmp_path / "inlinejs.toml"
        path.write_text('[build]\nclass_wrapping = "yes"\n')
        with pytest.raises(ManifestError, match="class_wrapping"):
            load_manifest(path)

    @pytest.mark.parametrize(
        "toml, key",
        [
            ("[project]\nname = 3\n", "project.name"),
            ("[build]\nstatic_root = 1\n", "build.static_root"),
            ("[build]\noutput_dir = false\n", "build.output_dir"),
            ('[build]\nscript_ext = ["js"]\n', "build.script_ext"),
            ("[runtime]\ncontent_root = 0\n", "runtime.content_root"),
        ],
    )
    def test_string_values_are_checked(self, tmp_path: Path, toml: str, key: str) -> None:
        path = tmp_path / "inlinejs.toml"
        path.write_text(toml)
        with pytest.raises(ManifestError, match=f"'{key}' must be str"):
            load_manifest(path)

    def test_unreadable_file(self, tmp_path: Path) -> None:
        path = tmp_path / "inlinejs.toml"
        path.mkdir()
        with pytest.raises(ManifestError, match="Cannot read"):
            load_manifest(path)


class TestRenderFiles:
    def test_discover(self, project_dir: Path) -> None:
        (project_dir / "components" / "nested").mkdir()
        (project_dir / "components" / "nested" / "Other.render.json").write_text("[]")
        (project_dir / "components" / "README.md").write_text("not a render file")

        files = discover_render_files(project_dir, find_manifest(project_dir))
        assert [f.name for f in files] == ["Widget.render.json", "Other.render.json"]

    def test_missing_source_dir(self, tmp_path: Path) -> None:
        manifest = ProjectManifest()
        manifest.build.sources = ["nope/"]
        assert discover_render_files(tmp_path, manifest) == []

    def test_load_single_and_list(self, tmp_path: Path, make_component) -> None:
        single = tmp_path / "a.render.json"
        single.write_text(make_component("a()").model_dump_json())
        many = tmp_path / "b.render.json"
        many.write_text(
            json.dumps([make_component("b()", name="B").model_dump(mode="json"), {"name": "C"}])
        )

        assert [c.name for c in load_render_file(single)] == ["Widget"]
        assert [c.name for c in load_render_file(many)] == ["B", "C"]

    def test_invalid_render_file(self, tmp_path: Path) -> None:
        path = tmp_path / "bad.render.json"
        path.write_text('{"instructions": "nope"}')
        with pytest.raises(RenderFileError) as exc_info:
            load_render_file(path)
        assert "bad.render.json" in str(exc_info.value)


class TestBuildProject:
    def test_end_to_end(self, project_dir: Path) -> None:
        result = build_project(project_dir)

        bundle = project_dir / "wwwroot" / "inlinejs" / "App.Widget.index.g.js"
        assert result.written == [bundle]
        assert bundle.read_text(encoding="utf-8") == (
            "// Auto-generated bundle: App.Widget.index\nexport const run = () => {}\n"
        )

    def test_skips_unreadable_files(self, project_dir: Path) -> None:
        bad = project_dir / "components" / "Broken.render.json"
        bad.write_text("{not json")

        result = build_project(project_dir)

        assert result.skipped_files == [bad.resolve()]
        assert len(result.written) == 1

    def test_explicit_output_dir(self, project_dir: Path, tmp_path: Path) -> None:
        out = tmp_path / "out"
        result = build_project(project_dir, output_dir=out)
        assert result.written == [out / "App.Widget.index.g.js"]

    def test_repeated_builds_are_identical(self, project_dir: Path) -> None:
        first = build_project(project_dir).written[0].read_bytes()
        second = build_project(project_dir).written[0].read_bytes()
        assert first == second
