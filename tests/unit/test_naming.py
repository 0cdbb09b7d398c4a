"""Tests for bundle naming."""

import pytest

from inlinejs.core.naming import (
    GLOBAL_INDEX,
    bundle_filename,
    js_class_name,
    qualify_identifier,
    resolve_bundle_key,
)


class TestResolveBundleKey:
    """Bundle keys must be identical on the build and run side."""

    def test_global_without_name_uses_index(self) -> None:
        assert resolve_bundle_key(True, None, "App.Foo") == "index"

    def test_global_with_name(self) -> None:
        assert resolve_bundle_key(True, "test", "App.Foo") == "test"

    def test_component_bundle(self) -> None:
        assert resolve_bundle_key(False, "index", "App.Foo") == "App.Foo.index"

    def test_component_bundle_defaults_name(self) -> None:
        assert resolve_bundle_key(False, None, "App.Foo") == f"App.Foo.{GLOBAL_INDEX}"

    def test_global_ignores_owner(self) -> None:
        assert resolve_bundle_key(True, "shared", "A.B") == resolve_bundle_key(True, "shared", "C.D")

    @pytest.mark.parametrize(
        "args",
        [(True, None, "App.Foo"), (False, "charts", "App.Foo"), (False, "index", "Lib.Deep.Bar")],
    )
    def test_deterministic(self, args: tuple) -> None:
        assert resolve_bundle_key(*args) == resolve_bundle_key(*args)

    def test_dotted_owners_can_collide(self) -> None:
        """Known limitation: the separator also appears inside identities."""
        assert resolve_bundle_key(False, "C", "A.B") == resolve_bundle_key(False, "B.C", "A")


class TestFileNames:
    def test_bundle_filename(self) -> None:
        assert bundle_filename("App.Widget.index") == "App.Widget.index.g.js"

    def test_bundle_filename_custom_ext(self) -> None:
        assert bundle_filename("index", "mjs") == "index.g.mjs"


class TestClassNames:
    def test_js_class_name(self) -> None:
        assert js_class_name("Blazor.Tests.Bundled") == "Blazor_Tests_Bundled"

    def test_qualify_identifier(self) -> None:
        assert qualify_identifier("run", "App_Widget") == "App_Widget.run"

    def test_qualify_without_class(self) -> None:
        assert qualify_identifier("run", None) == "run"
