"""
Bundle naming shared by the build emitter and the runtime resolver.

Both halves compute file names with these functions and never talk to each
other directly, so the functions must stay pure.

Owner identities are dot-qualified (``App.Widget``) and the bundle key uses the
same separator. Two distinct owners can therefore produce the same key
(``A.B`` + ``C`` vs ``A`` + ``B.C``); that collision is accepted.
"""

from __future__ import annotations

# Name of the bundle used for global scripts without an explicit BundleName
GLOBAL_INDEX = "index"

# Directory (under the static root) that holds generated bundles
JS_OUTPUT = "inlinejs"

# Default script file extension
SCRIPT_EXT = "js"

KEY_SEPARATOR = "."


def resolve_bundle_key(global_bundle: bool, bundle_name: str | None, owner_id: str) -> str:
    """
    Compute the bundle key for a script declaration.

    Examples:
        >>> resolve_bundle_key(True, None, "App.Foo")
        'index'
        >>> resolve_bundle_key(True, "test", "App.Foo")
        'test'
        >>> resolve_bundle_key(False, "index", "App.Foo")
        'App.Foo.index'
    """
    if global_bundle:
        return bundle_name or GLOBAL_INDEX
    return f"{owner_id}{KEY_SEPARATOR}{bundle_name or GLOBAL_INDEX}"


def bundle_filename(bundle_key: str, script_ext: str = SCRIPT_EXT) -> str:
    """File name a bundle is written to: ``{key}.g.{ext}``."""
    return f"{bundle_key}.g.{script_ext}"


def js_class_name(owner_id: str) -> str:
    """Name of the synthetic class wrapping an owner's scripts (``App.Foo`` -> ``App_Foo``)."""
    return owner_id.replace(KEY_SEPARATOR, "_")


def qualify_identifier(identifier: str, class_name: str | None) -> str:
    """Prefix an exported identifier with its wrapping class, if any."""
    if not class_name:
        return identifier
    return f"{class_name}.{identifier}"
