"""
inlinejs Intermediate Representation (IR) types.

Render instructions come in from the host component compiler; script
fragments and bundle groups are produced by the build pipeline.
"""

from .fragments import BundleGroup, ScriptFragment
from .instructions import (
    CONTENT_KINDS,
    ComponentDefinition,
    Instruction,
    InstructionKind,
    LiteralValue,
)

__all__ = [
    "CONTENT_KINDS",
    "BundleGroup",
    "ComponentDefinition",
    "Instruction",
    "InstructionKind",
    "LiteralValue",
    "ScriptFragment",
]
