"""
Script extraction from flattened render-instruction streams.

A script declaration appears in the stream as an ``open_component`` for a
script component, followed by its parameter and content instructions, and
closed by the next ``close_component``. Declarations are not nested in the
supported template syntax, so a linear scan for the close marker is enough.

Only literal values can be recovered at build time. A computed parameter
silently falls back to its default, and a declaration without literal
content produces no script at all.
"""

from __future__ import annotations

import logging
from collections.abc import Sequence
from dataclasses import dataclass, field
from typing import Any

from inlinejs.core.errors import ExtractionSkip
from inlinejs.core.ir import (
    CONTENT_KINDS,
    ComponentDefinition,
    Instruction,
    InstructionKind,
    ScriptFragment,
)
from inlinejs.core.naming import GLOBAL_INDEX

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class BuildParameter:
    """A script parameter understood at build time."""

    name: str  # Parameter name as written in the template
    attr: str  # ScriptFragment field it fills
    type: type
    default: Any = None


# Presentation-only parameters (OnInit, HostRef, ...) are runtime concerns
# and are ignored here.
BUILD_PARAMETERS: tuple[BuildParameter, ...] = (
    BuildParameter("GlobalBundle", "global_bundle", bool, False),
    BuildParameter("BundleName", "bundle_name", str, GLOBAL_INDEX),
    BuildParameter("ScriptFile", "script_file", str, None),
    BuildParameter("AsClass", "as_class", bool, True),
    BuildParameter("ClassName", "class_name", str, None),
    BuildParameter("AddToGlobal", "add_to_global", bool, False),
    BuildParameter("AddAsInstance", "add_as_instance", bool, False),
)


@dataclass
class ExtractorOptions:
    """Options controlling which components count as script declarations."""

    script_components: Sequence[str] = field(default_factory=lambda: ("Script",))


class ScriptExtractor:
    """
    Recover script fragments from a component's render instructions.

    Each declaration is handled independently; a malformed declaration is
    skipped without affecting the others.
    """

    def __init__(self, options: ExtractorOptions | None = None):
        self.options = options or ExtractorOptions()
        self._script_components = frozenset(self.options.script_components)

    def extract(self, component: ComponentDefinition) -> list[ScriptFragment]:
        """
        Extract every script fragment declared by a component.

        Args:
            component: Compiled component definition

        Returns:
            Fragments in declaration order (possibly empty)
        """
        instructions = component.instructions
        fragments: list[ScriptFragment] = []

        for position, instruction in enumerate(instructions):
            if not self._is_open_marker(instruction):
                continue
            try:
                fragments.append(self._extract_declaration(component, instructions, position))
            except ExtractionSkip as skip:
                logger.debug(
                    "Skipping script in %s @%d: %s",
                    component.owner_id,
                    instruction.sequence,
                    skip.message,
                )

        return fragments

    def _is_open_marker(self, instruction: Instruction) -> bool:
        return (
            instruction.kind == InstructionKind.OPEN_COMPONENT
            and instruction.component_type_name in self._script_components
        )

    def _extract_declaration(
        self,
        component: ComponentDefinition,
        instructions: Sequence[Instruction],
        open_position: int,
    ) -> ScriptFragment:
        close_position = _find_close(instructions, open_position)
        if close_position < 0:
            raise ExtractionSkip("no closing marker")

        declaration = instructions[open_position:close_position]

        # Last literal content wins
        content = next(
            (
                ins
                for ins in reversed(declaration)
                if ins.kind in CONTENT_KINDS and ins.literal and isinstance(ins.value, str)
            ),
            None,
        )
        if content is None:
            raise ExtractionSkip("no literal content")

        body = str(content.value).strip()
        if not body:
            raise ExtractionSkip("empty script body")

        values = {
            parameter.attr: self._parameter_value(component, declaration, parameter)
            for parameter in BUILD_PARAMETERS
        }
        return ScriptFragment(owner_id=component.owner_id, body=body, **values)

    def _parameter_value(
        self,
        component: ComponentDefinition,
        declaration: Sequence[Instruction],
        parameter: BuildParameter,
    ) -> Any:
        instruction = next(
            (
                ins
                for ins in declaration
                if ins.kind == InstructionKind.ADD_COMPONENT_PARAMETER and ins.name == parameter.name
            ),
            None,
        )
        if instruction is None or not instruction.literal:
            return parameter.default

        try:
            return coerce_literal(instruction.value, parameter.type)
        except ValueError:
            logger.warning(
                "Cannot read %s=%r in %s, using default %r",
                parameter.name,
                instruction.value,
                component.owner_id,
                parameter.default,
            )
            return parameter.default


def _find_close(instructions: Sequence[Instruction], start: int) -> int:
    for position in range(start, len(instructions)):
        if instructions[position].kind == InstructionKind.CLOSE_COMPONENT:
            return position
    return -1


def coerce_literal(value: Any, target: type) -> Any:
    """
    Convert a literal parameter value to its expected primitive type.

    Raises:
        ValueError: If the value cannot be converted
    """
    if value is None:
        if target is bool:
            raise ValueError("null is not a bool")
        return None

    if target is bool:
        if isinstance(value, bool):
            return value
        if isinstance(value, str) and value.strip().lower() in ("true", "false"):
            return value.strip().lower() == "true"
        raise ValueError(f"{value!r} is not a bool")

    if target is str:
        return value if isinstance(value, str) else str(value)

    raise ValueError(f"Unsupported parameter type {target.__name__}")


def extract_fragments(
    component: ComponentDefinition,
    options: ExtractorOptions | None = None,
) -> list[ScriptFragment]:
    """Convenience wrapper around :class:`ScriptExtractor`."""
    return ScriptExtractor(options).extract(component)
