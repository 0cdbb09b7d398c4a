"""
Render-instruction types for inlinejs IR.

A component definition is compiled by the host framework into a flat
sequence of render instructions. The extractor only ever looks at this
flattened form; it never sees the component's source template.

JSON form (one ``*.render.json`` file may hold one definition or a list):

    {
      "namespace": "App",
      "name": "Widget",
      "instructions": [
        {"kind": "open_component", "sequence": 0, "name": "Script"},
        {"kind": "add_component_parameter", "sequence": 1, "name": "GlobalBundle", "value": true},
        {"kind": "add_markup_content", "sequence": 2, "value": "export const run = () => {}"},
        {"kind": "close_component"}
      ]
    }
"""

from __future__ import annotations

from enum import StrEnum

from pydantic import BaseModel, ConfigDict, Field

LiteralValue = str | bool | int | float | None


class InstructionKind(StrEnum):
    """Kinds of render instructions."""

    OPEN_ELEMENT = "open_element"
    CLOSE_ELEMENT = "close_element"
    OPEN_COMPONENT = "open_component"  # name = component type
    CLOSE_COMPONENT = "close_component"
    ADD_COMPONENT_PARAMETER = "add_component_parameter"  # name = parameter name
    ADD_ATTRIBUTE = "add_attribute"
    ADD_MARKUP_CONTENT = "add_markup_content"
    ADD_CONTENT = "add_content"


CONTENT_KINDS = frozenset({InstructionKind.ADD_MARKUP_CONTENT, InstructionKind.ADD_CONTENT})


class Instruction(BaseModel):
    """
    A single render instruction.

    Attributes:
        kind: Instruction kind
        sequence: Position assigned by the host compiler
        name: Component type (open_component) or parameter/attribute name
        value: Literal value carried by the instruction
        literal: False when the value is a computed expression unknown at build time
    """

    kind: InstructionKind
    sequence: int = 0
    name: str | None = None
    value: LiteralValue = None
    literal: bool = True

    model_config = ConfigDict(frozen=True)

    @property
    def component_type_name(self) -> str | None:
        """Unqualified component type name with generic arguments stripped."""
        if self.name is None:
            return None
        name = self.name.split("<", 1)[0]
        return name.rsplit(".", 1)[-1].removeprefix("global::")


class ComponentDefinition(BaseModel):
    """A compiled component: its identity and render-instruction stream."""

    name: str
    namespace: str | None = None
    instructions: list[Instruction] = Field(default_factory=list)

    model_config = ConfigDict(frozen=True)

    @property
    def owner_id(self) -> str:
        """Qualified identity used to name this component's bundles."""
        if self.namespace:
            return f"{self.namespace}.{self.name}"
        return self.name
