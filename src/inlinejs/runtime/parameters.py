"""
Strict parameter binding for script sites.

Unlike the build-time extractor, which ignores names it does not know, a
script site rejects any parameter outside its allow-list.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from pydantic import BaseModel, ConfigDict, Field
from pydantic import ValidationError as PydanticValidationError

from inlinejs.core.errors import ParameterValueError, UnknownParameterError
from inlinejs.core.naming import GLOBAL_INDEX


class ScriptParameters(BaseModel):
    """
    Configuration of one script site, as assigned by the host.

    Fields are populated from the template parameter names (aliases).
    """

    child_content: Any = Field(default=None, alias="ChildContent")
    global_bundle: bool = Field(default=False, alias="GlobalBundle")
    bundle_name: str | None = Field(default=GLOBAL_INDEX, alias="BundleName")
    on_init: str | None = Field(default=None, alias="OnInit")
    on_unload: str | None = Field(default=None, alias="OnUnload")
    script_file: str | None = Field(default=None, alias="ScriptFile")
    as_class: bool = Field(default=True, alias="AsClass")
    class_name: str | None = Field(default=None, alias="ClassName")
    add_to_global: bool = Field(default=False, alias="AddToGlobal")
    add_as_instance: bool = Field(default=False, alias="AddAsInstance")
    host_ref: Any = Field(default=None, alias="HostRef")

    model_config = ConfigDict(frozen=True, strict=True, extra="forbid")


ALLOWED_PARAMETERS: frozenset[str] = frozenset(
    field.alias for field in ScriptParameters.model_fields.values() if field.alias
)


def bind_parameters(parameters: Mapping[str, Any]) -> ScriptParameters:
    """
    Validate host-supplied parameters against the allow-list.

    Raises:
        UnknownParameterError: For a name outside the allow-list
        ParameterValueError: For a value of the wrong type
    """
    for name in parameters:
        if name not in ALLOWED_PARAMETERS:
            raise UnknownParameterError(name)

    try:
        return ScriptParameters.model_validate(dict(parameters))
    except PydanticValidationError as e:
        raise ParameterValueError(f"Invalid script parameters: {e}") from e
