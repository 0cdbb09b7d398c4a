"""Shared pytest fixtures for inlinejs tests."""

from __future__ import annotations

import asyncio
from pathlib import Path
from types import SimpleNamespace
from typing import Any

import pytest

from inlinejs.core.ir import ComponentDefinition, Instruction, InstructionKind
from inlinejs.runtime.bridge import ScriptEngineBridge


def open_script(sequence: int = 0, type_name: str = "Script") -> Instruction:
    return Instruction(kind=InstructionKind.OPEN_COMPONENT, sequence=sequence, name=type_name)


def close_component(sequence: int = 0) -> Instruction:
    return Instruction(kind=InstructionKind.CLOSE_COMPONENT, sequence=sequence)


def parameter(name: str, value: Any, literal: bool = True, sequence: int = 0) -> Instruction:
    return Instruction(
        kind=InstructionKind.ADD_COMPONENT_PARAMETER,
        sequence=sequence,
        name=name,
        value=value,
        literal=literal,
    )


def markup(text: str, literal: bool = True, sequence: int = 0) -> Instruction:
    return Instruction(
        kind=InstructionKind.ADD_MARKUP_CONTENT, sequence=sequence, value=text, literal=literal
    )


def script_component(
    body: str,
    name: str = "Widget",
    namespace: str | None = "App",
    **parameters: Any,
) -> ComponentDefinition:
    """A component declaring a single script with the given parameters."""
    instructions = [open_script()]
    instructions += [parameter(key, value) for key, value in parameters.items()]
    instructions += [markup(body), close_component()]
    return ComponentDefinition(name=name, namespace=namespace, instructions=instructions)


class FakeModule:
    """Module handle returned by FakeBridge."""

    def __init__(self, path: str):
        self.path = path

    def __repr__(self) -> str:
        return f"FakeModule({self.path!r})"


class FakeBridge(ScriptEngineBridge):
    """In-memory script engine recording every call."""

    def __init__(self) -> None:
        self.imports: list[str] = []
        self.invocations: list[tuple[FakeModule, str, tuple[Any, ...]]] = []
        self.disposed: list[FakeModule] = []
        self.missing: set[str] = set()
        self.failing: set[str] = set()
        self.failing_calls: set[str] = set()
        self.results: dict[str, Any] = {}

    async def import_module(self, path: str) -> FakeModule | None:
        self.imports.append(path)
        await asyncio.sleep(0)
        if path in self.failing:
            raise RuntimeError(f"network error loading {path}")
        if path in self.missing:
            return None
        return FakeModule(path)

    async def invoke(self, module: FakeModule, identifier: str, *args: Any) -> Any:
        await asyncio.sleep(0)
        self.invocations.append((module, identifier, args))
        if identifier in self.failing_calls:
            raise RuntimeError(f"{identifier} failed")
        return self.results.get(identifier)

    async def dispose(self, module: FakeModule) -> None:
        self.disposed.append(module)

    def invoked(self, identifier: str) -> list[tuple[FakeModule, str, tuple[Any, ...]]]:
        return [call for call in self.invocations if call[1] == identifier]


@pytest.fixture
def bridge() -> FakeBridge:
    return FakeBridge()


@pytest.fixture
def project_dir(tmp_path: Path) -> Path:
    """A project with one component in components/Widget.render.json."""
    components = tmp_path / "components"
    components.mkdir()
    widget = script_component("export const run = () => {}", BundleName="index")
    (components / "Widget.render.json").write_text(widget.model_dump_json(), encoding="utf-8")
    (tmp_path / "inlinejs.toml").write_text(
        '[project]\nname = "App"\n\n[build]\nsources = ["components/"]\n',
        encoding="utf-8",
    )
    return tmp_path.resolve()


@pytest.fixture
def make_component():
    return script_component


@pytest.fixture
def ins() -> SimpleNamespace:
    """Render-instruction builders."""
    return SimpleNamespace(
        open=open_script,
        close=close_component,
        param=parameter,
        markup=markup,
    )
