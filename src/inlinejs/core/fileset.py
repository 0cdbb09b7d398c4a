import logging
from pathlib import Path

from pydantic import TypeAdapter
from pydantic import ValidationError as PydanticValidationError

from .errors import make_render_file_error
from .ir import ComponentDefinition
from .manifest import ProjectManifest

logger = logging.getLogger(__name__)

RENDER_FILE_GLOB = "*.render.json"

_definitions_adapter: TypeAdapter[ComponentDefinition | list[ComponentDefinition]] = TypeAdapter(
    ComponentDefinition | list[ComponentDefinition]
)


def discover_render_files(root: Path, manifest: ProjectManifest) -> list[Path]:
    files: list[Path] = []
    for rel in manifest.build.sources:
        base = (root / rel).resolve()
        if not base.exists():
            logger.debug("Render source %s does not exist, skipping", base)
            continue
        for p in base.rglob(RENDER_FILE_GLOB):
            files.append(p)
    return sorted(set(files))


def load_render_file(path: Path) -> list[ComponentDefinition]:
    """
    Read the component definitions stored in a render file.

    Raises:
        RenderFileError: If the file cannot be read or does not validate.
    """
    try:
        raw = path.read_bytes()
    except OSError as e:
        raise make_render_file_error(f"Cannot read render file: {e}", path) from e

    try:
        parsed = _definitions_adapter.validate_json(raw)
    except PydanticValidationError as e:
        raise make_render_file_error(f"Invalid render file: {e}", path) from e

    if isinstance(parsed, ComponentDefinition):
        return [parsed]
    return parsed
