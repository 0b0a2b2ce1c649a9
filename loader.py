"""Manifest driven tool loader."""

import importlib
import inspect
import json
import logging
from functools import wraps
from pathlib import Path
from typing import Any, Callable, Type

from pydantic import BaseModel

logger = logging.getLogger(__name__)

TOOLS_DIR = Path(__file__).parent / "tools"


class ToolManifest:
    """Handles manifest loading with sensible defaults."""

    DEFAULT_MANIFEST = {
        "name": "unnamed_tool",
        "description": "No description provided.",
        "tags": [],
    }

    def __init__(self, tool_dir: Path):
        self.manifest = self.DEFAULT_MANIFEST.copy()
        manifest_path = Path(tool_dir) / "manifest.json"

        if not manifest_path.exists():
            logger.warning("No manifest.json found at %s", manifest_path)
            return

        try:
            with open(manifest_path, encoding="utf-8") as f:
                self.manifest.update(json.load(f))
        except (PermissionError, json.JSONDecodeError) as e:
            logger.warning("Could not read manifest.json at %s: %s", manifest_path, e)

    def get(self, key: str, default=None):
        return self.manifest.get(key, default)

    @property
    def name(self) -> str:
        return self.manifest["name"]

    @property
    def description(self) -> str:
        return self.manifest["description"]

    @property
    def tags(self) -> list:
        return self.manifest.get("tags", [])

    @property
    def entry_function(self) -> str | None:
        return self.manifest.get("entry_function")


def create_simple_tool(
    tool_dir: Path,
    func: Callable[..., Any],
    output_schema: dict | Type[BaseModel] | None = None,
) -> Callable:
    """
    Build a register function that exposes `func` as an MCP tool.

    Args:
        tool_dir: The tool's directory (containing manifest.json)
        func: The synchronous function implementing the tool
        output_schema: Optional output schema (dict or Pydantic model class)

    Returns:
        A function taking the FastMCP server and registering the tool on it
    """
    manifest = ToolManifest(tool_dir)

    def register(mcp):
        @mcp.tool(
            name=manifest.name,
            description=manifest.description,
            output_schema=output_schema,
        )
        @wraps(func)
        async def wrapper(*args, **kwargs):
            return func(*args, **kwargs)

        # FastMCP derives the input schema from the signature
        wrapper.__signature__ = inspect.signature(func)

        return wrapper

    return register


def find_output_model(module) -> Type[BaseModel] | None:
    """
    Pick the tool's result model from an output_model module.

    A class whose name ends in "Output" wins over helper models defined in
    the same module.
    """
    models = [
        attr
        for _, attr in inspect.getmembers(module, inspect.isclass)
        if issubclass(attr, BaseModel) and attr is not BaseModel
    ]
    for model in models:
        if model.__name__.endswith("Output"):
            return model
    return models[0] if models else None


def _load_output_schema(tools_dir: Path, tool_folder: Path, tool_name: str) -> dict | None:
    try:
        module = importlib.import_module(f"{tools_dir.name}.{tool_folder.name}.output_model")
    except ImportError:
        module = None

    if module is not None:
        model = find_output_model(module)
        if model is not None:
            logger.info("Using Pydantic model %s for %s", model.__name__, tool_name)
            return model.model_json_schema()

    schema_path = tool_folder / "output.json"
    if not schema_path.exists():
        return None
    try:
        with open(schema_path, encoding="utf-8") as f:
            schema = json.load(f)
    except (OSError, json.JSONDecodeError) as e:
        logger.warning("Could not load output schema for %s: %s", tool_name, e)
        return None
    logger.info("Using JSON schema for %s", tool_name)
    return schema


def load_tools_from_directory(mcp, tools_dir: str | Path = TOOLS_DIR):
    """
    Register every tool found under `tools_dir`.

    Each tool lives in its own folder with a manifest.json naming the tool
    and its entry function in tool.py. Folders without a manifest are
    skipped; folders whose tool cannot be imported are reported as failed.

    Returns:
        Dict with the "loaded" tool names and the "failed" folder names
    """
    tools_dir = Path(tools_dir)
    loaded = []
    failed = []

    for tool_folder in sorted(tools_dir.iterdir()):
        if not tool_folder.is_dir() or tool_folder.name.startswith((".", "__")):
            continue

        if not (tool_folder / "manifest.json").exists():
            logger.info("Skipping %s: no manifest.json", tool_folder.name)
            continue

        try:
            manifest = ToolManifest(tool_folder)
            if manifest.name == ToolManifest.DEFAULT_MANIFEST["name"]:
                raise ValueError("manifest.json missing 'name' field")
            tool_name = manifest.name

            module = importlib.import_module(f"{tools_dir.name}.{tool_folder.name}.tool")
            entry = manifest.entry_function
            if not entry or not hasattr(module, entry):
                raise AttributeError(f"tool.py missing function '{entry}'")

            output_schema = _load_output_schema(tools_dir, tool_folder, tool_name)
            create_simple_tool(tool_folder, getattr(module, entry), output_schema)(mcp)
        except (ImportError, AttributeError, ValueError) as e:
            failed.append(tool_folder.name)
            logger.error("Failed to load tool %s: %s", tool_folder.name, e)
            continue

        loaded.append(tool_name)
        logger.info("Loaded tool %s", tool_name)

    logger.info("Loaded %d tools", len(loaded))
    if failed:
        logger.warning("Failed to load %d tools: %s", len(failed), ", ".join(failed))

    return {"loaded": loaded, "failed": failed}
