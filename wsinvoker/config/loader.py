"""Configuration loading utilities."""

import json
from pathlib import Path
from typing import Any

from pydantic import ValidationError

from wsinvoker.config.schema import InvokerOptions


def get_options_path() -> Path:
    """Get the default configuration file path."""
    return Path.home() / ".wsinvoker" / "config.json"


def load_options(config_path: Path | None = None) -> InvokerOptions:
    """
    Load options from file or create defaults.

    Args:
        config_path: Optional path to config file. Uses default if not provided.

    Returns:
        Loaded options object.
    """
    path = config_path or get_options_path()

    if path.exists():
        try:
            with open(path, encoding="utf-8") as f:
                data = json.load(f)
            if not isinstance(data, dict):
                raise ValueError("top-level value must be an object")
            return InvokerOptions.model_validate(convert_keys(data))
        except (json.JSONDecodeError, ValidationError, ValueError) as e:
            raise ValueError(
                f"Failed to load config from {path}: {e}. "
                "Fix the file or remove it to use defaults."
            ) from e

    return InvokerOptions()


def save_options(options: InvokerOptions, config_path: Path | None = None) -> Path:
    """Write options to disk with camelCase keys."""
    path = config_path or get_options_path()
    path.parent.mkdir(parents=True, exist_ok=True)
    data = {snake_to_camel(k): v for k, v in options.model_dump().items()}
    with open(path, "w", encoding="utf-8") as f:
        json.dump(data, f, indent=2)
    return path


def convert_keys(data: Any) -> Any:
    """Convert camelCase keys to snake_case for Pydantic."""
    if isinstance(data, dict):
        return {camel_to_snake(k): convert_keys(v) for k, v in data.items()}
    if isinstance(data, list):
        return [convert_keys(item) for item in data]
    return data


def camel_to_snake(name: str) -> str:
    """Convert camelCase to snake_case."""
    result = []
    for i, char in enumerate(name):
        if char.isupper() and i > 0:
            result.append("_")
        result.append(char.lower())
    return "".join(result)


def snake_to_camel(name: str) -> str:
    """Convert snake_case to camelCase."""
    components = name.split("_")
    return components[0] + "".join(x.title() for x in components[1:])
