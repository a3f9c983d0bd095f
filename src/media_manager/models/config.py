"""Configuration model for media manager."""

from dataclasses import dataclass, fields
from pathlib import Path
from typing import Any, Dict, List, Optional
import json

import jsonschema

from ..exceptions import ConfigurationError

DEFAULT_PROMPT = "\nEnter command: "

LOG_LEVELS = ["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"]

CONFIG_SCHEMA = {
    "type": "object",
    "properties": {
        "prompt": {
            "type": "string",
            "description": "Text printed before reading each command"
        },
        "default_data_file": {
            "type": ["string", "null"],
            "minLength": 1,
            "description": "File restored at startup when restore_on_start is set"
        },
        "log_level": {
            "type": "string",
            "enum": LOG_LEVELS,
            "description": "Root logging level"
        },
        "restore_on_start": {
            "type": "boolean",
            "default": False
        },
        "encoding": {
            "type": "string",
            "minLength": 1,
            "description": "Text encoding used for save and restore files"
        }
    },
    "additionalProperties": False
}


@dataclass
class Config:
    """Main configuration model."""
    prompt: str = DEFAULT_PROMPT
    default_data_file: Optional[Path] = None
    log_level: str = "WARNING"
    restore_on_start: bool = False
    encoding: str = "utf-8"

    @classmethod
    def default(cls) -> "Config":
        return cls()

    def to_dict(self) -> Dict[str, Any]:
        data = {f.name: getattr(self, f.name) for f in fields(self)}
        if self.default_data_file is not None:
            data["default_data_file"] = str(self.default_data_file)
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "Config":
        errors = validate_config_json(data)
        if errors:
            raise ConfigurationError("; ".join(errors))

        kwargs = dict(data)
        if kwargs.get("default_data_file") is not None:
            kwargs["default_data_file"] = Path(kwargs["default_data_file"])
        return cls(**kwargs)


def validate_config_json(config_data: Any) -> List[str]:
    """Validate a configuration object.

    Returns:
        List of validation error messages
    """
    try:
        jsonschema.validate(config_data, CONFIG_SCHEMA)
        return []
    except jsonschema.ValidationError as e:
        path = " -> ".join(str(p) for p in e.absolute_path) if e.absolute_path else "root"
        return [f"Validation error at {path}: {e.message}"]


def load_config(config_path: Path) -> Config:
    """Load configuration from JSON file."""
    try:
        with open(config_path, 'r', encoding='utf-8') as f:
            config_data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigurationError(
            f"JSON parsing error in {config_path}: {e.msg} at line {e.lineno}, column {e.colno}"
        ) from e
    except OSError as e:
        raise ConfigurationError(f"Error reading {config_path}: {e}") from e

    return Config.from_dict(config_data)


def save_config(config: Config, config_path: Path) -> None:
    """Save configuration to JSON file."""
    with open(config_path, 'w', encoding='utf-8') as f:
        json.dump(config.to_dict(), f, indent=2)
