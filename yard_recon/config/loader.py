from __future__ import annotations

import json
from dataclasses import dataclass
from pathlib import Path
from typing import Any

import jsonschema
import yaml
from jsonschema.exceptions import ValidationError

"""Config loader.

Responsibilities:
- Load YAML (default config/recon.yml)
- Validate against the packaged JSON schema (config_schema.json)
- Apply defaults for every optional key
"""

__all__ = [
    "DEFAULT_CONFIG_PATH",
    "ConfigError",
    "ReconConfig",
    "load_config",
]

SCHEMA_PATH = Path(__file__).with_name("config_schema.json")
DEFAULT_CONFIG_PATH = Path("config/recon.yml")


class ConfigError(Exception):
    pass


@dataclass(frozen=True)
class ReconConfig:
    yms_path: str | None = None
    dockdash_path: str | None = None
    copy_to_clipboard: bool = False
    summary_output: str | None = None
    error_log_dir: str = "./logs"
    progress: bool = True


def _validate_config_schema(data: dict[str, Any]) -> None:
    """Validate config data against JSON schema.

    Raises:
        ConfigError: schema file missing / not valid JSON, or data fails validation
    """
    if not SCHEMA_PATH.exists():
        raise ConfigError(f"config schema not found: {SCHEMA_PATH}")

    try:
        schema = json.loads(SCHEMA_PATH.read_text(encoding="utf-8"))
        jsonschema.validate(data, schema)
    except json.JSONDecodeError as e:
        raise ConfigError(f"invalid schema file: {e}") from e
    except ValidationError as e:
        raise ConfigError(f"config validation failed: {e.message}") from e


def load_config(path: Path | None = None, *, required: bool = True) -> ReconConfig:
    """Load configuration from ``path``.

    A missing file is an error when ``required`` is True, otherwise defaults
    are returned (the default config file is optional).
    """
    path = path if path is not None else DEFAULT_CONFIG_PATH
    if not path.exists():
        if required:
            raise ConfigError(f"config file not found: {path}")
        return ReconConfig()
    try:
        data = yaml.safe_load(path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as e:
        raise ConfigError(f"invalid yaml: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"config root must be a mapping: {path}")

    _validate_config_schema(data)

    defaults = ReconConfig()
    return ReconConfig(
        yms_path=data.get("yms_path", defaults.yms_path),
        dockdash_path=data.get("dockdash_path", defaults.dockdash_path),
        copy_to_clipboard=data.get("copy_to_clipboard", defaults.copy_to_clipboard),
        summary_output=data.get("summary_output", defaults.summary_output),
        error_log_dir=data.get("error_log_dir", defaults.error_log_dir),
        progress=data.get("progress", defaults.progress),
    )
