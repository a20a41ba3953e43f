from __future__ import annotations

from typing import Any, Dict, Optional

from pydantic import ValidationError

from modulescope.core.config.io import read_json_file
from modulescope.core.config.models import VIEW_CONFIG_SCHEMA_VERSION, ViewConfig
from modulescope.core.config.paths import ConfigFsPaths
from modulescope.core.errors import ConfigError


def default_config_dict() -> Dict[str, Any]:
    return ViewConfig().model_dump()


def validate_and_normalize(raw: Dict[str, Any]) -> ViewConfig:
    if not isinstance(raw, dict):
        raise ConfigError("view.json must be an object.")
    try:
        schema_version = int(raw.get("schema_version", VIEW_CONFIG_SCHEMA_VERSION))
    except (TypeError, ValueError) as e:
        raise ConfigError("view.json schema_version must be an integer.") from e
    if schema_version != VIEW_CONFIG_SCHEMA_VERSION:
        raise ConfigError(f"view.json schema_version mismatch (expected {VIEW_CONFIG_SCHEMA_VERSION}).", schema_version=schema_version)
    try:
        return ViewConfig.model_validate(raw)
    except ValidationError as e:
        raise ConfigError(str(e)[:300]) from e


def load_view_config(fs: Optional[ConfigFsPaths] = None, *, logger=None) -> ViewConfig:
    """
    Read config/view.json. A missing file yields defaults; a corrupt or invalid
    file is a ConfigError (never silently replaced).
    """
    fs = fs or ConfigFsPaths(".")
    rr = read_json_file(fs.view)
    if not rr.ok:
        if rr.error == "missing":
            if logger:
                logger.info(f"No view config at {fs.view}; using defaults.")
            return ViewConfig()
        raise ConfigError(f"view.json unreadable: {rr.error}", path=fs.view)
    cfg = validate_and_normalize(rr.data)
    if logger:
        logger.info(f"Loaded view config from {fs.view}")
    return cfg

