"""Application configuration: settings schema and layered loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "MDPAGE_"


class Settings(BaseModel):
    app_name:   str = "mdpage"
    db_url:     str = "sqlite:///mdpage.db"
    style:      str = Field(default="editorial", description="Default style preset name")
    accent:     Optional[str] = Field(default=None, pattern=r"^#(?:[0-9a-fA-F]{3}|[0-9a-fA-F]{6})$",
                                      description="Accent override for links and blockquote borders")
    output_dir: str = Field(default="dist", description="Directory for generated .tsx + .json files")
    public:     bool = Field(default=True, description="Whether published pages are public")
    log_level:  str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR)$")


def _read_config_file(path: Path) -> dict[str, Any]:
    if not path.exists():
        return {}
    try:
        return yaml.safe_load(path.read_text()) or {}
    except yaml.YAMLError as e:
        raise ValueError(f"Invalid {path.name}: {e}") from e


def _read_env() -> dict[str, str]:
    """Non-empty MDPAGE_<FIELD> variables, keyed by field name."""
    found = {name: os.getenv(ENV_PREFIX + name.upper()) for name in Settings.model_fields}
    return {name: val for name, val in found.items() if val}


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Layer config.yaml, then env vars, then non-None CLI overrides into Settings."""
    data = _read_config_file(Path(CONFIG_FILE))
    data.update(_read_env())
    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
