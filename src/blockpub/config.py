"""Application configuration: settings schema and config.yaml loader"""

import os
from pathlib import Path
from typing import Any, Optional

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "config.yaml"
ENV_PREFIX = "BLOCKPUB_"


class Settings(BaseModel):
    app_name:    str = "blockpub"
    db_url:      str = "sqlite:///blockpub.db"
    source_dir:  str = Field(default="site",  description="Directory holding content/, css/, and templates/")
    output_dir:  str = Field(default="dist",  description="Directory the site is built into")
    site_config: Optional[str] = Field(default=None, description="Site JSON file; defaults to <source_dir>/config.json")
    markdown_preset: str = Field(default="commonmark", description="MarkdownIt preset for markdown->html blocks")
    debug:       bool = Field(default=False, description="Log debug output during builds")


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from config.yaml, then BLOCKPUB_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"{ENV_PREFIX}{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
