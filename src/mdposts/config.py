"""Application configuration: settings schema and mdposts.yaml loader"""

import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field


CONFIG_FILE = "mdposts.yaml"


class Settings(BaseModel):
    app_name:      str = "mdposts"
    content_dir:   str = Field(default="content",             description="Root directory scanned for .md posts")
    site_origin:   str = Field(default="https://example.com", description="Absolute origin used for banner and canonical URLs")
    posts_route:   str = Field(default="posts",               description="Route segment under which posts are served")
    parser_config: str = Field(default="gfm-like",            description="MarkdownIt parser preset name")
    output_dir:    str = Field(default="dist",                description="Directory for exported JSON files")
    log_level:     str = Field(default="WARNING", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    host:          str = "127.0.0.1"
    port:          int = Field(default=8000, ge=1, le=65535)


def load_config(overrides: dict[str, Any] = None) -> Settings:
    """Load Settings from mdposts.yaml, then MDPOSTS_<FIELD> env vars, then non-None CLI overrides."""
    data: dict[str, Any] = {}
    if Path(CONFIG_FILE).exists():
        try:
            data = yaml.safe_load(Path(CONFIG_FILE).read_text()) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid {CONFIG_FILE}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Invalid {CONFIG_FILE}: expected a mapping, got {type(data).__name__}")

    for name in Settings.model_fields:
        if val := os.getenv(f"MDPOSTS_{name.upper()}"):
            data[name] = val

    if overrides:
        data.update({k: v for k, v in overrides.items() if v is not None})
    return Settings(**data)
