"""
Optional YAML settings for the CLI (``gcemodel.yaml`` in the working directory).
"""
import os
from dataclasses import dataclass
from typing import Optional

import yaml
from rich.console import Console

console = Console(stderr=True)

DEFAULT_CONFIG_FILE = "gcemodel.yaml"
FORMATS = ("table", "json", "markdown", "html")


@dataclass
class Settings:
    project: Optional[str] = None
    format: str = "table"
    zone: Optional[str] = None


def load_settings(path: Optional[str] = None) -> Settings:
    """
    Read settings from ``path`` or, when not given, from ``gcemodel.yaml`` if it
    exists. Unknown keys are ignored; an unreadable file falls back to defaults.
    """
    config_file = path or DEFAULT_CONFIG_FILE
    if not os.path.exists(config_file):
        if path:
            console.print(f"[yellow]Warning:[/yellow] config file '{path}' does not exist, using defaults.")
        return Settings()

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as exc:
        console.print(f"[yellow]Warning:[/yellow] could not read {config_file}: {exc}")
        return Settings()

    if not isinstance(data, dict):
        console.print(f"[yellow]Warning:[/yellow] {config_file} is not a mapping, using defaults.")
        return Settings()

    settings = Settings(project=data.get("project"), zone=data.get("zone"))
    fmt = str(data.get("format", settings.format)).lower()
    if fmt in FORMATS:
        settings.format = fmt
    else:
        console.print(f"[yellow]Warning:[/yellow] unknown format '{fmt}' in {config_file}, using 'table'.")
    return settings
