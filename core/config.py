"""Extension configuration loaded from YAML."""
import logging
from pathlib import Path
from typing import List, Optional

import yaml
from pydantic import BaseModel, ValidationError

ROOT = Path(__file__).resolve().parent.parent
CONFIG_PATH = ROOT / "config" / "config.yaml"


class ConfigError(ValueError):
    """Raised when the configuration file cannot be read or validated."""


class ExtensionConfig(BaseModel):
    known_categories: List[str] = ["all", "bonus"]
    grand_total_label: str = "all"
    log_level: str = "INFO"


def load_config(path: Optional[Path] = None) -> ExtensionConfig:
    """Load config from YAML. A missing file yields the defaults."""
    path = Path(path) if path is not None else CONFIG_PATH
    if not path.exists():
        return ExtensionConfig()
    try:
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except (OSError, yaml.YAMLError) as e:
        raise ConfigError(f"Could not read config {path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"Config {path} must be a mapping, got {type(data).__name__}")
    try:
        return ExtensionConfig(**data.get("points", data))
    except ValidationError as e:
        raise ConfigError(f"Invalid config {path}: {e}") from e


def configure_logging(level: str = "INFO") -> None:
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s | %(levelname)-7s | %(name)s | %(message)s",
        datefmt="%Y-%m-%d %H:%M:%S",
    )
