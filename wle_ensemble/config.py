from pathlib import Path
from typing import Dict, Any, Union

import yaml


REQUIRED_SECTIONS = ("data", "training", "models", "output")


def load_config(config_path: Union[str, Path] = "config.yaml") -> Dict[str, Any]:
    """Load configuration from YAML file."""
    config_path = Path(config_path)
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r', encoding='utf-8') as f:
        config = yaml.safe_load(f) or {}

    missing = [section for section in REQUIRED_SECTIONS if section not in config]
    if missing:
        raise ValueError(f"Config {config_path} is missing sections: {missing}")

    config.setdefault('features', {})
    config.setdefault('split', {})
    return config


def resolve_path(path: Union[str, Path], base_path: Path) -> Path:
    """Resolve a config path relative to the config file's directory."""
    path = Path(path)
    return path if path.is_absolute() else Path(base_path) / path
