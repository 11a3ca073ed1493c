import yaml
from pathlib import Path
from typing import Any, Dict, Optional
from .models import AppConfig

# CLI spellings accepted in YAML files too
_KEY_ALIASES = {
    "thread_count": "threads",
    "input_directory": "input_pattern",
    "output": "output_template",
}

def load_config(config_path: Path) -> Dict[str, Any]:
    """Loads a YAML config file into a plain dict of AppConfig fields."""
    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {config_path}")

    with open(config_path, 'r') as f:
        data = yaml.safe_load(f) or {}

    if not isinstance(data, dict):
        raise ValueError(f"Config file {config_path} must contain a mapping")

    return {_KEY_ALIASES.get(key, key): value for key, value in data.items()}

def build_config(file_values: Optional[Dict[str, Any]] = None, **overrides: Any) -> AppConfig:
    """Merges config file values with CLI overrides (CLI wins) and validates once."""
    data: Dict[str, Any] = dict(file_values or {})
    for key, value in overrides.items():
        if value is not None:
            data[key] = value
    return AppConfig(**data)
