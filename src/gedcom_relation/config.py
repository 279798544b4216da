import copy
from pathlib import Path

import yaml

from gedcom_relation.utils.pathing import resolve_project_path

CONFIG_PATH = resolve_project_path("config/gedcom_relation.yml")

DEFAULTS = {
    "paths": {},
    "pipeline": {
        "workers": 4,
        "input_suffixes": [".ged"],
        "output_suffix": ".json",
        "indent": None,
    },
    "logging": {
        "level": "INFO",
        "dir": "logs",
        "file": "gedcom_relation.log",
        "rotate": False,
        "to_file": True,
    },
    "schema": {
        "person_id_start": 1,
        "family_id_start": 10001,
        "child_id_start": 1000001,
        "fact_type_ids": {},
    },
    "debug": False,
}


def _merge(base, override):
    merged = copy.deepcopy(base)
    for key, value in (override or {}).items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _merge(merged[key], value)
        else:
            merged[key] = value
    return merged


class GPConfig:
    def __init__(self, data):
        data = _merge(DEFAULTS, data)
        self.paths = data.get("paths", {})
        self.pipeline = data.get("pipeline", {})
        self.logging = data.get("logging", {})
        self.schema = data.get("schema", {})
        self.debug = data.get("debug", False)


def load_config(path=None) -> 'GPConfig':
    config_path = Path(path) if path is not None else CONFIG_PATH

    if not config_path.exists():
        if path is not None:
            raise FileNotFoundError(f"Config file not found: {config_path}")
        return GPConfig({})

    with open(config_path, "r", encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}

    return GPConfig(data)


_config_cache = None


def get_config() -> 'GPConfig':
    global _config_cache
    if _config_cache is None:
        _config_cache = load_config()
    return _config_cache


def use_config(path) -> 'GPConfig':
    """Load ``path`` and make it the process-wide configuration."""
    global _config_cache
    _config_cache = load_config(path)
    return _config_cache


def reset_config() -> None:
    global _config_cache
    _config_cache = None
