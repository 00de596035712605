import json
from pathlib import Path
from typing import Dict, Any

import yaml

from domain.constants import DEFAULT_DESTINATION, DEFAULT_REPEAT_COUNT


DEFAULTS: Dict[str, Any] = {
    "destination_dir": DEFAULT_DESTINATION,
    "repeat_count": DEFAULT_REPEAT_COUNT,
    "log_file": None,
}


def load_config(path: str | None) -> Dict[str, Any]:
    if not path:
        return {}

    p = Path(path)
    if not p.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    if p.suffix.lower() in (".yaml", ".yml"):
        return yaml.safe_load(p.read_text(encoding="utf-8")) or {}

    return json.loads(p.read_text(encoding="utf-8"))


def merge_config(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    out = dict(base)
    for k, v in override.items():
        if v is not None:
            out[k] = v
    return out


def resolve_settings(config_path: str | None = None, overrides: Dict[str, Any] | None = None) -> Dict[str, Any]:
    """Defaults <- config file <- explicit overrides (None means "not given")."""
    cfg = merge_config(DEFAULTS, load_config(config_path))
    return merge_config(cfg, overrides or {})
