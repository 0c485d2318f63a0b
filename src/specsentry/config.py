"""Per-project configuration (.specsentry/config.json)."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path

log = logging.getLogger(__name__)

CONFIG_DIR = ".specsentry"
CONFIG_NAME = "config.json"
BASE_REF_ENV = "SPECSENTRY_BASE_REF"

DEFAULTS: dict = {
    "spec_dir": "spec",
    "strip_prefixes": ["app/"],
    "exclude": [],
    "base_ref": "main",
    "ignored_methods": ["initialize"],
}


def find_project_root(start: str | Path = ".") -> Path:
    """Find the project root by looking for .git directory."""
    current = Path(start).resolve()
    while current != current.parent:
        if (current / ".git").exists():
            return current
        current = current.parent
    return Path(start).resolve()


def config_path(project_root: Path) -> Path:
    return project_root / CONFIG_DIR / CONFIG_NAME


def _load_project_config(project_root: Path) -> dict:
    """Load .specsentry/config.json if it exists.

    Returns an empty dict if the file is missing or malformed.
    """
    path = config_path(project_root)
    if not path.exists():
        return {}
    try:
        data = json.loads(path.read_text(encoding="utf-8"))
    except (OSError, json.JSONDecodeError) as exc:
        log.warning("Ignoring unreadable %s: %s", path, exc)
        return {}
    if not isinstance(data, dict):
        log.warning("Ignoring %s: top-level value is not an object", path)
        return {}
    return data


def load_config(project_root: Path | None = None) -> dict:
    """Return the effective config: defaults, then the file, then env.

    Resolution order for ``base_ref`` (first match wins):

    1. ``SPECSENTRY_BASE_REF`` environment variable
    2. ``.specsentry/config.json`` -> ``"base_ref"``
    3. ``"main"``
    """
    if project_root is None:
        project_root = find_project_root()
    config = {key: (list(value) if isinstance(value, list) else value) for key, value in DEFAULTS.items()}
    for key, value in _load_project_config(project_root).items():
        if key not in DEFAULTS:
            log.debug("Unknown config key %r ignored", key)
            continue
        config[key] = value
    override = os.environ.get(BASE_REF_ENV)
    if override:
        config["base_ref"] = override
    return config


def write_project_config(config: dict, project_root: Path | None = None) -> Path:
    """Write (or update) .specsentry/config.json.

    Merges *config* into the existing config so existing keys are preserved.
    Returns the path of the written file.
    """
    if project_root is None:
        project_root = find_project_root()
    (project_root / CONFIG_DIR).mkdir(exist_ok=True)
    path = config_path(project_root)
    existing = _load_project_config(project_root)
    existing.update(config)
    path.write_text(json.dumps(existing, indent=2), encoding="utf-8")
    return path
