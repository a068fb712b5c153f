"""Configuration management for Confract."""

import os
from pathlib import Path
from typing import Any

import yaml


DEFAULT_CONFIG = {
    "store_path": "~/.confract/documents",
    "embedding_provider": "sentence-transformers",
    "embedding_model": "sentence-transformers/all-MiniLM-L6-v2",
    "segmenter": {"max_line_chars": 400},
    "dedup": {"threshold": 0.88},
    "matching": {
        "high_threshold": 0.55,
        "medium_threshold": 0.40,
        "summary_chars": 400,
        "items_per_section": 6,
        "input_chars": 600,
    },
    "versions": {"max_versions": 20},
}


def _find_config_file() -> Path | None:
    """Look for config.yaml in standard locations."""
    candidates = [
        Path.cwd() / "config" / "config.yaml",
        Path.cwd() / "config.yaml",
        Path.home() / ".confract" / "config.yaml",
    ]
    for p in candidates:
        if p.exists():
            return p
    return None


def load_config(config_path: str | Path | None = None) -> dict[str, Any]:
    """Load configuration, merging defaults with file and env vars."""
    cfg = _copy(DEFAULT_CONFIG)

    path = Path(config_path) if config_path else _find_config_file()
    if path and path.exists():
        with open(path) as f:
            file_cfg = yaml.safe_load(f) or {}
        _deep_merge(cfg, file_cfg)

    # Env overrides
    if model := os.environ.get("CONFRACT_EMBEDDING_MODEL"):
        cfg["embedding_model"] = model
    if store_path := os.environ.get("CONFRACT_STORE_PATH"):
        cfg["store_path"] = store_path

    cfg["store_path"] = str(Path(cfg["store_path"]).expanduser().resolve())

    return cfg


def _copy(cfg: dict) -> dict:
    """Copy nested dicts so callers never share DEFAULT_CONFIG sections."""
    return {k: _copy(v) if isinstance(v, dict) else v for k, v in cfg.items()}


def _deep_merge(base: dict, override: dict) -> None:
    """Merge override into base in-place."""
    for k, v in override.items():
        if k in base and isinstance(base[k], dict) and isinstance(v, dict):
            _deep_merge(base[k], v)
        else:
            base[k] = v
