"""Editor configuration loaded from YAML with environment overrides."""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .domain.codec import DEFAULT_INDENT
from .editor.field import DEFAULT_PLACEHOLDER

DEFAULT_CONFIG_PATH = "config/config.local.yaml"
BASE_CONFIG_PATH = "config/config.yaml"

SEED_ENV = "CV_EDITOR_SEED"
VERBOSE_ENV = "CV_EDITOR_VERBOSE"

_TRUTHY = {"1", "true", "yes", "on"}


@dataclass
class EditorConfig:
    """Settings for one editing session."""

    placeholder: str = DEFAULT_PLACEHOLDER
    raw_text_indent: int = DEFAULT_INDENT
    default_section: str = "contactInfo"
    seed_path: Optional[str] = None
    variants: Dict[str, str] = field(default_factory=dict)
    verbose: bool = False


def _deep_merge(base: dict, override: dict) -> dict:
    merged = dict(base)
    for key, value in override.items():
        base_value = merged.get(key)
        if isinstance(base_value, dict) and isinstance(value, dict):
            merged[key] = _deep_merge(base_value, value)
        else:
            merged[key] = value
    return merged


def _load_yaml(path: Path) -> dict:
    if not path.exists():
        return {}
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
        if not isinstance(data, dict):
            raise ValueError(f"Config file must be a mapping: {path}")
        return data


def load_raw_config(config_path: str = DEFAULT_CONFIG_PATH) -> dict:
    """Load the raw configuration dictionary.

    Priority order:
    1. config.local.yaml (user overrides)
    2. config.yaml (defaults)
    """
    repo_root = Path(__file__).resolve().parents[1]

    def _resolve(candidate: str) -> Path:
        path = Path(candidate)
        if path.exists():
            return path
        alt = repo_root / candidate
        if alt.exists():
            return alt
        return path

    target = _resolve(config_path)

    if Path(config_path).name == "config.local.yaml":
        base = _load_yaml(_resolve(BASE_CONFIG_PATH))
        merged = _deep_merge(base, _load_yaml(target))
        if not merged:
            raise FileNotFoundError(f"Config file not found: {config_path} (also missing fallback {BASE_CONFIG_PATH})")
        return merged

    data = _load_yaml(target)
    if not data:
        raise FileNotFoundError(f"Config file not found: {config_path}")
    return data


def apply_env_overrides(raw_config: Dict[str, Any]) -> Dict[str, Any]:
    """Overlay ``CV_EDITOR_*`` environment variables onto *raw_config*."""
    data = dict(raw_config)
    seed = os.environ.get(SEED_ENV, "")
    if seed:
        data["seed_path"] = seed
    verbose = os.environ.get(VERBOSE_ENV, "")
    if verbose:
        data["verbose"] = verbose.strip().lower() in _TRUTHY
    return data


def config_from_dict(raw_config: Dict[str, Any]) -> EditorConfig:
    data = apply_env_overrides(raw_config)
    editor = data.get("editor") or {}
    return EditorConfig(
        placeholder=editor.get("placeholder", DEFAULT_PLACEHOLDER),
        raw_text_indent=editor.get("raw_text_indent", DEFAULT_INDENT),
        default_section=editor.get("default_section", "contactInfo"),
        seed_path=data.get("seed_path") or None,
        variants=dict(data.get("variants") or {}),
        verbose=bool(data.get("verbose", False)),
    )


def load_config(config_path: str = DEFAULT_CONFIG_PATH) -> EditorConfig:
    """Load editor configuration from YAML."""
    return config_from_dict(load_raw_config(config_path))
