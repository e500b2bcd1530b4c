"""Configuration loading for minicomp (.minicomp.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, List, Optional, Sequence

import yaml

CONFIG_FILENAME = ".minicomp.yml"

APP_TYPES = ("weixin", "swan", "ant", "tt", "quick")

# Targets without native component composition.
NON_COMPONENT_APP_TYPES = frozenset({"quick"})


class ConfigError(RuntimeError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class BuildConfig:
    """Represents the settings defined in .minicomp.yml."""

    root: Path
    app_type: str = "weixin"
    source_dir: Path = None  # type: ignore[assignment]
    output_dir: Path = None  # type: ignore[assignment]
    module_dirs: List[str] = field(default_factory=lambda: ["node_modules"])
    script_extensions: List[str] = field(default_factory=lambda: ["js"])
    json_extensions: List[str] = field(default_factory=lambda: ["json"])

    def __post_init__(self) -> None:
        # source membership is a string prefix test, so every path is absolute
        self.root = Path(self.root).resolve()
        self.source_dir = (self.root / (self.source_dir or "src")).resolve()
        self.output_dir = (self.root / (self.output_dir or "dist")).resolve()

    @property
    def supports_components(self) -> bool:
        return self.app_type not in NON_COMPONENT_APP_TYPES


def load_config(config_path: Path, *, app_type: Optional[str] = None) -> BuildConfig:
    """Load configuration from disk, optionally overriding the app type."""
    config_file = _resolve_config_path(config_path)
    root = config_file.parent.resolve()

    data: Dict[str, Any] = {}
    if config_file.exists():
        data = _read_config(config_file)

    chosen_type = app_type or _as_str(data.get("app_type")) or "weixin"
    if chosen_type not in APP_TYPES:
        allowed = ", ".join(APP_TYPES)
        raise ConfigError(f"Unknown app_type '{chosen_type}' (expected one of: {allowed})")

    source_dir = _as_str(data.get("source_dir")) or "src"
    output_dir = _as_str(data.get("output_dir")) or "dist"

    config = BuildConfig(
        root=root,
        app_type=chosen_type,
        source_dir=(root / source_dir).resolve(),
        output_dir=(root / output_dir).resolve(),
    )
    if "module_dirs" in data:
        config.module_dirs = _as_str_list(data.get("module_dirs"))
    extensions = _as_str_list(data.get("script_extensions"))
    if extensions:
        config.script_extensions = [_strip_dot(ext) for ext in extensions]
    json_extensions = _as_str_list(data.get("json_extensions"))
    if json_extensions:
        config.json_extensions = [_strip_dot(ext) for ext in json_extensions]
    return config


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILENAME).resolve()
    if config_path.name != CONFIG_FILENAME:
        return (config_path.parent / CONFIG_FILENAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Dict[str, Any]:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    if loaded is None:
        return {}
    if not isinstance(loaded, dict):
        raise ConfigError(f"{CONFIG_FILENAME} must contain a mapping at the root")
    return loaded


def _strip_dot(extension: str) -> str:
    return extension[1:] if extension.startswith(".") else extension


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float)) and not isinstance(value, bool) else None


def _as_str_list(value: Any) -> List[str]:
    if value is None:
        return []
    if isinstance(value, str):
        return [value]
    if isinstance(value, Sequence):
        return [str(item) for item in value if isinstance(item, (str, int, float))]
    return []
