"""Configuration loading for prcomment (.prcomment.yml)."""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional

import yaml

from .errors import PRCommentError

CONFIG_FILE_NAME = ".prcomment.yml"


class ConfigError(PRCommentError):
    """Raised when the configuration file cannot be parsed."""


@dataclass
class LLMConfig:
    """Completion endpoint settings from .prcomment.yml."""

    model: Optional[str] = None
    temperature: Optional[float] = None
    max_tokens: Optional[int] = None
    base_url: Optional[str] = None
    api_key: Optional[str] = None
    request_timeout: Optional[float] = None


@dataclass
class StoreConfig:
    """Where and whether the last generated description is kept."""

    enabled: bool = True
    path: Optional[Path] = None


@dataclass
class PRCommentConfig:
    """Represents the settings defined in .prcomment.yml."""

    root: Path
    template: Optional[str] = None
    template_file: Optional[Path] = None
    llm: LLMConfig = field(default_factory=LLMConfig)
    store: StoreConfig = field(default_factory=StoreConfig)

    def resolve_template(self) -> Optional[str]:
        """Return the inline template, else the contents of ``template_file``."""
        if self.template:
            return self.template
        if self.template_file is None:
            return None
        try:
            return self.template_file.read_text(encoding="utf-8")
        except FileNotFoundError as exc:
            raise ConfigError(f"Template file not found: {self.template_file}") from exc


def load_config(config_path: Path) -> PRCommentConfig:
    """Load configuration from disk."""
    config_file = _resolve_config_path(Path(config_path))
    root = config_file.parent.resolve()

    if not config_file.exists():
        return PRCommentConfig(root=root)

    data = _read_config(config_file)
    if not isinstance(data, dict):
        raise ConfigError(f"{CONFIG_FILE_NAME} must contain a mapping at the root")

    template = data.get("template")
    if template is not None and not isinstance(template, str):
        raise ConfigError("template must be a string")
    template_file_str = _as_str(data.get("template_file"))
    template_file = root / template_file_str if template_file_str else None

    llm_data = _as_dict(data.get("llm"))
    llm = LLMConfig(
        model=_as_str(llm_data.get("model")),
        temperature=_as_float(llm_data.get("temperature")),
        max_tokens=_as_int(llm_data.get("max_tokens")),
        base_url=_as_str(llm_data.get("base_url")),
        api_key=_as_str(llm_data.get("api_key")),
        request_timeout=_as_float(llm_data.get("request_timeout")),
    )

    store_data = _as_dict(data.get("store"))
    store = StoreConfig()
    if store_data:
        enabled = _as_bool(store_data.get("enabled"))
        store.enabled = True if enabled is None else enabled
        store_path = _as_str(store_data.get("path"))
        store.path = root / store_path if store_path else None

    return PRCommentConfig(
        root=root,
        template=template,
        template_file=template_file,
        llm=llm,
        store=store,
    )


def _resolve_config_path(config_path: Path) -> Path:
    config_path = config_path.expanduser()
    if config_path.is_dir():
        return (config_path / CONFIG_FILE_NAME).resolve()
    if config_path.name != CONFIG_FILE_NAME:
        return (config_path.parent / CONFIG_FILE_NAME).resolve()
    return config_path.resolve()


def _read_config(path: Path) -> Any:
    text = path.read_text(encoding="utf-8")
    if not text.strip():
        return {}
    try:
        loaded = yaml.safe_load(text)
    except yaml.YAMLError as exc:
        raise ConfigError(f"Failed to parse {path.name}: {exc}") from exc
    return loaded if loaded is not None else {}


def _as_dict(value: Any) -> Dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _as_str(value: Any) -> Optional[str]:
    return str(value) if isinstance(value, (str, int, float, bool)) else None


def _as_float(value: Any) -> Optional[float]:
    if isinstance(value, bool):
        return None
    if isinstance(value, (int, float)):
        return float(value)
    if isinstance(value, str):
        try:
            return float(value)
        except ValueError:
            return None
    return None


def _as_int(value: Any) -> Optional[int]:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, str):
        try:
            return int(value)
        except ValueError:
            return None
    return None


def _as_bool(value: Any) -> Optional[bool]:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        lowered = value.strip().lower()
        if lowered in {"true", "yes", "1"}:
            return True
        if lowered in {"false", "no", "0"}:
            return False
    return None
