"""Configuration management for finboard."""

import json
import logging
import os
from dataclasses import asdict, dataclass, fields, replace
from pathlib import Path
from typing import Any, Optional

from finboard.exceptions import ConfigError

logger = logging.getLogger(__name__)

CONFIG_FILENAME = "config.json"
LOCAL_CONFIG = "finboard.json"

ENV_OVERRIDES = {
    "FINBOARD_THEME": "theme",
    "FINBOARD_DATE_RANGE": "date_range",
    "FINBOARD_SEED": "seed",
    "FINBOARD_LOG_LEVEL": "log_level",
}


@dataclass(frozen=True)
class AppConfig:
    theme: str = "Vibrant"
    date_range: str = "month"
    transaction_count: int = 30
    asset_count: int = 15
    goal_count: int = 8
    seed: Optional[int] = None
    load_delay_seconds: float = 1.0
    seed_file: Optional[str] = None
    log_level: str = "INFO"
    log_file: Optional[str] = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def get_config_dir() -> Path:
    """Get the config directory path (XDG compliant)."""
    xdg_config_home = os.getenv("XDG_CONFIG_HOME", str(Path.home() / ".config"))
    return Path(xdg_config_home) / "finboard"


def find_config_file() -> Path | None:
    """Find the config file in standard locations.

    Searches for config in the following order:
    1. finboard.json in current directory
    2. XDG config: ~/.config/finboard/config.json
    """
    for path in (Path(LOCAL_CONFIG), get_config_dir() / CONFIG_FILENAME):
        if path.exists():
            return path
    return None


def load_json_config(config_path: Path) -> dict[str, Any]:
    try:
        with open(config_path, encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise ConfigError(f"Invalid JSON in {config_path}: {e}") from e
    if not isinstance(data, dict):
        raise ConfigError(f"{config_path} must contain a JSON object")
    return data


def _coerce(name: str, value: Any) -> Any:
    if value is None:
        return None
    try:
        if name in ("transaction_count", "asset_count", "goal_count", "seed"):
            return int(value)
        if name == "load_delay_seconds":
            return float(value)
    except (TypeError, ValueError) as e:
        raise ConfigError(f"Invalid value for {name}: {value!r}") from e
    return value


def config_from_dict(data: dict[str, Any]) -> AppConfig:
    known = {f.name for f in fields(AppConfig)}
    unknown = sorted(set(data) - known)
    if unknown:
        logger.warning("Ignoring unknown config keys: %s", ", ".join(unknown))
    return AppConfig(**{k: _coerce(k, v) for k, v in data.items() if k in known})


def apply_env_overrides(config: AppConfig, environ: Optional[dict] = None) -> AppConfig:
    environ = os.environ if environ is None else environ
    overrides = {
        field: _coerce(field, environ[var])
        for var, field in ENV_OVERRIDES.items()
        if environ.get(var)
    }
    return replace(config, **overrides) if overrides else config


def load_config(config_path: Path | None = None, environ: Optional[dict] = None) -> AppConfig:
    """Load configuration from file (if any) plus environment overrides.

    Args:
        config_path: Explicit path to a JSON config file

    Returns:
        The resulting AppConfig; defaults when no file is found
    """
    path = config_path or find_config_file()
    if path is not None:
        logger.debug("loading config from %s", path)
        config = config_from_dict(load_json_config(path))
    else:
        config = AppConfig()
    return apply_env_overrides(config, environ)


def save_config(config: AppConfig, config_path: Path | None = None) -> Path:
    """Save configuration to a JSON file.

    Returns:
        Path where config was saved
    """
    if config_path is None:
        config_path = get_config_dir() / CONFIG_FILENAME

    config_path.parent.mkdir(parents=True, exist_ok=True)
    with open(config_path, "w", encoding="utf-8") as f:
        json.dump(config.to_dict(), f, indent=2)
        f.write("\n")

    return config_path
