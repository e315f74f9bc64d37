from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, replace
from pathlib import Path
from typing import Any

import yaml

from imazingtosbr.constants import DEFAULT_VERBOSITY, ENV_PREFIX


@dataclass(slots=True)
class AppConfig:
    import_file: str = ""
    collection_file: str = ""
    tag: str = ""
    log_level: int = DEFAULT_VERBOSITY
    json_output: bool = False

    @staticmethod
    def default() -> AppConfig:
        return AppConfig()


ENV_KEYS = {
    "import_file": f"{ENV_PREFIX}_IMPORT_FILE",
    "collection_file": f"{ENV_PREFIX}_COLLECTION_FILE",
    "tag": f"{ENV_PREFIX}_TAG",
    "log_level": f"{ENV_PREFIX}_LOG_LEVEL",
}


LEVEL_NAMES = {"WARN": 0, "WARNING": 0, "INFO": 1, "DEBUG": 2}
VERBOSITY_RANGE = (0, 1, 2)

_TRUE = {"true", "yes", "on", "1"}
_FALSE = {"false", "no", "off", "0", ""}


def _as_verbosity(value: Any, default: int) -> int:
    text = str(value).strip().upper()
    if not text:
        return default
    if text in LEVEL_NAMES:
        return LEVEL_NAMES[text]
    try:
        number = int(text)
    except ValueError:
        number = None
    if number not in VERBOSITY_RANGE:
        raise ValueError(f"log level must be 0, 1, 2 or a level name, got {value!r}")
    return number


def _as_bool(value: Any, key: str) -> bool:
    if value is None:
        return False
    if isinstance(value, bool):
        return value
    text = str(value).strip().lower()
    if text in _TRUE:
        return True
    if text in _FALSE:
        return False
    raise ValueError(f"{key} must be true or false, got {value!r}")


def load_config(path: str | Path | None) -> AppConfig:
    """Read the YAML config. Unreadable or malformed files raise ``ValueError``."""
    if path is None:
        return AppConfig.default()

    config_path = Path(path)
    if not config_path.exists():
        return AppConfig.default()

    try:
        with config_path.open("r", encoding="utf-8") as fh:
            raw = yaml.safe_load(fh) or {}
    except yaml.YAMLError as exc:
        raise ValueError(f"{config_path}: invalid YAML: {exc}") from exc
    except (OSError, UnicodeDecodeError) as exc:
        raise ValueError(f"{config_path}: cannot read config: {exc}") from exc
    if not isinstance(raw, dict):
        raise ValueError(f"{config_path}: expected a mapping at the top level")

    defaults = AppConfig.default()
    return AppConfig(
        import_file=str(raw.get("import_file") or ""),
        collection_file=str(raw.get("collection_file") or ""),
        tag=str(raw.get("tag") or ""),
        log_level=_as_verbosity(raw.get("log_level", defaults.log_level), defaults.log_level),
        json_output=_as_bool(raw.get("json", defaults.json_output), "json"),
    )


def apply_env(config: AppConfig, environ: Mapping[str, str]) -> AppConfig:
    """Overlay ``IPHONE2SBR_*`` variables on top of file/default values."""
    updates: dict[str, Any] = {}
    for field_name, env_key in ENV_KEYS.items():
        raw = environ.get(env_key)
        if raw is None or raw == "":
            continue
        if field_name == "log_level":
            updates[field_name] = _as_verbosity(raw, config.log_level)
        else:
            updates[field_name] = raw
    return replace(config, **updates) if updates else config


def dump_default_config(path: str | Path) -> None:
    cfg = AppConfig.default()
    payload: dict[str, Any] = {
        "import_file": cfg.import_file,
        "collection_file": cfg.collection_file,
        "tag": cfg.tag,
        "log_level": cfg.log_level,
        "json": cfg.json_output,
    }
    out = Path(path)
    out.parent.mkdir(parents=True, exist_ok=True)
    with out.open("w", encoding="utf-8") as fh:
        yaml.safe_dump(payload, fh, sort_keys=False)
