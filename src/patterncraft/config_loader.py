"""
Centralized configuration loading for patterncraft.
"""

import copy
import json
import logging
import os
from importlib import resources
from pathlib import Path
from typing import Any, Optional, TypedDict, cast

logger = logging.getLogger(__name__)

CONFIG_DIR_ENV = "PATTERNCRAFT_CONFIG_DIR"
STRICT_ENV = "PATTERNCRAFT_STRICT_CONFIG"
# Packaged defaults; a Traversable so zipped installs resolve too.
DEFAULT_CONFIG_DIR = resources.files(__package__) / "config"
RUNTIME_CONFIG_FILE = "runtime_config.json"
SECTIONS = ("discounts", "payments", "settings", "notifications")


class ConfigBundle(TypedDict):
    discounts: dict[str, Any]
    payments: dict[str, Any]
    settings: dict[str, Any]
    notifications: dict[str, Any]


_BUNDLE_CACHE: dict[tuple[str, bool], ConfigBundle] = {}


def _resolve_config_dir(config_dir: Optional[str]) -> Any:
    if config_dir:
        return Path(config_dir)
    env_dir = os.getenv(CONFIG_DIR_ENV)
    if env_dir:
        return Path(env_dir)
    return DEFAULT_CONFIG_DIR


def _resolve_strict(strict: Optional[bool]) -> bool:
    if strict is not None:
        return strict
    env = os.getenv(STRICT_ENV, "")
    return env.lower() in {"1", "true", "yes", "on"}


def _load_json(path: Any, *, strict: bool) -> Any:
    try:
        with path.open("r", encoding="utf-8") as f:
            return json.load(f)
    except FileNotFoundError as exc:
        if strict:
            raise FileNotFoundError(f"Missing config file: {path}") from exc
        logger.warning("Config file %s not found; using defaults", path)
        return {}
    except json.JSONDecodeError as exc:
        if strict:
            raise ValueError(f"Malformed config file: {path} ({exc})") from exc
        logger.warning("Config file %s is malformed (%s); using defaults", path, exc)
        return {}


def _ensure_dict(payload: Any, *, name: str, strict: bool) -> dict[str, Any]:
    if isinstance(payload, dict):
        return payload
    msg = f"Expected {name} to be an object."
    if strict:
        raise ValueError(msg)
    logger.warning(msg)
    return {}


def _deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    merged = copy.deepcopy(base)
    for key, value in override.items():
        if isinstance(value, dict) and isinstance(merged.get(key), dict):
            merged[key] = _deep_merge(merged[key], value)
        else:
            merged[key] = copy.deepcopy(value)
    return merged


def _read_runtime_config(config_dir: Any, *, strict: bool) -> dict[str, Any]:
    payload = _load_json(config_dir / RUNTIME_CONFIG_FILE, strict=strict)
    return _ensure_dict(payload, name=RUNTIME_CONFIG_FILE, strict=strict)


def load_runtime_config(
    *, config_dir: Optional[str] = None, strict: Optional[bool] = None
) -> dict[str, Any]:
    return _read_runtime_config(_resolve_config_dir(config_dir), strict=_resolve_strict(strict))


def _extract_section(runtime_config: dict[str, Any], key: str, *, strict: bool) -> dict[str, Any]:
    if not runtime_config:
        return {}
    if key not in runtime_config:
        msg = f"Missing '{key}' section in {RUNTIME_CONFIG_FILE}."
        if strict:
            raise ValueError(msg)
        logger.warning(msg)
        return {}
    section = runtime_config.get(key)
    if isinstance(section, dict):
        return section
    msg = f"Expected {RUNTIME_CONFIG_FILE}.{key} to be an object."
    if strict:
        raise ValueError(msg)
    logger.warning(msg)
    return {}


def load_section(
    name: str, *, config_dir: Optional[str] = None, strict: Optional[bool] = None
) -> dict[str, Any]:
    if name not in SECTIONS:
        raise ValueError(f"Unknown config section '{name}'. Known sections: {', '.join(SECTIONS)}")
    bundle = load_config_bundle(config_dir=config_dir, strict=strict)
    return cast(dict[str, Any], bundle[name])  # type: ignore[literal-required]


def load_config_bundle(
    *,
    config_dir: Optional[str] = None,
    strict: Optional[bool] = None,
    overrides: Optional[dict[str, Any]] = None,
) -> ConfigBundle:
    strict_flag = _resolve_strict(strict)
    config_path = _resolve_config_dir(config_dir)
    cache_key = (str(config_path), strict_flag)
    if overrides is None and cache_key in _BUNDLE_CACHE:
        return copy.deepcopy(_BUNDLE_CACHE[cache_key])

    runtime_config = _read_runtime_config(config_path, strict=strict_flag)
    bundle = cast(
        ConfigBundle,
        {key: _extract_section(runtime_config, key, strict=strict_flag) for key in SECTIONS},
    )

    if overrides:
        bundle = cast(ConfigBundle, _deep_merge(cast(dict[str, Any], bundle), overrides))

    if overrides is None:
        _BUNDLE_CACHE[cache_key] = copy.deepcopy(bundle)

    logger.debug("Loaded config bundle from %s (strict=%s)", config_path, strict_flag)
    return bundle


def clear_config_cache() -> None:
    _BUNDLE_CACHE.clear()
