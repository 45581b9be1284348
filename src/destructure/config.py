from __future__ import annotations

import os
from datetime import date, datetime, time
from pathlib import Path
from typing import TypeAlias
import tomllib

from pydantic import ValidationError

from destructure.schema import AccessorNamingConfig

DEFAULT_CONFIG_NAME = "destructure.toml"
_ACCESSOR_PREFIX_ENV = "DESTRUCTURE_ACCESSOR_PREFIX"

TomlScalar: TypeAlias = str | int | float | bool | None | date | datetime | time
TomlValue: TypeAlias = TomlScalar | list["TomlValue"] | dict[str, "TomlValue"]
TomlTable: TypeAlias = dict[str, TomlValue]


def _load_toml(path: Path) -> TomlTable:
    try:
        raw = path.read_text(encoding="utf-8")
    except OSError:
        return {}
    try:
        data = tomllib.loads(raw)
    except tomllib.TOMLDecodeError:
        return {}
    return data if isinstance(data, dict) else {}


def load_config(root: Path | None = None, config_path: Path | None = None) -> TomlTable:
    if config_path is None:
        base = root if root is not None else Path.cwd()
        config_path = base / DEFAULT_CONFIG_NAME
    return _load_toml(config_path)


def accessor_defaults(
    root: Path | None = None, config_path: Path | None = None
) -> TomlTable:
    data = load_config(root=root, config_path=config_path)
    section = data.get("accessors", {})
    return section if isinstance(section, dict) else {}


def resolve_naming(
    root: Path | None = None, config_path: Path | None = None
) -> AccessorNamingConfig:
    """Resolve accessor naming from the environment, then the TOML file.

    Invalid values at either layer are ignored in favor of the next one down,
    ending at the built-in defaults.
    """
    raw_prefix = (os.environ.get(_ACCESSOR_PREFIX_ENV) or "").strip()
    if raw_prefix:
        try:
            return AccessorNamingConfig(prefix=raw_prefix)
        except ValidationError:
            pass
    section = accessor_defaults(root=root, config_path=config_path)
    try:
        return AccessorNamingConfig.model_validate(section)
    except ValidationError:
        return AccessorNamingConfig()


_GLOBAL_NAMING: object = None


def get_global_naming() -> AccessorNamingConfig:
    global _GLOBAL_NAMING
    if _GLOBAL_NAMING is None:
        _GLOBAL_NAMING = resolve_naming()
    return _GLOBAL_NAMING  # type: ignore[return-value]


def reset_global_naming(
    naming: AccessorNamingConfig | None = None,
) -> AccessorNamingConfig:
    global _GLOBAL_NAMING
    resolved = resolve_naming() if naming is None else naming
    _GLOBAL_NAMING = resolved
    return resolved
