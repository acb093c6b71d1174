"""Minimal strict schemas for error catalog validation."""

from __future__ import annotations

from faultline.common.constants import CATALOG_OPTION_KEYS, CATALOG_VERSION
from faultline.common.errors import ConfigError
from faultline.core.kinds import ErrorKind

KIND_VALUES = tuple(kind.value for kind in ErrorKind)


def _assert_mapping(obj, ctx: str) -> None:
    if not isinstance(obj, dict):
        raise ConfigError(f"{ctx} must be a mapping")


def _assert_required_keys(obj: dict, required: set[str], ctx: str) -> None:
    missing = required - set(obj)
    if missing:
        missing_str = ", ".join(sorted(missing))
        raise ConfigError(f"Missing keys in {ctx}: {missing_str}")


def _assert_no_unknown_keys(obj: dict, known: set[str], ctx: str, allow_unknown: bool) -> None:
    if allow_unknown:
        return
    unknown = set(obj) - known
    if unknown:
        unknown_str = ", ".join(sorted(str(key) for key in unknown))
        raise ConfigError(f"Unknown keys in {ctx}: {unknown_str}")


def _assert_optional_string(entry: dict, key: str, ctx: str) -> None:
    value = entry.get(key)
    if value is not None and not isinstance(value, str):
        raise ConfigError(f"{ctx}.{key} must be a string")


def validate_error_entry(name, entry, *, allow_unknown: bool = False) -> dict:
    if not isinstance(name, str) or not name.isidentifier():
        raise ConfigError(f"Invalid error type name: {name!r}")
    ctx = f"errors.{name}"
    _assert_mapping(entry, ctx)
    _assert_required_keys(entry, {"kind"}, ctx)
    _assert_no_unknown_keys(entry, set(CATALOG_OPTION_KEYS), ctx, allow_unknown)

    kind = entry["kind"]
    if kind not in KIND_VALUES:
        raise ConfigError(f"{ctx}.kind must be one of: {', '.join(KIND_VALUES)}")

    for key in ("default_message", "default_reason", "doc"):
        _assert_optional_string(entry, key, ctx)
    return entry


def validate_catalog_config(cfg, *, allow_unknown: bool = False) -> dict:
    _assert_mapping(cfg, "error catalog")
    _assert_required_keys(cfg, {"version", "errors"}, "error catalog")
    _assert_no_unknown_keys(cfg, {"version", "errors"}, "error catalog", allow_unknown)

    if cfg["version"] != CATALOG_VERSION:
        raise ConfigError(f"Unsupported error catalog version: {cfg['version']!r}")
    errors = cfg["errors"]
    if not isinstance(errors, dict) or not errors:
        raise ConfigError("error catalog errors must be a non-empty mapping")

    for name, entry in errors.items():
        validate_error_entry(name, entry, allow_unknown=allow_unknown)
    return cfg
