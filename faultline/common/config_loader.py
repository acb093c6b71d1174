"""Error catalog loading and validation."""

from __future__ import annotations

import logging
from collections.abc import Iterator, Mapping
from dataclasses import dataclass
from pathlib import Path
from typing import Any

from faultline.common.constants import LOGGER_NAME
from faultline.common.errors import ConfigError
from faultline.common.fs import read_yaml
from faultline.common.schema import validate_catalog_config
from faultline.core.define import define_error

logger = logging.getLogger(f"{LOGGER_NAME}.config")


@dataclass(frozen=True)
class ErrorCatalog(Mapping):
    """Error types defined from a catalog file, keyed by type name."""

    types: dict[str, type]
    source: Path | None = None

    def __getitem__(self, name: str) -> type:
        return self.types[name]

    def __iter__(self) -> Iterator[str]:
        return iter(self.types)

    def __len__(self) -> int:
        return len(self.types)


def _deep_merge(base: Any, overlay: Any) -> Any:
    if isinstance(base, dict) and isinstance(overlay, dict):
        merged = dict(base)
        for key, value in overlay.items():
            if key in merged:
                merged[key] = _deep_merge(merged[key], value)
            else:
                merged[key] = value
        return merged
    return overlay


def _load_yaml_with_overlay(path: Path, overlay_path: Path | None) -> Any:
    base = read_yaml(path)
    if overlay_path is None or not overlay_path.exists():
        return base
    overlay = read_yaml(overlay_path)
    if overlay is None:
        return base
    if not isinstance(overlay, dict):
        raise ConfigError(f"Overlay {overlay_path} must be a mapping")
    return _deep_merge(base, overlay)


def define_catalog(cfg: dict, *, module: str, source: Path | None = None) -> ErrorCatalog:
    types = {}
    for name, entry in cfg["errors"].items():
        types[name] = define_error(
            entry["kind"],
            name,
            default_message=entry.get("default_message"),
            default_reason=entry.get("default_reason"),
            doc=entry.get("doc"),
            module=module,
        )
    return ErrorCatalog(types=types, source=source)


def load_error_catalog(
    path: Path,
    *,
    overlay_path: Path | None = None,
    module: str | None = None,
    allow_unknown: bool = False,
) -> ErrorCatalog:
    """Load a YAML catalog, apply an optional overlay, and define its error types.

    ``module`` is recorded as the ``__module__`` of every defined type; it
    defaults to ``faultline.catalog.<file stem>``.
    """
    cfg = validate_catalog_config(_load_yaml_with_overlay(path, overlay_path), allow_unknown=allow_unknown)
    catalog = define_catalog(cfg, module=module or f"faultline.catalog.{path.stem}", source=path)
    logger.debug("loaded %d error types from %s", len(catalog), path)
    return catalog
