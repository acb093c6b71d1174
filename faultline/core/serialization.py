"""Plain-map and JSON views of error values.

The output of ``to_map`` is always JSON-encodable: context values the
encoder cannot handle are replaced by their ``repr`` rather than failing,
and context keys are always strings.
"""

from __future__ import annotations

import json
from collections.abc import Mapping
from enum import Enum
from typing import Any

from faultline.common.errors import FormatError
from faultline.core.env import InvocationContext, to_plain_map
from faultline.core.predicates import is_error

_SCALAR_KEY_TYPES = (int, float, bool, type(None))


def error_type_name(error: Any) -> str:
    cls = type(error)
    return f"{cls.__module__}.{cls.__qualname__}"


def is_encodable(value: Any) -> bool:
    """True when ``value`` encodes to strict JSON under any key ordering."""
    try:
        json.dumps(value, allow_nan=False, sort_keys=True)
    except (TypeError, ValueError, RecursionError):
        return False
    return True


def _sanitize_key(key: Any) -> str:
    if isinstance(key, Enum):
        value = key.value
        return _sanitize_key(value) if isinstance(value, (str, *_SCALAR_KEY_TYPES)) else repr(key)
    if isinstance(key, str):
        return key
    if isinstance(key, _SCALAR_KEY_TYPES):
        # Same spelling json uses when it coerces a key.
        return json.dumps(key)
    return repr(key)


def sanitize(context: Any) -> dict[str, Any]:
    if not isinstance(context, Mapping):
        return {}
    sanitized = {}
    for key, value in context.items():
        sanitized[_sanitize_key(key)] = value if is_encodable(value) else repr(value)
    return sanitized


def to_map(error: Any) -> dict[str, Any]:
    if not is_error(error):
        raise FormatError(f"Cannot serialize a non-error value of type {type(error).__name__}")
    return {
        "error_type": error_type_name(error),
        "reason": error.reason,
        "message": error.message,
        "env": to_plain_map(error.env),
        "context": sanitize(error.context),
    }


def json_default(obj: Any) -> Any:
    """``default=`` hook for ``json.dumps`` that understands error values."""
    if is_error(obj):
        return to_map(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, InvocationContext):
        return to_plain_map(obj)
    return repr(obj)


class ErrorJSONEncoder(json.JSONEncoder):
    def default(self, o: Any) -> Any:
        return json_default(o)


def to_json(error: Any, **opts: Any) -> str:
    opts.setdefault("ensure_ascii", False)
    if "cls" not in opts:
        opts.setdefault("default", json_default)
    return json.dumps(to_map(error), **opts)
