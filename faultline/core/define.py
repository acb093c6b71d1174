"""Error definition engine.

``define_error`` builds an exception class from a kind and a handful of
defaults. Every generated class has the same shape and behaviour:

    OrderRejected = define_error(
        "domain",
        "OrderRejected",
        default_message="invalid order",
        default_reason="out_of_stock",
    )

    error = OrderRejected.new(context={"sku": "A1"})   # bare value, env is None
    error = OrderRejected.create(context={"sku": "A1"})  # records the caller's env
    raise OrderRejected(reason="payment_declined")

Bare construction, ``raise`` and ``create`` share one field-filling path, so
raised and returned errors carry identical payloads.
"""

from __future__ import annotations

import logging
import sys
from collections.abc import Mapping
from types import MappingProxyType
from typing import Any

from faultline.common.constants import ENTITY_FIELDS, ERROR_MARKER, KIND_FIELD, LOGGER_NAME, PARAM_KEYS
from faultline.common.errors import DefinitionError
from faultline.core.entity import ErrorKind, format_message
from faultline.core.env import capture
from faultline.core.serialization import to_json, to_map

logger = logging.getLogger(f"{LOGGER_NAME}.define")

_FROZEN_FIELDS = frozenset((*ENTITY_FIELDS, KIND_FIELD))


def resolve_kind(kind: Any) -> ErrorKind:
    if isinstance(kind, ErrorKind):
        return kind
    if isinstance(kind, str):
        for candidate in ErrorKind:
            if candidate.value == kind:
                return candidate
    valid = ", ".join(candidate.value for candidate in ErrorKind)
    raise DefinitionError(f"Unknown error kind {kind!r}; expected one of: {valid}")


def _collect_params(params: Any, overrides: Mapping[str, Any]) -> dict[str, Any]:
    collected: dict[str, Any] = {}
    if isinstance(params, str):
        collected["message"] = params
    elif isinstance(params, Mapping):
        collected.update((key, params[key]) for key in PARAM_KEYS if key in params)
    collected.update((key, overrides[key]) for key in PARAM_KEYS if key in overrides)
    return collected


def _fill(error: BaseException, params: dict[str, Any]) -> None:
    cls = type(error)
    context = params.get("context")
    if isinstance(context, Mapping):
        context = MappingProxyType(dict(context))
    object.__setattr__(error, "message", params.get("message", cls.default_message))
    object.__setattr__(error, "reason", params.get("reason", cls.default_reason))
    object.__setattr__(error, "context", context)
    object.__setattr__(error, "env", None)


def _restore(cls: type, state: dict[str, Any], args: tuple = ()) -> BaseException:
    error = cls.__new__(cls)
    error.args = args
    for key, value in state.items():
        if key == "context" and isinstance(value, dict):
            value = MappingProxyType(value)
        object.__setattr__(error, key, value)
    return error


# Members installed on every generated class.


def _init(self, params: Any = None, **overrides: Any) -> None:
    _fill(self, _collect_params(params, overrides))
    Exception.__init__(self, self.message)


def _setattr(self, name: str, value: Any) -> None:
    if name in _FROZEN_FIELDS:
        raise AttributeError(f"cannot assign to field {name!r} of {type(self).__name__}")
    Exception.__setattr__(self, name, value)


def _delattr(self, name: str) -> None:
    if name in _FROZEN_FIELDS:
        raise AttributeError(f"cannot delete field {name!r} of {type(self).__name__}")
    Exception.__delattr__(self, name)


def _reduce(self):
    state = dict(self.__dict__)
    if isinstance(state.get("context"), MappingProxyType):
        # mappingproxy does not pickle.
        state["context"] = dict(state["context"])
    return _restore, (type(self), state, self.args)


def _str(self) -> str:
    return format_message(self)


def _plain_context(context: Any) -> Any:
    return dict(context) if isinstance(context, MappingProxyType) else context


def _repr(self) -> str:
    return (
        f"{type(self).__name__}(message={self.message!r}, reason={self.reason!r}, "
        f"context={_plain_context(self.context)!r})"
    )


def _new(cls, params: Any = None, **overrides: Any):
    """Build an error value without capturing where it was created."""
    return cls(params, **overrides)


def _create(cls, params: Any = None, *, stacklevel: int = 1, **overrides: Any):
    """Build an error value and record the caller's location and call stack.

    ``stacklevel`` works as in ``warnings.warn``: helpers that wrap
    ``create`` pass ``stacklevel=2`` to attribute the error to their caller.
    """
    error = cls(params, **overrides)
    object.__setattr__(error, "env", capture(stacklevel + 1, include_stacktrace=True))
    return error


def _to_map(self) -> dict[str, Any]:
    return to_map(self)


def _to_json(self, **opts: Any) -> str:
    return to_json(self, **opts)


def define_error(
    kind: ErrorKind | str,
    name: str,
    *,
    default_message: str | None = None,
    default_reason: Any = None,
    module: str | None = None,
    doc: str | None = None,
) -> type:
    """Define a new error type of the given kind.

    Raises ``DefinitionError`` for an unknown kind or a name that is not a
    valid identifier. ``module`` defaults to the calling module so the class
    pickles and reports its type name from where it was defined.
    """
    error_kind = resolve_kind(kind)
    if not isinstance(name, str) or not name.isidentifier():
        raise DefinitionError(f"Invalid error type name: {name!r}")
    if module is None:
        try:
            module = sys._getframe(1).f_globals.get("__name__", "__main__")
        except (AttributeError, ValueError):
            module = "__main__"

    namespace = {
        "__module__": module,
        "__qualname__": name,
        "__doc__": doc or f"{error_kind.value.capitalize()} error {name}.",
        ERROR_MARKER: True,
        KIND_FIELD: error_kind,
        "default_message": default_message,
        "default_reason": default_reason,
        "__init__": _init,
        "__setattr__": _setattr,
        "__delattr__": _delattr,
        "__reduce__": _reduce,
        "__str__": _str,
        "__repr__": _repr,
        "new": classmethod(_new),
        "create": classmethod(_create),
        "to_map": _to_map,
        "to_json": _to_json,
    }
    error_type = type(name, (Exception,), namespace)
    logger.debug("defined error type %s.%s (kind=%s)", module, name, error_kind.value)
    return error_type


def domain_error(name: str, **opts: Any) -> type:
    opts.setdefault("module", _caller_module())
    return define_error(ErrorKind.DOMAIN, name, **opts)


def infrastructure_error(name: str, **opts: Any) -> type:
    opts.setdefault("module", _caller_module())
    return define_error(ErrorKind.INFRASTRUCTURE, name, **opts)


def general_error(name: str, **opts: Any) -> type:
    opts.setdefault("module", _caller_module())
    return define_error(ErrorKind.GENERAL, name, **opts)


def _caller_module() -> str:
    try:
        return sys._getframe(2).f_globals.get("__name__", "__main__")
    except (AttributeError, ValueError):
        return "__main__"
