"""Structural classification of error values.

These checks look only at attribute presence and the ``kind`` value, so any
exception carrying the marker and the entity fields counts, whatever class
built it. Attributes are read with ``inspect.getattr_static``: no property,
descriptor or ``__getattr__`` hook runs, which keeps the predicates pure and
safe inside ``if`` and ``match`` guards.
"""

from __future__ import annotations

from inspect import getattr_static
from typing import Any

from faultline.common.constants import ENTITY_FIELDS, ERROR_MARKER, KIND_FIELD
from faultline.core.kinds import ErrorKind

_MISSING = object()
_KINDS_BY_VALUE = {kind.value: kind for kind in ErrorKind}


def _kind_of(value: Any) -> ErrorKind | None:
    if not isinstance(value, BaseException):
        return None
    if getattr_static(value, ERROR_MARKER, False) is not True:
        return None
    kind = getattr_static(value, KIND_FIELD, None)
    if not isinstance(kind, ErrorKind):
        # Hand-built values may carry the plain string tag.
        if not isinstance(kind, str):
            return None
        kind = _KINDS_BY_VALUE.get(kind)
        if kind is None:
            return None
    for field in ENTITY_FIELDS:
        if getattr_static(value, field, _MISSING) is _MISSING:
            return None
    return kind


def is_error(value: Any) -> bool:
    return _kind_of(value) is not None


def is_domain_error(value: Any) -> bool:
    return _kind_of(value) is ErrorKind.DOMAIN


def is_infrastructure_error(value: Any) -> bool:
    return _kind_of(value) is ErrorKind.INFRASTRUCTURE
