"""The canonical shape shared by every error value."""

from __future__ import annotations

from enum import Enum
from typing import Any

from faultline.common.constants import ENTITY_FIELDS
from faultline.common.errors import FormatError
from faultline.core.kinds import ErrorKind
from faultline.core.predicates import is_error

__all__ = ["ENTITY_FIELDS", "ErrorKind", "format_message", "reason_text"]


def reason_text(reason: Any) -> str:
    if isinstance(reason, Enum):
        return str(reason.value)
    return str(reason)


def format_message(error: Any) -> str:
    """Render ``"<message>: <reason>"``, or just the message when there is no reason.

    Raises ``FormatError`` for values that are not errors or have no message.
    """
    if not is_error(error):
        raise FormatError(f"Cannot format a non-error value of type {type(error).__name__}")
    message = error.message
    if not isinstance(message, str):
        raise FormatError(f"{type(error).__name__} has no message to format")
    if error.reason is None:
        return message
    return f"{message}: {reason_text(error.reason)}"
