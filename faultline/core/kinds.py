"""Error classification tags."""

from __future__ import annotations

from enum import Enum


class ErrorKind(str, Enum):
    """Classification fixed on an error type when it is defined.

    * ``DOMAIN`` errors are business-process violations inside a bounded
      context and belong to its ubiquitous language.
    * ``INFRASTRUCTURE`` errors come from the machinery around the domain
      (storage, network, third-party services).
    * ``GENERAL`` errors fit neither bucket.
    """

    DOMAIN = "domain"
    INFRASTRUCTURE = "infrastructure"
    GENERAL = "general"

    def __str__(self) -> str:
        return self.value
