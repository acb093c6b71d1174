"""Library constants."""

LOGGER_NAME = "faultline"
ERROR_MARKER = "__faultline_error__"
KIND_FIELD = "kind"
ENTITY_FIELDS = (
    "message",
    "reason",
    "context",
    "env",
)
PARAM_KEYS = (
    "message",
    "reason",
    "context",
)
CATALOG_VERSION = 1
CATALOG_OPTION_KEYS = (
    "kind",
    "default_message",
    "default_reason",
    "doc",
)
LOG_FIELDS = (
    "timestamp",
    "level",
    "logger",
    "event",
    "error_type",
    "kind",
    "reason",
    "message",
    "error",
)
