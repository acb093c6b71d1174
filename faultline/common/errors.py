"""Library errors raised for misuse of the error definition machinery."""


class FaultlineError(Exception):
    """Base class for faultline failures."""

    error_code = "FAULTLINE_ERROR"


class DefinitionError(FaultlineError):
    """Raised at definition time for an unknown kind or an invalid type name."""

    error_code = "DEFINITION_ERROR"


class ConfigError(FaultlineError):
    """Raised for unreadable or invalid error catalog files."""

    error_code = "CONFIG_ERROR"


class FormatError(FaultlineError, TypeError):
    """Raised when formatting or serializing a value that is not a well-formed error."""

    error_code = "FORMAT_ERROR"
