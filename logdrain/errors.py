"""Error types raised by logdrain.

Build-time failures are all ``ConfigError`` subclasses, so callers can catch
one type at the ``from_config`` boundary. Failures while logging through a
built drain are raised as ``SinkError``.
"""

from typing import Optional


class LogDrainError(Exception):
    """Base class for every error raised by logdrain."""


class ConfigError(LogDrainError):
    """A drain could not be built from its configuration.

    Args:
        reason: Human readable description of the failure
        output: Name of the output being resolved, if known. The resolver
            fills this in when the error escapes a factory.
    """

    def __init__(self, reason: str, output: Optional[str] = None):
        super().__init__(reason)
        self.reason = reason
        self.output = output

    def __str__(self) -> str:
        if self.output is not None:
            return f"output '{self.output}': {self.reason}"
        return self.reason


class ConfigParseError(ConfigError):
    """Configuration text is malformed or not shaped as output tables."""


class MissingFieldError(ConfigError):
    """A required option is absent from an output."""

    def __init__(self, option: str, output: Optional[str] = None):
        super().__init__(f"{option} missing", output=output)
        self.option = option


class InvalidValueError(ConfigError):
    """An option is present but its value is not accepted."""

    def __init__(
        self,
        option: str,
        value: str,
        expected: Optional[str] = None,
        output: Optional[str] = None,
    ):
        reason = f"invalid value {value!r} for option '{option}'"
        if expected:
            reason += f" (expected {expected})"
        super().__init__(reason, output=output)
        self.option = option
        self.value = value
        self.expected = expected


class UnresolvedOutputError(ConfigError):
    """No registered factory recognizes the output's type."""

    def __init__(self, output: str, output_type: str):
        super().__init__(
            f"no backend implementing output {output} found (type {output_type!r})",
            output=output,
        )
        self.output_type = output_type

    def __str__(self) -> str:
        return self.reason


class ResourceError(ConfigError):
    """An I/O resource needed by a sink could not be acquired."""

    def __init__(self, path: str, reason: str, output: Optional[str] = None):
        super().__init__(f"cannot open {path}: {reason}", output=output)
        self.path = path


class SinkError(LogDrainError):
    """A sink failed while handling a record.

    Backend specific exceptions are re-raised as ``SinkError`` with the
    original exception chained as ``__cause__``.
    """
