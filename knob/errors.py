from __future__ import annotations

from dataclasses import dataclass
from enum import Enum


class ErrorCategory(str, Enum):
    """Classification for error logging."""

    PARSE = "parse"
    COMMAND_LINE = "command_line"
    CONFIG = "config"


class FailureKind(str, Enum):
    ARGUMENT_MISSING = "argument_missing"
    UNRECOGNIZED_OPTION = "unrecognized_option"
    OPTION_MISSING = "option_missing"
    UNEXPECTED_ARGUMENT = "unexpected_argument"


@dataclass(frozen=True)
class ParseFailure:
    """Command line parse failure returned by :meth:`Settings.load_args`."""

    kind: FailureKind
    message: str
    option: str | None = None

    def __str__(self) -> str:
        return self.message


class KnobError(Exception):
    """Base class for errors raised by knob."""


class SettingParseError(KnobError, ValueError):
    """A stored setting is present but does not parse as the requested type."""

    def __init__(self, key: str, raw: str, target: str) -> None:
        super().__init__(f"setting {key!r} value {raw!r} does not parse as {target}")
        self.key = key
        self.raw = raw
        self.target = target


class MissingProgramNameError(KnobError, ValueError):
    """``load_args`` was called without the program name in ``args[0]``."""


class ConfigFileError(KnobError):
    """A config file holds a value that cannot be stored as a setting."""
