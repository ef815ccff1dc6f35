"""Typed key-value settings backed by strings.

``knob`` is meant for values that are rarely read and stored, like command
line flags or application configuration. Values are kept as strings and
parsed on read, so they can be sideloaded through the command line, the
environment or a simple config file. Structured data is out of scope: store
its location as a setting and load it yourself.
"""

from .errors import (
    ConfigFileError,
    FailureKind,
    KnobError,
    MissingProgramNameError,
    ParseFailure,
    SettingParseError,
)
from .options import OptionDescriptor, optflag, optopt, reqopt
from .settings import PROGNAME_KEY, Settings

__all__ = [
    "__version__",
    "ConfigFileError",
    "FailureKind",
    "KnobError",
    "MissingProgramNameError",
    "OptionDescriptor",
    "PROGNAME_KEY",
    "ParseFailure",
    "SettingParseError",
    "Settings",
    "optflag",
    "optopt",
    "reqopt",
]

__version__ = "1.1.4"
