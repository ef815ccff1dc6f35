from __future__ import annotations

import logging
import os
import sys
import tomllib
from collections.abc import Callable, Iterator, Mapping, Sequence
from pathlib import Path
from typing import Any, TypeVar

from .config import get_config
from .convert import parse_value, to_key, to_str
from .errors import ConfigFileError, ErrorCategory, MissingProgramNameError, ParseFailure
from .options import OptionDescriptor, format_usage, parse_args

T = TypeVar("T")

PROGNAME_KEY = "knob.progname"

log = logging.getLogger(__name__)


class Settings:
    """String-backed settings with typed accessors.

    Values are serialized with ``str`` on write and parsed on read, so a value
    is only interpreted when it is fetched::

        settings = Settings()
        settings.set("port", 3000)
        settings.fetch("port", int)  # -> 3000

    Command line options registered with :meth:`opt` are applied by
    :meth:`load_args`, keyed by their long name.
    """

    def __init__(self) -> None:
        self._store: dict[str, str] = {}
        self._options: list[OptionDescriptor] = []

    # -- store ---------------------------------------------------------------

    def set(self, key: Any, value: Any) -> None:
        """Set ``key`` to ``value``. The value will be serialized."""
        self._store[to_key(key)] = to_str(value)

    def set_opt(self, key: Any, value: Any | None) -> None:
        """Like :meth:`set`, but does nothing when ``value`` is ``None``."""
        if value is not None:
            self.set(key, value)

    def fetch(
        self,
        key: Any,
        type_: type[T] | Any = str,
        *,
        parse: Callable[[str], T] | None = None,
    ) -> T | None:
        """Fetch ``key`` parsed as ``type_``.

        Returns ``None`` when the key was never set. ``parse`` replaces the
        type based parsing with an explicit converter. Raises
        :class:`~knob.errors.SettingParseError` when the stored value does not
        parse.
        """
        name = to_key(key)
        raw = self._store.get(name)
        if raw is None:
            return None
        return parse_value(name, raw, type_, parse)

    def fetch_with(
        self,
        key: Any,
        f: Callable[[T | None], T],
        type_: type[T] | Any = str,
        *,
        parse: Callable[[str], T] | None = None,
    ) -> T:
        """Fetch ``key`` and pass the result, present or not, to ``f``."""
        return f(self.fetch(key, type_, parse=parse))

    def __contains__(self, key: Any) -> bool:
        return to_key(key) in self._store

    def __len__(self) -> int:
        return len(self._store)

    def keys(self) -> Iterator[str]:
        return iter(list(self._store))

    def as_dict(self) -> dict[str, str]:
        return dict(self._store)

    # -- command line --------------------------------------------------------

    @property
    def options(self) -> tuple[OptionDescriptor, ...]:
        return tuple(self._options)

    def opt(self, descriptor: OptionDescriptor) -> None:
        """Register a command line option for later use with :meth:`load_args`."""
        self._options.append(descriptor)

    def load_os_args(self) -> ParseFailure | None:
        """Load the arguments the process was invoked with."""
        return self.load_args(sys.argv)

    def load_args(self, args: Sequence[str]) -> ParseFailure | None:
        """Load a list of command line arguments.

        ``args[0]`` is the program name and is stored under ``knob.progname``.
        Returns the failure if the arguments do not parse, in which case no
        option is applied.
        """
        if not args:
            raise MissingProgramNameError("args must start with the program name")
        prog_name = args[0]
        self.set(PROGNAME_KEY, prog_name)

        result = parse_args(prog_name, self._options, args[1:])
        if isinstance(result, ParseFailure):
            log.warning(
                "command line parse failed: %s",
                result.message,
                extra={
                    "event_type": "load_args_failed",
                    "option": result.option,
                    "failure_kind": result.kind.value,
                    "category": ErrorCategory.COMMAND_LINE.value,
                },
            )
            return result

        applied = 0
        for descriptor, value in result.items():
            if value is not None:
                applied += 1
            self.set_opt(descriptor.long_name, value)
        if result.free:
            log.debug("ignoring free arguments: %s", result.free)
        log.debug(
            "loaded %d of %d options for %s",
            applied,
            len(self._options),
            prog_name,
            extra={"event_type": "load_args"},
        )
        return None

    def usage(self, brief: str, width: int | None = None) -> str:
        """Return the usage text for the registered options, led by ``brief``."""
        if width is None:
            width = get_config().usage_width
        return format_usage(brief, self._options, width)

    # -- other sources -------------------------------------------------------

    def load_env(self, prefix: str = "", environ: Mapping[str, str] | None = None) -> None:
        """Apply registered options from environment variables.

        ``--dry-run`` with prefix ``APP_`` reads ``APP_DRY_RUN``.
        """
        if environ is None:
            environ = os.environ
        for descriptor in self._options:
            var = prefix + descriptor.long_name.upper().replace("-", "_")
            self.set_opt(descriptor.long_name, environ.get(var))

    def load_file(self, path: str | Path) -> None:
        """Load settings from a TOML file.

        Tables are flattened into dotted keys. Arrays are rejected since they
        have no single string form.
        """
        path = Path(path)
        if not path.exists():
            raise FileNotFoundError(f"Config file not found: {path}")
        with path.open("rb") as f:
            data = tomllib.load(f)
        flat = _flatten(data, path)
        for key, value in flat.items():
            self.set(key, value)
        log.debug(
            "loaded %d settings from %s", len(flat), path, extra={"event_type": "load_file"}
        )


def _flatten(data: Mapping[str, Any], path: Path, prefix: str = "") -> dict[str, Any]:
    flat: dict[str, Any] = {}
    for key, value in data.items():
        name = f"{prefix}{key}"
        if isinstance(value, dict):
            flat.update(_flatten(value, path, f"{name}."))
        elif isinstance(value, list):
            log.warning(
                "array value for %s in %s",
                name,
                path,
                extra={"event_type": "load_file_failed", "key": name, "category": ErrorCategory.CONFIG.value},
            )
            raise ConfigFileError(f"{path}: {name!r} is an array; store scalars only")
        else:
            flat[name] = value
    return flat
