"""Conversion between typed values and their stored string form."""

from __future__ import annotations

import logging
from collections.abc import Callable
from enum import Enum
from functools import lru_cache
from typing import Any, TypeVar

from pydantic import TypeAdapter, ValidationError

from .errors import ErrorCategory, SettingParseError

T = TypeVar("T")

log = logging.getLogger(__name__)


def to_str(value: Any) -> str:
    """Return the stored form of ``value``.

    Enum members are stored by value so that ``class Keys(str, Enum)`` style
    keys line up with option long names.
    """
    if isinstance(value, Enum):
        return str(value.value)
    return str(value)


def to_key(key: Any) -> str:
    return to_str(key)


def type_name(type_: Any) -> str:
    return getattr(type_, "__qualname__", None) or getattr(type_, "__name__", None) or repr(type_)


@lru_cache(maxsize=128)
def _cached_adapter(type_: Any) -> TypeAdapter[Any]:
    return TypeAdapter(type_)


def adapter_for(type_: Any) -> TypeAdapter[Any]:
    try:
        return _cached_adapter(type_)
    except TypeError:
        # unhashable annotation
        return TypeAdapter(type_)


def _failed(key: str, raw: str, target: str) -> SettingParseError:
    log.warning(
        "setting %s does not parse as %s",
        key,
        target,
        extra={"event_type": "fetch_failed", "key": key, "category": ErrorCategory.PARSE.value},
    )
    return SettingParseError(key, raw, target)


def parse_value(
    key: str,
    raw: str,
    type_: Any = str,
    parse: Callable[[str], T] | None = None,
) -> Any:
    """Parse ``raw`` as ``type_`` or with ``parse``.

    With ``parse`` the error names ``type_`` unless it was left as ``str``.
    Raises :class:`SettingParseError` when the value does not parse.
    """
    if parse is not None:
        try:
            return parse(raw)
        except (ValueError, TypeError) as exc:
            target = type_name(parse if type_ is str else type_)
            raise _failed(key, raw, target) from exc
    if type_ is str:
        return raw
    try:
        return adapter_for(type_).validate_python(raw)
    except ValidationError as exc:
        raise _failed(key, raw, type_name(type_)) from exc
