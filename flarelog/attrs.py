"""Attribute type, well-known keys, and rewrite-hook helpers."""

import logging
from collections.abc import Callable, Iterable, Mapping
from dataclasses import dataclass
from typing import Any

TIME_KEY = "time"
LEVEL_KEY = "level"
MESSAGE_KEY = "msg"
SOURCE_KEY = "source"
EXC_INFO_KEY = "exc_info"

WELL_KNOWN_KEYS = frozenset({TIME_KEY, LEVEL_KEY, MESSAGE_KEY})

_BASE_LEVELS = (
    (logging.CRITICAL, "CRITICAL"),
    (logging.ERROR, "ERROR"),
    (logging.WARNING, "WARNING"),
    (logging.INFO, "INFO"),
    (logging.DEBUG, "DEBUG"),
)


@dataclass(frozen=True)
class Attr:
    key: str
    value: Any


# (group path, attr) -> attr to keep, or None to suppress it everywhere
ReplaceAttr = Callable[[list[str], Attr], "Attr | None"]


def level_name(level: int) -> str:
    """Name a numeric level, e.g. 20 -> "INFO", 42 -> "ERROR+2"."""
    name = logging.getLevelName(level)
    if not name.startswith("Level "):
        return name
    for base, base_name in _BASE_LEVELS:
        if level >= base:
            return f"{base_name}+{level - base}"
    return f"DEBUG{level - logging.DEBUG:+d}"


def as_attrs(attrs: Mapping[str, Any] | Iterable[Attr] | None) -> list[Attr]:
    """Normalize a mapping or an iterable of Attr into a list of Attr."""
    if not attrs:
        return []
    if isinstance(attrs, Mapping):
        return [Attr(key, value) for key, value in attrs.items()]
    return list(attrs)


def suppress_defaults(next_hook: ReplaceAttr | None = None) -> ReplaceAttr:
    """Wrap a rewrite hook so time/level/msg are always dropped.

    The console line renders these fields itself, so the delegate must not
    emit them a second time inside the attribute blob.
    """

    def replace(groups: list[str], attr: Attr) -> Attr | None:
        if attr.key in WELL_KNOWN_KEYS:
            return None
        if next_hook is None:
            return attr
        return next_hook(groups, attr)

    return replace
