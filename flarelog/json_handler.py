"""JSON handler — one JSON object per record, with bound attrs and groups.

Used standalone or as the delegate encoder inside FlareHandler, which points
it at a private in-memory buffer and parses the result back into a dict.
"""

import json
import logging
import sys
from datetime import date, datetime
from typing import Any

from flarelog.attrs import (
    EXC_INFO_KEY,
    LEVEL_KEY,
    MESSAGE_KEY,
    SOURCE_KEY,
    TIME_KEY,
    Attr,
    ReplaceAttr,
    as_attrs,
    level_name,
)

# Attributes every LogRecord carries; anything else came in through extra=.
_RESERVED = frozenset(vars(logging.LogRecord("", 0, "", 0, "", (), None))) | {
    "message",
    "asctime",
}
_exc_formatter = logging.Formatter()


class _Group(dict):
    """Marks dicts created for group nesting, as opposed to dict values."""


def record_attrs(record: logging.LogRecord) -> list[Attr]:
    """Return the caller-supplied extra attributes of a record, in order."""
    return [
        Attr(key, value)
        for key, value in record.__dict__.items()
        if key not in _RESERVED
    ]


def _json_default(value: Any) -> Any:
    if isinstance(value, (datetime, date)):
        return value.isoformat()
    if isinstance(value, BaseException):
        return str(value)
    if isinstance(value, (set, frozenset)):
        return list(value)
    raise TypeError(f"Object of type {type(value).__name__} is not JSON serializable")


class JSONHandler(logging.Handler):
    def __init__(
        self,
        stream=None,
        level: int = logging.INFO,
        add_source: bool = False,
        replace_attr: ReplaceAttr | None = None,
    ):
        super().__init__(level=level)
        self.stream = stream if stream is not None else sys.stderr
        self.add_source = add_source
        self.replace_attr = replace_attr
        self._groups: tuple[str, ...] = ()
        self._bound: tuple[tuple[tuple[str, ...], Attr], ...] = ()

    def enabled(self, level: int) -> bool:
        return level >= self.level

    def with_attrs(self, attrs) -> "JSONHandler":
        """Return a handler that adds *attrs* to every record, in the current group."""
        attrs = as_attrs(attrs)
        if not attrs:
            return self
        handler = self._clone()
        handler._bound = self._bound + tuple((self._groups, attr) for attr in attrs)
        return handler

    def with_group(self, name: str) -> "JSONHandler":
        """Return a handler that nests all later attrs under *name*."""
        if not name:
            return self
        handler = self._clone()
        handler._groups = self._groups + (name,)
        return handler

    def _clone(self) -> "JSONHandler":
        handler = JSONHandler(self.stream, self.level, self.add_source, self.replace_attr)
        handler._groups = self._groups
        handler._bound = self._bound
        return handler

    def _add(self, payload: dict, groups: tuple[str, ...], attr: Attr) -> None:
        if self.replace_attr is not None:
            attr = self.replace_attr(list(groups), attr)
            if attr is None:
                return
        target = payload
        for name in groups:
            child = target.get(name)
            if not isinstance(child, _Group):
                child = target[name] = _Group()
            target = child
        target[attr.key] = attr.value

    def build_payload(self, record: logging.LogRecord) -> dict:
        """Assemble the JSON object for a record after applying the rewrite hook."""
        payload: dict[str, Any] = {}
        builtins = [
            Attr(TIME_KEY, datetime.fromtimestamp(record.created).astimezone().isoformat()),
            Attr(LEVEL_KEY, level_name(record.levelno)),
            Attr(MESSAGE_KEY, record.getMessage()),
        ]
        if self.add_source:
            builtins.append(Attr(SOURCE_KEY, {
                "function": record.funcName,
                "file": record.pathname,
                "line": record.lineno,
            }))
        if record.exc_info:
            builtins.append(Attr(EXC_INFO_KEY, _exc_formatter.formatException(record.exc_info)))
        for attr in builtins:
            self._add(payload, (), attr)
        for groups, attr in self._bound:
            self._add(payload, groups, attr)
        for attr in record_attrs(record):
            self._add(payload, self._groups, attr)
        return payload

    def format(self, record: logging.LogRecord) -> str:
        return json.dumps(self.build_payload(record), default=_json_default)

    def encode(self, record: logging.LogRecord) -> None:
        """Write one JSON line for *record* to the stream. Raises on failure."""
        self.stream.write(self.format(record) + "\n")

    def flush(self):
        if hasattr(self.stream, "flush"):
            self.stream.flush()

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.encode(record)
            self.flush()
        except Exception:
            self.handleError(record)
