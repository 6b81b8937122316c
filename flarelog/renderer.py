"""Field renderer — timestamp, level and message for the console and file lines."""

import logging
from dataclasses import dataclass
from datetime import datetime

from flarelog.attrs import LEVEL_KEY, MESSAGE_KEY, TIME_KEY, Attr, ReplaceAttr, level_name
from flarelog.colors import LIGHT_GRAY, WHITE, colorize, level_color
from flarelog.errors import EncodeError


@dataclass(frozen=True)
class Field:
    plain: str
    styled: str


@dataclass(frozen=True)
class RenderedFields:
    level: Field | None
    timestamp: Field | None
    message: Field | None


def format_time(created: float) -> str:
    """Render an epoch timestamp as [HH:MM:SS.mmm] in local time."""
    now = datetime.fromtimestamp(created)
    return now.strftime("[%H:%M:%S.") + f"{now.microsecond // 1000:03d}]"


def _rewrite(attr: Attr, replace_attr: ReplaceAttr | None) -> Attr | None:
    if replace_attr is None:
        return attr
    try:
        return replace_attr([], attr)
    except Exception as e:
        raise EncodeError(f"rewriting {attr.key} failed: {e}") from e


def render_fields(record: logging.LogRecord, replace_attr: ReplaceAttr | None = None) -> RenderedFields:
    """Derive the three well-known fields, honoring the rewrite hook."""
    level = None
    attr = _rewrite(Attr(LEVEL_KEY, level_name(record.levelno)), replace_attr)
    if attr is not None:
        text = f"{attr.value}:"
        level = Field(plain=text, styled=colorize(level_color(record.levelno), text))

    timestamp = None
    attr = _rewrite(Attr(TIME_KEY, format_time(record.created)), replace_attr)
    if attr is not None:
        text = str(attr.value)
        timestamp = Field(plain=text, styled=colorize(LIGHT_GRAY, text))

    message = None
    attr = _rewrite(Attr(MESSAGE_KEY, record.getMessage()), replace_attr)
    if attr is not None:
        text = str(attr.value)
        message = Field(plain=text, styled=colorize(WHITE, text))

    return RenderedFields(level=level, timestamp=timestamp, message=message)
