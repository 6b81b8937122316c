"""Compose the styled console line and the plain file line for one record."""

import json

from flarelog.colors import DARK_GRAY, colorize
from flarelog.errors import EncodeError
from flarelog.renderer import RenderedFields


def format_attrs(attrs: dict) -> str:
    """Pretty-print leftover attributes; an empty mapping renders as ""."""
    if not attrs:
        return ""
    try:
        return json.dumps(attrs, indent=2, ensure_ascii=False)
    except (TypeError, ValueError) as e:
        raise EncodeError(f"marshaling attrs failed: {e}") from e


def compose(fields: RenderedFields, attrs: dict) -> tuple[str, str]:
    """Return (styled, plain).

    Styled order is timestamp, level, message; plain order is level,
    timestamp, message. Both end with the attribute blob when there is one.
    """
    blob = format_attrs(attrs)

    styled = []
    for field in (fields.timestamp, fields.level, fields.message):
        if field is not None and field.plain:
            styled.append(field.styled + " ")
    if blob:
        styled.append(colorize(DARK_GRAY, blob))

    plain = [
        field.plain
        for field in (fields.level, fields.timestamp, fields.message)
        if field is not None and field.plain
    ]
    if blob:
        plain.append(blob)

    return "".join(styled), " ".join(plain)
