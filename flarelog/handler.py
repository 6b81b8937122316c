"""FlareHandler — colorized console line plus plain file line per record.

Attribute extraction is delegated to a JSONHandler writing into a private
buffer; the buffer and its lock are shared by every handler derived through
with_attrs/with_group, so the whole family serializes extraction.
"""

import io
import json
import logging
import sys
import threading

from flarelog.attrs import suppress_defaults
from flarelog.composer import compose
from flarelog.config import HandlerOptions
from flarelog.errors import DecodeError, EncodeError
from flarelog.json_handler import JSONHandler
from flarelog.renderer import render_fields
from flarelog.sink import DEFAULT_LOG_FILE, FileSink


class SharedBuffer:
    """Encode buffer plus the lock that guards it."""

    def __init__(self):
        self.stream = io.StringIO()
        self.lock = threading.Lock()

    def getvalue(self) -> str:
        return self.stream.getvalue()

    def reset(self):
        self.stream.seek(0)
        self.stream.truncate(0)


class FlareHandler(logging.Handler):
    def __init__(
        self,
        options: HandlerOptions | None = None,
        file_sink: FileSink | str | None = None,
        console=None,
        *,
        _shared: SharedBuffer | None = None,
        _inner: JSONHandler | None = None,
    ):
        options = options or HandlerOptions()
        if file_sink is None or isinstance(file_sink, str):
            file_sink = FileSink(file_sink or DEFAULT_LOG_FILE)
        super().__init__(level=options.level)
        self._options = options
        self._sink = file_sink
        self._console = console
        self._replace_attr = options.replace_attr
        # derived handlers reuse the root's buffer and leave the sink to the root
        self._owns_sink = _shared is None
        self._shared = _shared if _shared is not None else SharedBuffer()
        if _inner is None:
            _inner = JSONHandler(
                self._shared.stream,
                level=options.level,
                add_source=options.add_source,
                replace_attr=suppress_defaults(options.replace_attr),
            )
        self._inner = _inner

    def enabled(self, level: int) -> bool:
        return self._inner.enabled(level)

    def with_attrs(self, attrs) -> "FlareHandler":
        inner = self._inner.with_attrs(attrs)
        if inner is self._inner:
            return self
        return self._derive(inner)

    def with_group(self, name: str) -> "FlareHandler":
        inner = self._inner.with_group(name)
        if inner is self._inner:
            return self
        return self._derive(inner)

    def _derive(self, inner: JSONHandler) -> "FlareHandler":
        handler = self.__class__(
            self._options, self._sink, self._console, _shared=self._shared, _inner=inner
        )
        handler.filters = list(self.filters)
        return handler

    def compute_attrs(self, record: logging.LogRecord) -> dict:
        """Encode *record* with the delegate and parse the JSON back into a dict."""
        with self._shared.lock:
            try:
                try:
                    self._inner.encode(record)
                except Exception as e:
                    raise EncodeError(f"inner handler handle failed: {e}") from e
                try:
                    attrs = json.loads(self._shared.getvalue())
                except ValueError as e:
                    raise DecodeError(f"unmarshal failed: {e}") from e
                if not isinstance(attrs, dict):
                    raise DecodeError(
                        f"unmarshal failed: expected a JSON object, got {type(attrs).__name__}"
                    )
                return attrs
            finally:
                self._shared.reset()

    def handle_record(self, record: logging.LogRecord) -> None:
        """Render and write one record. Raises FlarelogError subclasses on failure."""
        attrs = self.compute_attrs(record)
        fields = render_fields(record, self._replace_attr)
        styled, plain = compose(fields, attrs)

        console = self._console if self._console is not None else sys.stdout
        console.write(styled + "\n")
        console.flush()

        self._sink.write_line(plain, record.filename, record.lineno)

    def handle(self, record: logging.LogRecord):
        if not self.enabled(record.levelno):
            return False
        return super().handle(record)

    def emit(self, record: logging.LogRecord) -> None:
        try:
            self.handle_record(record)
        except Exception:
            self.handleError(record)

    def close(self):
        try:
            if self._owns_sink:
                self._sink.close()
        finally:
            super().close()
