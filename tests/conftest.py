import io
import logging

import pytest

from flarelog.config import HandlerOptions
from flarelog.handler import FlareHandler


def build_record(level=logging.INFO, msg="Info Level Log", args=None, created=None, **extra):
    record = logging.LogRecord("test", level, "/app/service.py", 42, msg, args, None)
    if created is not None:
        record.created = created
    record.__dict__.update(extra)
    return record


@pytest.fixture
def make_record():
    return build_record


@pytest.fixture
def log_path(tmp_path):
    return tmp_path / "logs.log"


@pytest.fixture
def console():
    return io.StringIO()


@pytest.fixture
def make_handler(log_path, console):
    """Build FlareHandlers writing to a temp log file and an in-memory console."""
    created = []

    def factory(**options):
        options.setdefault("level", logging.DEBUG)
        handler = FlareHandler(HandlerOptions(**options), file_sink=str(log_path), console=console)
        created.append(handler)
        return handler

    yield factory
    for handler in created:
        handler.close()
