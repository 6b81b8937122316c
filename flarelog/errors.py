"""Exception hierarchy for the flarelog handler."""


class FlarelogError(Exception):
    """Base class for every error raised while handling a record."""


class EncodeError(FlarelogError):
    """The delegate JSON handler or the attribute pretty-printer failed."""


class DecodeError(FlarelogError):
    """The encode buffer did not hold a single JSON object."""


class SinkError(FlarelogError):
    """The log file could not be opened or written."""
