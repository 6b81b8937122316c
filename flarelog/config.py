"""Configuration — handler options plus a frozen Config loaded from YAML and env vars."""

import logging
import os
from dataclasses import dataclass

import yaml

from flarelog.attrs import ReplaceAttr
from flarelog.sink import DEFAULT_LOG_FILE

logger = logging.getLogger(__name__)


def _parse_bool(value: str) -> bool:
    return value.strip().lower() in ("true", "1", "yes")


def parse_level(value: str | int) -> int:
    """Accept a level name (case-insensitive) or a number."""
    if isinstance(value, int):
        return value
    text = str(value).strip()
    if text.lstrip("-").isdigit():
        return int(text)
    name = text.upper()
    level = logging.getLevelName(name)
    if isinstance(level, int):
        return level
    logger.warning("Invalid log level %r, falling back to INFO", value)
    return logging.INFO


@dataclass(frozen=True)
class HandlerOptions:
    level: int = logging.INFO
    add_source: bool = False
    replace_attr: ReplaceAttr | None = None


@dataclass(frozen=True)
class Config:
    level: str = "INFO"
    add_source: bool = False
    log_file: str = DEFAULT_LOG_FILE

    def handler_options(self, replace_attr: ReplaceAttr | None = None) -> HandlerOptions:
        return HandlerOptions(
            level=parse_level(self.level),
            add_source=self.add_source,
            replace_attr=replace_attr,
        )


def load_yaml_config(path: str | None) -> dict:
    """Load settings from a YAML file. Returns empty dict if no path."""
    if not path:
        return {}
    try:
        with open(path, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except FileNotFoundError:
        logger.warning("Config file %s not found, using defaults", path)
        return {}
    if not isinstance(data, dict):
        logger.warning("Config file %s is not a mapping, using defaults", path)
        return {}
    logger.info("Loaded YAML config from %s", path)
    return data


def load_config(path: str | None = None) -> Config:
    """Build Config from defaults, an optional YAML file, then env vars."""
    data = load_yaml_config(path)

    add_source = data.get("add_source", Config.add_source)
    if isinstance(add_source, str):
        add_source = _parse_bool(add_source)
    raw_add_source = os.environ.get("FLARELOG_ADD_SOURCE")
    if raw_add_source is not None:
        add_source = _parse_bool(raw_add_source)

    return Config(
        level=os.environ.get("FLARELOG_LEVEL", str(data.get("level", Config.level))),
        add_source=bool(add_source),
        log_file=os.environ.get("FLARELOG_LOG_FILE", data.get("log_file", Config.log_file)),
    )
