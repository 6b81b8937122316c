"""ANSI color codes and the level → color band table."""

import logging

RESET = "\033[0m"

# ANSI color codes
CYAN = 36
YELLOW = 33
LIGHT_GRAY = 37
DARK_GRAY = 90
LIGHT_RED = 91
LIGHT_BLUE = 94
LIGHT_MAGENTA = 95
WHITE = 97


def colorize(color_code: int, text: str) -> str:
    return f"\033[{color_code}m{text}{RESET}"


def level_color(level: int) -> int:
    """Return the color for a numeric level; bands are checked low to high."""
    if level <= logging.DEBUG:
        return LIGHT_GRAY
    if level <= logging.INFO:
        return CYAN
    if level < logging.WARNING:
        return LIGHT_BLUE
    if level < logging.ERROR:
        return YELLOW
    if level <= logging.ERROR + 1:
        return LIGHT_RED
    return LIGHT_MAGENTA
