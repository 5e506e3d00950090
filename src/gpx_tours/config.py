"""Environment-driven configuration helpers."""

import logging
import os
import re


DEFAULT_MAX_WORKERS = 4
DEFAULT_LOG_LEVEL = "WARNING"

# Colors handed out to tours in load order
DEFAULT_PALETTE = (
    "#E74C3C", "#C0392B", "#A93226", "#922B21", "#7B241C",
    "#FF5733", "#FF4757", "#FF3838", "#FF2F2F", "#E55039",
    "#FF6B6B", "#EE5A52", "#FF4757", "#FF3742", "#FF2E63",
    "#D63031", "#B33939", "#A55EEA", "#FD79A8", "#E84393",
)

_HEX_COLOR_RE = re.compile(r"^#[0-9A-Fa-f]{6}$")


def parse_env_bool(value, default=False):
    """Parse a boolean-like environment value with a fallback default."""
    if value is None:
        return default
    normalized = str(value).strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


def parse_env_int(name, default):
    """Parse an integer environment value with fallback."""
    raw = os.getenv(name)
    if raw is None:
        return default
    try:
        return int(raw)
    except (TypeError, ValueError):
        return default


def get_max_workers():
    """Upper bound on documents parsed at the same time."""
    return max(1, parse_env_int("GPX_TOURS_MAX_WORKERS", DEFAULT_MAX_WORKERS))


def get_log_level():
    level = os.getenv("GPX_TOURS_LOG_LEVEL", DEFAULT_LOG_LEVEL).strip().upper()
    if level in logging.getLevelNamesMapping():
        return level
    return DEFAULT_LOG_LEVEL


def get_palette():
    """
    Return the tour color palette.

    `GPX_TOURS_PALETTE` supports a comma-separated list of #RRGGBB colors;
    malformed entries are skipped and an empty result falls back to the default.
    """
    raw = os.getenv("GPX_TOURS_PALETTE", "")
    colors = [
        c.strip().upper() for c in raw.split(",")
        if _HEX_COLOR_RE.match(c.strip())
    ]
    return tuple(colors) or DEFAULT_PALETTE


def require_home_outputs():
    """Whether export paths must stay under the user's home directory."""
    return parse_env_bool(os.getenv("GPX_TOURS_RESTRICT_EXPORTS"), default=True)
