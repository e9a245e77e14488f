"""Centralize defaults and environment lookups for the directive parser."""

from __future__ import annotations

import logging
import os
from pathlib import Path
from typing import Dict

from dotenv import load_dotenv

from directives.types import SyntaxType

load_dotenv()

# ---------------------------------------------------------------------------
# Default configuration values
# ---------------------------------------------------------------------------
_DEFAULT_PREFIX = "!"
_DEFAULT_SYNTAX = SyntaxType.KEYWORD
_DEFAULT_COMMAND_CONFIG = "config/commands.yml"
_DEFAULT_LOG_LEVEL = "WARNING"
_LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

# ---------------------------------------------------------------------------
# Environment-derived settings
# ---------------------------------------------------------------------------
def get_command_prefix(env: Dict[str, str] | None = None) -> str:
    """Return the single-character prefix that invokes the bot in chat.

    Args:
        env: Optional mapping used instead of ``os.environ`` to simplify testing.
    """

    source = env if env is not None else os.environ
    raw = source.get("DIRECTIVES_PREFIX")
    if raw is None:
        return _DEFAULT_PREFIX
    raw = raw.strip()
    return raw if len(raw) == 1 else _DEFAULT_PREFIX


def get_default_syntax(env: Dict[str, str] | None = None) -> SyntaxType:
    """Return the text syntax used when a server has not chosen one."""

    source = env if env is not None else os.environ
    raw = source.get("DIRECTIVES_SYNTAX")
    if raw is None:
        return _DEFAULT_SYNTAX
    try:
        syntax = SyntaxType.parse(raw)
    except ValueError:
        return _DEFAULT_SYNTAX
    # Free text can only be KEYWORD or TRADITIONAL.
    return _DEFAULT_SYNTAX if syntax == SyntaxType.SLASH else syntax


def get_command_config_path(env: Dict[str, str] | None = None) -> Path:
    """Return the path to the YAML command definitions."""

    source = env if env is not None else os.environ
    override = source.get("DIRECTIVES_COMMANDS")
    return Path(override) if override else Path(_DEFAULT_COMMAND_CONFIG)


def get_log_level(env: Dict[str, str] | None = None) -> int:
    source = env if env is not None else os.environ
    raw = (source.get("DIRECTIVES_LOG_LEVEL") or _DEFAULT_LOG_LEVEL).strip().upper()
    level = logging.getLevelName(raw)
    return level if isinstance(level, int) else logging.WARNING


def configure_logging(env: Dict[str, str] | None = None) -> None:
    """Install a basic stderr handler at the configured level."""

    logging.basicConfig(level=get_log_level(env), format=_LOG_FORMAT)
