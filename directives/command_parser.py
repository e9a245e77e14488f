"""Command parser that turns chat input into a command plus resolved options."""

from __future__ import annotations

import logging
import re
from typing import Any, Dict, Mapping, Optional

from directives.catalog import DirectiveCatalog, build_default_catalog
from directives.commands import CommandDescriptor, CommandRegistry, ParsedCommand, load_command_registry
from directives.config import (
    configure_logging,
    get_command_config_path,
    get_command_prefix,
    get_default_syntax,
)
from directives.errors import UnknownCommand
from directives.resolver import DirectiveResolver
from directives.types import Permission, SyntaxType

logger = logging.getLogger(__name__)

_MENTION_PATTERN = re.compile(r"<(?:@[!&]?|#)\d+>")


def remove_mentions(text: str) -> str:
    """Drop user, role and channel mentions from chat text."""

    return _MENTION_PATTERN.sub("", text or "").strip()


class CommandParser:
    """Look up the invoked command and resolve its options in either mode."""

    def __init__(
        self,
        catalog: DirectiveCatalog,
        registry: CommandRegistry,
        *,
        prefix: str = "!",
        default_syntax: SyntaxType = SyntaxType.KEYWORD,
    ) -> None:
        self._registry = registry
        self._resolver = DirectiveResolver(catalog)
        self._prefix = prefix
        self._default_syntax = default_syntax

    def message_invokes_bot(self, message: str, prefix: Optional[str] = None) -> bool:
        """Return True when ``message`` starts with the (server) prefix."""

        active = prefix or self._prefix
        return bool(message) and message.startswith(active)

    def strip_prefix(self, message: str, prefix: Optional[str] = None) -> str:
        active = prefix or self._prefix
        if message.startswith(active):
            return message[len(active) :]
        return message

    def parse_command(
        self,
        message: str,
        permission: Permission,
        syntax: Optional[SyntaxType] = None,
    ) -> ParsedCommand:
        """Resolve ``<command> <free text>`` into a ``ParsedCommand``.

        Raises ``UnknownCommand`` when the name is missing, unknown, or above
        the caller's permission; resolver errors propagate unchanged.
        """
        text = remove_mentions(message)
        parts = text.split(maxsplit=1)
        if not parts:
            raise UnknownCommand("")
        name = parts[0].lower()
        rest = parts[1] if len(parts) > 1 else ""

        command = self._get_command(name, permission)
        active_syntax = syntax if syntax is not None else self._default_syntax
        options = self._resolver.resolve_text(rest, permission, command, active_syntax)
        logger.debug("Parsed '%s' (%s) -> %s", command.name, active_syntax.name, sorted(options))
        return ParsedCommand(command=command, options=options)

    def parse_structured(
        self,
        name: str,
        values: Mapping[str, Any],
        permission: Permission,
    ) -> ParsedCommand:
        command = self._get_command(name, permission)
        options = self._resolver.resolve_structured(values, permission, command)
        logger.debug("Parsed '%s' (SLASH) -> %s", command.name, sorted(options))
        return ParsedCommand(command=command, options=options)

    def _get_command(self, name: str, permission: Permission) -> CommandDescriptor:
        command = self._registry.get(name, permission)
        if command is None:
            logger.info("Unknown or forbidden command '%s' for %s", name, permission.name)
            raise UnknownCommand(name)
        return command


def build_command_parser(env: Dict[str, str] | None = None) -> CommandParser:
    """Wire the default catalog, the YAML command registry and configuration."""

    configure_logging(env)
    catalog = build_default_catalog()
    registry = load_command_registry(get_command_config_path(env), catalog)
    return CommandParser(
        catalog,
        registry,
        prefix=get_command_prefix(env),
        default_syntax=get_default_syntax(env),
    )


__all__ = ["CommandParser", "build_command_parser", "remove_mentions"]
