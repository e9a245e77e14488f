"""Directive parsing for chat-bot commands.

Turns chat text (KEYWORD or TRADITIONAL syntax) or a structured slash-command
option map into one canonical ``CommandOptions`` record per command.
"""

from directives.catalog import DirectiveCatalog, build_default_catalog
from directives.command_parser import CommandParser, build_command_parser
from directives.commands import CommandDescriptor, CommandRegistry, ParsedCommand
from directives.errors import DirectiveError
from directives.resolver import DirectiveResolver
from directives.types import Permission, SyntaxType

__all__ = [
    "CommandDescriptor",
    "CommandParser",
    "CommandRegistry",
    "DirectiveCatalog",
    "DirectiveError",
    "DirectiveResolver",
    "ParsedCommand",
    "Permission",
    "SyntaxType",
    "build_command_parser",
    "build_default_catalog",
]
