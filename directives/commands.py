"""Command descriptors and the registry that loads them from YAML.

A command declares which keywords and patterns it accepts; the resolver only
ever looks for those. Descriptors are immutable and live for the whole process.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Iterable, List, Mapping, Optional, Sequence, Tuple

import yaml

from directives.catalog import DirectiveCatalog
from directives.errors import CommandConfigError
from directives.types import CommandOptions, Permission

DEFAULT_COMMAND_CONFIG = Path("config/commands.yml")


@dataclass(frozen=True)
class ArgOption:
    name: str
    details: str = ""
    choices: Tuple[str, ...] = ()


@dataclass(frozen=True)
class ArgGroup:
    """Positional argument slot; at most one of its options may be populated."""

    options: Tuple[ArgOption, ...]
    required: bool = False


@dataclass(frozen=True)
class CommandArgs:
    groups: Tuple[ArgGroup, ...]


@dataclass(frozen=True)
class CommandDescriptor:
    name: str
    details: str = ""
    permission: Permission = Permission.USER
    category: str = "general"
    keywords: Tuple[str, ...] = ()
    patterns: Tuple[str, ...] = ()
    args: Optional[CommandArgs] = None
    exclusive: Tuple[Tuple[str, str], ...] = ()
    dm_allowed: bool = False
    usage: Tuple[str, ...] = ()

    @property
    def uses_directives(self) -> bool:
        return bool(self.keywords or self.patterns)


@dataclass
class ParsedCommand:
    command: CommandDescriptor
    options: CommandOptions = field(default_factory=dict)


class CommandRegistry:
    """Registry that maps command names to descriptors."""

    def __init__(self, catalog: Optional[DirectiveCatalog] = None) -> None:
        self._catalog = catalog
        self._commands: Dict[str, CommandDescriptor] = {}

    def register(self, command: CommandDescriptor) -> None:
        key = command.name.lower()
        if key in self._commands:
            raise ValueError(f"Command '{key}' is already registered")
        if self._catalog is not None:
            self._check_directives(command, self._catalog)
        self._commands[key] = command

    def get(self, name: str, permission: Permission = Permission.OWNER) -> Optional[CommandDescriptor]:
        """Return the command when it exists and ``permission`` may invoke it."""

        command = self._commands.get((name or "").strip().lower())
        if command is None or command.permission > permission:
            return None
        return command

    def names(self) -> List[str]:
        return list(self._commands.keys())

    def _check_directives(self, command: CommandDescriptor, catalog: DirectiveCatalog) -> None:
        for name in command.keywords:
            if catalog.keyword(name) is None:
                raise CommandConfigError(f"Command '{command.name}' references unknown keyword '{name}'.")
        for name in command.patterns:
            if catalog.pattern(name) is None:
                raise CommandConfigError(f"Command '{command.name}' references unknown pattern '{name}'.")
        for pair in command.exclusive:
            for name in pair:
                if catalog.lookup(name) is None:
                    raise CommandConfigError(f"Command '{command.name}' marks unknown option '{name}' exclusive.")


# ---------------------------------------------------------------------------
# YAML loading
# ---------------------------------------------------------------------------
def load_command_registry(path: Path | str | None, catalog: DirectiveCatalog) -> CommandRegistry:
    """Load the YAML command document into a ``CommandRegistry``."""

    target = Path(path) if path else DEFAULT_COMMAND_CONFIG
    if not target.exists():
        raise CommandConfigError(f"Command config not found: {target}")
    data = yaml.safe_load(target.read_text(encoding="utf-8")) or {}
    if not isinstance(data, Mapping):
        raise CommandConfigError(f"Command config {target} must be a mapping at the top level.")
    return registry_from_dict(data, catalog)


def registry_from_dict(data: Mapping[str, Any], catalog: DirectiveCatalog) -> CommandRegistry:
    """Build a registry from an in-memory document (primarily for tests)."""

    entries = data.get("commands")
    if not isinstance(entries, list):
        raise CommandConfigError("Command config must define a top-level 'commands' list.")

    registry = CommandRegistry(catalog)
    for idx, entry in enumerate(entries):
        if not isinstance(entry, Mapping):
            raise CommandConfigError(f"commands[{idx}] must be a mapping.")
        try:
            registry.register(_build_command(entry, idx))
        except ValueError as exc:
            raise CommandConfigError(str(exc)) from exc

    if not registry.names():
        raise CommandConfigError("Command config did not yield any commands.")
    return registry


def _build_command(entry: Mapping[str, Any], idx: int) -> CommandDescriptor:
    name = _normalize_string(entry.get("name")).lower()
    if not name:
        raise CommandConfigError(f"commands[{idx}] is missing a 'name'.")
    try:
        permission = Permission.parse(entry.get("permission") or Permission.USER)
    except ValueError as exc:
        raise CommandConfigError(f"commands[{idx}]: {exc}") from exc

    return CommandDescriptor(
        name=name,
        details=_normalize_string(entry.get("details")),
        permission=permission,
        category=_normalize_string(entry.get("category")) or "general",
        keywords=tuple(value.upper() for value in _normalize_string_list(entry.get("keywords"), "keywords")),
        patterns=tuple(value.upper() for value in _normalize_string_list(entry.get("patterns"), "patterns")),
        args=_build_args(entry.get("args"), name),
        exclusive=_build_exclusive(entry.get("exclusive"), name),
        dm_allowed=bool(entry.get("dm_allowed", False)),
        usage=tuple(_normalize_string_list(entry.get("usage"), "usage", keep_empty=True)),
    )


def _build_args(raw: Any, command: str) -> Optional[CommandArgs]:
    if raw is None:
        return None
    if not isinstance(raw, Sequence) or isinstance(raw, (str, bytes)):
        raise CommandConfigError(f"'{command}' args must be a list of groups.")
    groups: List[ArgGroup] = []
    for group_idx, group in enumerate(raw):
        if not isinstance(group, Mapping):
            raise CommandConfigError(f"'{command}' args[{group_idx}] must be a mapping.")
        options: List[ArgOption] = []
        for option in group.get("options") or []:
            if not isinstance(option, Mapping) or not _normalize_string(option.get("name")):
                raise CommandConfigError(f"'{command}' args[{group_idx}] has an option without a 'name'.")
            options.append(
                ArgOption(
                    name=_normalize_string(option.get("name")).lower(),
                    details=_normalize_string(option.get("details")),
                    choices=tuple(_normalize_string_list(option.get("choices"), "choices")),
                )
            )
        if not options:
            raise CommandConfigError(f"'{command}' args[{group_idx}] must declare at least one option.")
        groups.append(ArgGroup(options=tuple(options), required=bool(group.get("required", False))))
    return CommandArgs(groups=tuple(groups))


def _build_exclusive(raw: Any, command: str) -> Tuple[Tuple[str, str], ...]:
    pairs: List[Tuple[str, str]] = []
    for pair in raw or []:
        names = _normalize_string_list(pair, "exclusive")
        if len(names) != 2:
            raise CommandConfigError(f"'{command}' exclusive entries must name exactly two options.")
        pairs.append((names[0].upper(), names[1].upper()))
    return tuple(pairs)


def _normalize_string(value: Any) -> str:
    if value is None:
        return ""
    return str(value).strip()


def _normalize_string_list(values: Any, label: str, *, keep_empty: bool = False) -> List[str]:
    if values is None:
        return []
    if not isinstance(values, Iterable) or isinstance(values, (str, bytes)):
        raise CommandConfigError(f"'{label}' values must be sequences.")
    normalized: List[str] = []
    for item in values:
        text = _normalize_string(item)
        if text or keep_empty:
            normalized.append(text)
    return normalized


__all__ = [
    "ArgGroup",
    "ArgOption",
    "CommandArgs",
    "CommandDescriptor",
    "CommandRegistry",
    "DEFAULT_COMMAND_CONFIG",
    "ParsedCommand",
    "load_command_registry",
    "registry_from_dict",
]
