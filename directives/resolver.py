"""Resolve user input into a canonical ``CommandOptions`` record.

Two entry points share one output contract:

* ``resolve_text`` scans a free-text buffer (KEYWORD or TRADITIONAL syntax).
  Patterns are extracted highest priority first and stripped from the buffer,
  then keywords, and whatever is left becomes the implicit SEARCH query.
  Group collisions keep the first match; privileged directives the caller may
  not use are stripped without being recorded.
* ``resolve_structured`` reads a pre-segmented option map (SLASH syntax). The
  permission filter is the same, but group collisions are reported as
  ``ConflictingInput`` because the UI should already have prevented them.
"""

from __future__ import annotations

import logging
import re
from itertools import groupby
from typing import Any, Dict, List, Mapping, Optional, Sequence, TypeVar

from directives.catalog import Directive, DirectiveCatalog, Keyword, Pattern
from directives.commands import CommandArgs, CommandDescriptor
from directives.errors import (
    ConflictingInput,
    DirectiveError,
    InvalidChoice,
    MissingArgument,
    UnrecognizedResidue,
)
from directives.parser_utils import collapse_whitespace, drop_empty_delimiters
from directives.types import CommandOptions, Permission, SyntaxType

logger = logging.getLogger(__name__)

SEARCH = "SEARCH"
ARG = "ARG"
SIMPLE_ARGS_KEY = "args"

_TRUE_VALUES = {"1", "true", "yes", "on"}
_CHOICE_SEPARATOR = re.compile(r"[\s,]+")

D = TypeVar("D", Keyword, Pattern)

# group name -> name of the directive holding it
GroupSlots = Dict[str, str]


def _is_true(value: Optional[str]) -> bool:
    return bool(value) and value.strip().lower() in _TRUE_VALUES


def _reject(error: DirectiveError) -> DirectiveError:
    logger.info("Rejecting input (%s): %s", error.error_type, error.user_message)
    return error


class DirectiveResolver:
    """Stateless per call; safe to share across threads with one catalog."""

    def __init__(self, catalog: DirectiveCatalog) -> None:
        self._catalog = catalog

    # ------------------------------------------------------------------
    # Text mode
    # ------------------------------------------------------------------
    def resolve_text(
        self,
        text: str,
        permission: Permission,
        command: CommandDescriptor,
        syntax: SyntaxType = SyntaxType.KEYWORD,
    ) -> CommandOptions:
        if syntax == SyntaxType.SLASH:
            raise ValueError("SLASH input is pre-segmented; use resolve_structured instead.")

        remaining = collapse_whitespace(text)
        if not command.uses_directives:
            return self._simple_options(remaining)

        options: CommandOptions = {}
        groups: GroupSlots = {}

        for tier in self._pattern_tiers(command):
            for pattern in self._in_text_order(tier, remaining, syntax):
                result = pattern.match(remaining, syntax)
                if not result.matched:
                    continue
                remaining = result.remainder
                self._record_lenient(pattern, result.payload, permission, options, groups)

        for keyword in self._in_text_order(self._keywords_for(command), remaining, syntax):
            result = keyword.match(remaining, syntax)
            if not result.matched:
                continue
            remaining = result.remainder
            self._record_lenient(keyword, True, permission, options, groups)

        # A directive written inside a delimiter pair, e.g. "(https://...)", leaves "( )" behind.
        residue = drop_empty_delimiters(remaining).strip()
        if residue:
            self._apply_residue(residue, permission, command, options, groups)

        self._check_exclusive(command, options)
        logger.debug("Resolved '%s' text options: %s", command.name, sorted(options))
        return options

    def _pattern_tiers(self, command: CommandDescriptor) -> List[List[Pattern]]:
        declared = self._patterns_for(command)
        return [list(tier) for _, tier in groupby(declared, key=lambda pattern: pattern.priority)]

    @staticmethod
    def _in_text_order(directives: Sequence[D], text: str, syntax: SyntaxType) -> List[D]:
        """Order ``directives`` by where they first occur in ``text``.

        Matchers are pure, so probing is free of side effects. Unmatched
        directives keep their relative order at the end.
        """
        missing = len(text) + 1

        def position(directive: D) -> int:
            result = directive.match(text, syntax)
            return result.position if result.matched else missing

        return sorted(directives, key=position)

    def _record_lenient(
        self,
        directive: Directive,
        payload: Any,
        permission: Permission,
        options: CommandOptions,
        groups: GroupSlots,
    ) -> None:
        if directive.permission > permission:
            logger.debug("Stripped %s without recording it: requires %s", directive.name, directive.permission.name)
            return
        if directive.group:
            holder = groups.get(directive.group)
            if holder is not None:
                logger.debug("Ignoring %s: group '%s' already holds %s", directive.name, directive.group, holder)
                return
            groups[directive.group] = directive.name
        logger.debug("Matched %s", directive.name)
        options[directive.name] = payload

    def _apply_residue(
        self,
        residue: str,
        permission: Permission,
        command: CommandDescriptor,
        options: CommandOptions,
        groups: GroupSlots,
    ) -> None:
        search = self._catalog.pattern(SEARCH)
        if (
            search is None
            or SEARCH not in command.patterns
            or SEARCH in options
            or search.permission > permission
            or (search.group is not None and search.group in groups)
        ):
            raise _reject(UnrecognizedResidue(residue))
        if search.group:
            groups[search.group] = SEARCH
        options[SEARCH] = residue

    # ------------------------------------------------------------------
    # Structured mode
    # ------------------------------------------------------------------
    def resolve_structured(
        self,
        values: Mapping[str, Any],
        permission: Permission,
        command: CommandDescriptor,
    ) -> CommandOptions:
        normalized = self._normalize_values(values)

        if not command.uses_directives:
            if command.args is not None:
                args = self._parse_command_args(command.args, normalized)
                return {ARG: args} if args else {}
            return self._simple_options(normalized.get(SIMPLE_ARGS_KEY, ""))

        options: CommandOptions = {}
        groups: GroupSlots = {}

        keywords = self._keywords_for(command)
        for keyword in keywords:
            if keyword.group is None and _is_true(normalized.get(keyword.name.lower())):
                self._record_strict(keyword, True, permission, options, groups)

        for group_name in dict.fromkeys(keyword.group for keyword in keywords if keyword.group):
            members = [keyword for keyword in keywords if keyword.group == group_name]
            chosen = self._select_group_member(group_name, members, normalized)
            if chosen is not None:
                self._record_strict(chosen, True, permission, options, groups)

        patterns = self._patterns_for(command)
        for pattern in patterns:
            if pattern.name == ARG and command.args is not None:
                args = self._parse_command_args(command.args, normalized)
                if args:
                    self._record_strict(pattern, args, permission, options, groups)
                continue

            raw = normalized.get(pattern.name.lower())
            if raw:
                result = pattern.match(raw, SyntaxType.SLASH)
                if result.matched:
                    self._record_strict(pattern, result.payload, permission, options, groups)
                else:
                    logger.debug("Ignoring unparseable value for %s", pattern.name)

        # Shared options such as `range` or `input` are scanned once each.
        for option_name in dict.fromkeys(pattern.slash_option for pattern in patterns if pattern.slash_option):
            if normalized.get(option_name):
                self._scan_pattern_group(option_name, normalized[option_name], permission, patterns, options, groups)

        self._check_exclusive(command, options)
        logger.debug("Resolved '%s' structured options: %s", command.name, sorted(options))
        return options

    @staticmethod
    def _normalize_values(values: Mapping[str, Any]) -> Dict[str, str]:
        normalized: Dict[str, str] = {}
        for key, value in (values or {}).items():
            if value is None:
                continue
            normalized[str(key).strip().lower()] = str(value).strip()
        return normalized

    def _select_group_member(
        self,
        group_name: str,
        members: Sequence[Keyword],
        values: Mapping[str, str],
    ) -> Optional[Keyword]:
        """Pick the keyword chosen for ``group_name``; more than one is a conflict."""

        selected: List[str] = []
        raw = values.get(group_name)
        if raw:
            selected.extend(token.upper() for token in _CHOICE_SEPARATOR.split(raw) if token)
        for member in members:
            if _is_true(values.get(member.name.lower())):
                selected.append(member.name)

        unique = list(dict.fromkeys(selected))
        if not unique:
            return None
        if len(unique) > 1:
            raise _reject(
                ConflictingInput(
                    f"You can not specify both `{unique[0].lower()}` & `{unique[1].lower()}`",
                    options=tuple(unique),
                )
            )

        found = self._catalog.lookup(unique[0])
        if not isinstance(found, Keyword) or found not in members:
            raise _reject(InvalidChoice(f"`{unique[0].lower()}` is not a valid choice for `{group_name}`"))
        return found

    def _scan_pattern_group(
        self,
        group_name: str,
        text: str,
        permission: Permission,
        patterns: Sequence[Pattern],
        options: CommandOptions,
        groups: GroupSlots,
    ) -> None:
        """Scan a shared option's text with its members' free-text matchers.

        Leftover text becomes SEARCH when SEARCH shares the option and is still
        free; otherwise it is unrecognized.
        """
        members = [pattern for pattern in patterns if pattern.slash_option == group_name]
        remaining = collapse_whitespace(text)
        for pattern in members:
            result = pattern.match(remaining, SyntaxType.KEYWORD)
            if result.matched:
                remaining = result.remainder
                self._record_strict(pattern, result.payload, permission, options, groups)

        residue = drop_empty_delimiters(remaining).strip()
        if not residue:
            return
        search = next((pattern for pattern in members if pattern.name == SEARCH), None)
        if search is not None and SEARCH not in options and search.permission <= permission:
            self._record_strict(search, residue, permission, options, groups)
            return
        raise _reject(UnrecognizedResidue(residue))

    def _record_strict(
        self,
        directive: Directive,
        payload: Any,
        permission: Permission,
        options: CommandOptions,
        groups: GroupSlots,
    ) -> None:
        if directive.permission > permission:
            logger.debug("Dropped %s: requires %s", directive.name, directive.permission.name)
            return
        if directive.group:
            holder = groups.get(directive.group)
            if holder is not None and holder != directive.name:
                raise _reject(
                    ConflictingInput(
                        f"You can not specify both `{holder.lower()}` & `{directive.name.lower()}`",
                        options=(holder, directive.name),
                    )
                )
            groups[directive.group] = directive.name
        options.setdefault(directive.name, payload)

    @staticmethod
    def _parse_command_args(command_args: CommandArgs, values: Mapping[str, str]) -> List[str]:
        """Resolve positional arguments, one per group, from named option slots."""

        args: List[str] = []
        for group in command_args.groups:
            selected_name: Optional[str] = None
            selected: Optional[str] = None
            for option in group.options:
                value = values.get(option.name)
                if not value:
                    continue
                if selected is not None:
                    raise _reject(
                        ConflictingInput(
                            f"You can not specify both `{selected_name}` & `{option.name}`",
                            options=(selected_name, option.name),
                        )
                    )
                if option.choices and value.lower() not in {choice.lower() for choice in option.choices}:
                    raise _reject(
                        InvalidChoice(
                            f"`{value}` is not a valid choice for `{option.name}`. "
                            f"Try one of: {', '.join(option.choices)}"
                        )
                    )
                selected_name = option.name
                selected = value
            if selected is not None:
                args.append(selected)
            elif group.required:
                names = " or ".join(f"`{option.name}`" for option in group.options)
                raise _reject(MissingArgument(f"You must provide {names}"))
        return args

    # ------------------------------------------------------------------
    # Shared helpers
    # ------------------------------------------------------------------
    @staticmethod
    def _simple_options(text: str) -> CommandOptions:
        tokens = (text or "").split()
        return {ARG: tokens} if tokens else {}

    @staticmethod
    def _check_exclusive(command: CommandDescriptor, options: CommandOptions) -> None:
        for first, second in command.exclusive:
            if first in options and second in options:
                raise _reject(
                    ConflictingInput(
                        f"You specified both {first} and {second}! Please try again with only one of those.",
                        options=(first, second),
                    )
                )

    def _keywords_for(self, command: CommandDescriptor) -> List[Keyword]:
        keywords: List[Keyword] = []
        for name in command.keywords:
            keyword = self._catalog.keyword(name)
            if keyword is None:
                logger.warning("Command '%s' declares unknown keyword %s", command.name, name)
                continue
            keywords.append(keyword)
        return keywords

    def _patterns_for(self, command: CommandDescriptor) -> List[Pattern]:
        """Declared patterns, highest priority first."""

        declared = set(command.patterns)
        for name in declared:
            if self._catalog.pattern(name) is None:
                logger.warning("Command '%s' declares unknown pattern %s", command.name, name)
        return [pattern for pattern in self._catalog.all_patterns() if pattern.name in declared]


__all__ = ["ARG", "DirectiveResolver", "SEARCH", "SIMPLE_ARGS_KEY"]
