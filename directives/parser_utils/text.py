"""Common text-processing helpers shared across matcher modules."""

from __future__ import annotations

import re
from typing import List, Optional, Pattern, Tuple


def collapse_whitespace(text: str) -> str:
    """Return ``text`` with runs of whitespace folded into single spaces."""

    return " ".join((text or "").split())


def token_pattern(tokens: List[str], *, flag_prefix: bool = False) -> Pattern[str]:
    """Compile a case-insensitive, word-boundary-safe alternation of ``tokens``.

    With ``flag_prefix`` the token must be written as a dash flag (``-spotify``)
    that starts a whitespace-separated word.
    """
    alternation = "|".join(re.escape(token) for token in sorted(tokens, key=len, reverse=True))
    if flag_prefix:
        return re.compile(rf"(?<!\S)-(?:{alternation})\b", re.IGNORECASE)
    return re.compile(rf"(?:(?<!\S)-)?\b(?:{alternation})\b", re.IGNORECASE)


def strip_matches(pattern: Pattern[str], text: str) -> Tuple[List[re.Match[str]], str]:
    """Find every match and return them with the stripped text.

    Each span is replaced by a single space before whitespace is collapsed, so
    the words on either side of a removed span never fuse into one token.
    Removing an inner span can join its neighbours into a fresh match (for
    example ``(a (b) c)``), so the remainder is rescanned until nothing
    matches. The first returned match is always from the original ``text``.
    """
    matches = list(pattern.finditer(text))
    if not matches:
        return [], text
    remainder = _remove_spans(text, matches)
    while True:
        more = list(pattern.finditer(remainder))
        if not more:
            break
        stripped = _remove_spans(remainder, more)
        if stripped == remainder:
            break
        matches.extend(more)
        remainder = stripped
    return matches, remainder


def _remove_spans(text: str, matches: List[re.Match[str]]) -> str:
    pieces: List[str] = []
    cursor = 0
    for match in matches:
        pieces.append(text[cursor : match.start()])
        cursor = match.end()
    pieces.append(text[cursor:])
    return collapse_whitespace(" ".join(pieces))


_EMPTY_PAIR = re.compile(r"\(\s*\)|\[\s*\]|\{\s*\}")


def drop_empty_delimiters(text: str) -> str:
    """Remove ``()``, ``[]`` and ``{}`` pairs left empty by stripping."""

    _, remainder = strip_matches(_EMPTY_PAIR, text)
    return remainder


def first_group(match: re.Match[str], name: str) -> Optional[str]:
    value = match.group(name)
    if value is None:
        return None
    value = value.strip()
    return value or None


__all__ = ["collapse_whitespace", "drop_empty_delimiters", "first_group", "strip_matches", "token_pattern"]
