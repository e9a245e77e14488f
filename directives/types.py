"""Shared enums and dataclasses for directive parsing."""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, IntEnum
from typing import Any, Dict, Generic, Optional, TypeVar, Union

T = TypeVar("T")


class Permission(IntEnum):
    """Caller privilege levels, ordered so that ``required <= caller`` gates access."""

    USER = 0
    ADMIN = 1
    OWNER = 2

    @classmethod
    def parse(cls, value: Union["Permission", int, str]) -> "Permission":
        """Accept an enum member, its integer value, or its name in any case."""

        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError as exc:
                raise ValueError(f"Unknown permission '{value}'") from exc
        return cls(int(value))


class SyntaxType(IntEnum):
    KEYWORD = 0
    TRADITIONAL = 1
    SLASH = 2

    @classmethod
    def parse(cls, value: Union["SyntaxType", int, str]) -> "SyntaxType":
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError as exc:
                raise ValueError(f"Unknown syntax type '{value}'") from exc
        return cls(int(value))


class Source(str, Enum):
    SPOTIFY = "spotify"
    SOUNDCLOUD = "soundcloud"
    YOUTUBE = "youtube"
    UNKNOWN = "unknown"


@dataclass(frozen=True)
class RangeArgument:
    """1-based range as typed by the user; a negative ``stop`` counts from the end."""

    start: int
    stop: Optional[int] = None


@dataclass(frozen=True)
class AbsoluteRange:
    """0-based half-open slice bounds with ``start <= stop``."""

    start: int
    stop: int


@dataclass(frozen=True)
class UrlArgument:
    value: str
    source: Source


@dataclass(frozen=True)
class MatchResult(Generic[T]):
    """Outcome of a single matcher call.

    ``remainder`` is the input with every matched span removed; ``position`` is
    the offset of the first match in the input, or -1 when nothing matched.
    """

    matched: bool
    remainder: str
    payload: Optional[T] = None
    position: int = -1

    @classmethod
    def miss(cls, text: str) -> "MatchResult[T]":
        return cls(matched=False, remainder=text)


# Sparse mapping of directive name -> typed value.
CommandOptions = Dict[str, Any]


__all__ = [
    "AbsoluteRange",
    "CommandOptions",
    "MatchResult",
    "Permission",
    "RangeArgument",
    "Source",
    "SyntaxType",
    "UrlArgument",
]
