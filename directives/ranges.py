"""Range normalization for TOP/BOTTOM style directives."""

from __future__ import annotations

from typing import List, Mapping, Optional, Sequence, TypeVar

from directives.types import AbsoluteRange, RangeArgument

T = TypeVar("T")


def normalize_range(range_arg: RangeArgument, length: int, reversed: bool = False) -> AbsoluteRange:
    """Convert a user range into absolute 0-based slice bounds over ``length`` items.

    With a ``stop``, both ends are 1-based, clamped into the list and a
    negative ``stop`` counts back from the end; ``reversed`` mirrors both ends.
    Without a ``stop`` the range means "first N" (or "last N" when reversed);
    the forward "first N" is deliberately left unclamped, so slicing is the
    consumer's bound. A ``stop`` of 0 counts as absent. With a ``stop`` and an
    empty list (``length == 0``) the bounds come out as ``(-1, -1)``, which
    still slices to an empty list.
    """
    start = 0
    stop = length

    if range_arg.stop:
        start = min(length - 1, max(1, range_arg.start) - 1)
        if range_arg.stop < 0:
            stop = length + range_arg.stop + 1
        else:
            stop = min(length - 1, max(1, range_arg.stop) - 1)
        if reversed:
            start = length - start
            stop = length - stop
    elif reversed:
        start = length - min(length, max(1, range_arg.start))
    else:
        stop = range_arg.start

    return AbsoluteRange(start=min(start, stop), stop=max(start, stop))


def apply_range_to_list(range_arg: RangeArgument, items: Sequence[T], reversed: bool = False) -> List[T]:
    bounds = normalize_range(range_arg, len(items), reversed)
    return list(items[bounds.start : bounds.stop])


def get_range_option(options: Mapping[str, object], total: int) -> Optional[AbsoluteRange]:
    """Return the absolute range selected by TOP (forward) or BOTTOM (reversed)."""

    top = options.get("TOP")
    if isinstance(top, RangeArgument):
        return normalize_range(top, total)
    bottom = options.get("BOTTOM")
    if isinstance(bottom, RangeArgument):
        return normalize_range(bottom, total, reversed=True)
    return None


def truthy_sum(*values: object) -> int:
    """Count how many of ``values`` are truthy."""

    return sum(1 for value in values if value)


__all__ = ["apply_range_to_list", "get_range_option", "normalize_range", "truthy_sum"]
