"""Directive matchers, one module per delimiter class."""

from . import delimited, keywords, numbers, ranges, urls

__all__ = ["delimited", "keywords", "numbers", "ranges", "urls"]
