"""Marker grammar and replacers for block occurrences in source files."""

from stardestroyer.markers.grammar import (
    MarkerKind,
    MarkerOccurrence,
    find_occurrences,
    is_jsx_file,
    rewrite_content,
)
from stardestroyer.markers.replacers import Replacer, ReplacerKind, get_replacer

__all__ = [
    "MarkerKind",
    "MarkerOccurrence",
    "Replacer",
    "ReplacerKind",
    "find_occurrences",
    "get_replacer",
    "is_jsx_file",
    "rewrite_content",
]
