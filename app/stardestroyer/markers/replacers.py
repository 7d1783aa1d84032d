"""Line and region replacers applied to matched block markers.

A replacer is a small capability record handed to the marker grammar.
The grammar decomposes every matched line into
``(indentation, subject, trailing_comment, line_terminator)`` and asks the
replacer for the new text. Fenced regions are either rewritten line by
line or, when the replacer carries a region function, replaced as a whole.
"""

from collections.abc import Callable
from dataclasses import dataclass
from enum import Enum

LineReplacer = Callable[[str, str, str, str], str]
RegionReplacer = Callable[[str, str, str, str], str]

LINE_COMMENT = "// "
JSX_COMMENT_OPEN = "{/* "
JSX_COMMENT_CLOSE = " */}"

# Closing token inside a JSX comment and its defanged form
_BLOCK_CLOSE = "*/"
_BLOCK_CLOSE_ESCAPED = "*!/"


class ReplacerKind(str, Enum):
    """Transformation applied to block occurrences.

    Attributes:
        COMMENT: Comment out block code, keeping the markers (destroy).
        ERASE: Delete block code together with its markers (clean, removed block).
        UNCOMMENT: Restore block code and drop its markers (clean, kept block).
    """

    COMMENT = "comment"
    ERASE = "erase"
    UNCOMMENT = "uncomment"


@dataclass(frozen=True, slots=True)
class Replacer:
    """Set of transformations used by the marker grammar.

    Attributes:
        kind: Which transformation this replacer performs.
        line: Replacer for lines in script and style code.
        jsx_line: Replacer for lines inside JSX markup.
        region: Optional whole-region replacer. When set, fenced regions are
            passed to it once instead of being rewritten line by line.
    """

    kind: ReplacerKind
    line: LineReplacer
    jsx_line: LineReplacer
    region: RegionReplacer | None = None


def _suffix(comment: str) -> str:
    return f" {comment}" if comment else ""


def comment_line(indentation: str, subject: str, comment: str, eol: str) -> str:
    """Wrap a line in a ``//`` comment, keeping its marker."""
    return f"{indentation}{LINE_COMMENT}{subject}{_suffix(comment)}{eol}"


def comment_jsx_line(indentation: str, subject: str, comment: str, eol: str) -> str:
    """Wrap a JSX line in ``{/* ... */}``, keeping its marker.

    Any ``*/`` inside the subject would close the wrapper early, so it is
    rewritten to ``*!/``.
    """
    escaped = subject.replace(_BLOCK_CLOSE, _BLOCK_CLOSE_ESCAPED)
    return f"{indentation}{JSX_COMMENT_OPEN}{escaped}{JSX_COMMENT_CLOSE}{_suffix(comment)}{eol}"


def erase_line(indentation: str, subject: str, comment: str, eol: str) -> str:
    """Drop the whole line including its terminator."""
    return ""


def erase_region(full: str, start: str, interior: str, end: str) -> str:
    """Drop a fenced region including both markers."""
    return ""


def uncomment_text(subject: str) -> str:
    """Strip a comment wrapper added by :func:`comment_line` or :func:`comment_jsx_line`.

    Only the exact shapes those functions write are unwrapped. A JSX
    wrapper whose content still holds a bare ``*/`` was not written by
    :func:`comment_jsx_line`, so it is left alone. Anything else is
    returned unchanged.
    """
    wrapper = len(JSX_COMMENT_OPEN) + len(JSX_COMMENT_CLOSE)
    if (
        len(subject) > wrapper
        and subject.startswith(JSX_COMMENT_OPEN)
        and subject.endswith(JSX_COMMENT_CLOSE)
    ):
        inner = subject[len(JSX_COMMENT_OPEN) : -len(JSX_COMMENT_CLOSE)]
        if _BLOCK_CLOSE not in inner:
            return inner.replace(_BLOCK_CLOSE_ESCAPED, _BLOCK_CLOSE)
    if subject.startswith(LINE_COMMENT):
        return subject[len(LINE_COMMENT) :]
    return subject


def uncomment_line(indentation: str, subject: str, comment: str, eol: str) -> str:
    """Restore the original code of a line and drop its marker comment."""
    return f"{indentation}{uncomment_text(subject)}{eol}"


def uncomment_region(full: str, start: str, interior: str, end: str) -> str:
    """Keep the region content and drop both markers.

    When the end marker shares a line with code, the whitespace between
    them is dropped with it.
    """
    if interior.endswith("\n"):
        return interior
    return interior.rstrip(" \t")


_REPLACERS: dict[ReplacerKind, Replacer] = {
    ReplacerKind.COMMENT: Replacer(
        kind=ReplacerKind.COMMENT,
        line=comment_line,
        jsx_line=comment_jsx_line,
    ),
    ReplacerKind.ERASE: Replacer(
        kind=ReplacerKind.ERASE,
        line=erase_line,
        jsx_line=erase_line,
        region=erase_region,
    ),
    ReplacerKind.UNCOMMENT: Replacer(
        kind=ReplacerKind.UNCOMMENT,
        line=uncomment_line,
        jsx_line=uncomment_line,
        region=uncomment_region,
    ),
}


def get_replacer(kind: ReplacerKind) -> Replacer:
    """Return the replacer for a transformation kind.

    Args:
        kind: Transformation to perform.

    Returns:
        Replacer bundling the line, JSX line and region functions.
    """
    return _REPLACERS[kind]
