"""Marker grammar for locating block occurrences in source text.

Three marker kinds are recognised for a block named ``NAME``, always
matching the name case-insensitively:

Trailing-line markers end a line of code::

    import chart from 'chart';  // $$NAME
    <Chart data={data} />  {/* $$NAME */}     (JSX files only)

Fenced regions are delimited by a start and an end marker, each in one of
three styles::

    // $$NAME BEGIN            ...   // $$NAME END
    /* $$NAME */               ...   /* $$NAME END */
    {/* $$NAME BEGIN */}       ...   {/* $$NAME END */}

A start marker pairs with the nearest following end marker provided no
other start marker for the same block lies between them. Sequential
regions are therefore matched independently, a start marker without an
end marker matches nothing, and a block nested inside itself is not
supported.
"""

import re
from collections.abc import Iterator
from dataclasses import dataclass
from enum import Enum

from stardestroyer.markers.replacers import LineReplacer, Replacer

JSX_SUFFIX = ".jsx"


class MarkerKind(str, Enum):
    """Kind of a matched marker occurrence."""

    TRAILING_LINE = "trailing-line"
    FENCED_BLOCK = "fenced-block"
    JSX_FENCED_BLOCK = "jsx-fenced-block"


@dataclass(frozen=True, slots=True)
class MarkerPatterns:
    """Compiled patterns for one block name.

    Attributes:
        trailing: ``// $$NAME`` at the end of a line of code.
        jsx_trailing: ``{/* $$NAME */}`` at the end of a line of markup.
        region: A start marker, the shortest interior free of other start
            markers, and an end marker.
    """

    trailing: re.Pattern[str]
    jsx_trailing: re.Pattern[str]
    region: re.Pattern[str]


@dataclass(frozen=True, slots=True)
class RegionOccurrence:
    """A fenced region found in a file.

    Offsets are expanded to whole lines when a marker sits alone on its
    line, so that removing the region leaves no blank line behind.

    Attributes:
        kind: FENCED_BLOCK or JSX_FENCED_BLOCK, depending on the start marker.
        start: Offset where the start marker (and its indentation) begins.
        interior_start: Offset right after the start marker.
        interior_end: Offset where the end marker (and its indentation) begins.
        end: Offset right after the end marker (and its line terminator).
    """

    kind: MarkerKind
    start: int
    interior_start: int
    interior_end: int
    end: int


@dataclass(frozen=True, slots=True)
class MarkerOccurrence:
    """Position of a single block occurrence."""

    kind: MarkerKind
    start: int
    end: int


_NAME_END = r"(?![\w-])"
_NOT_FENCE = r"(?![ \t]+(?:BEGIN|END)\b)"


def _start_marker(name: str) -> str:
    return (
        rf"\{{/\*[ \t]*\$\${name}(?:[ \t]+BEGIN)?[ \t]*\*/\}}"
        rf"|/\*[ \t]*\$\${name}(?:[ \t]+BEGIN)?[ \t]*\*/"
        rf"|//[ \t]*\$\${name}[ \t]+BEGIN\b[^\n]*"
    )


def _end_marker(name: str) -> str:
    return (
        rf"\{{/\*[ \t]*\$\${name}[ \t]+END\b[^\n]*?\*/\}}"
        rf"|/\*[ \t]*\$\${name}[ \t]+END\b[^\n]*?\*/"
        rf"|//[ \t]*\$\${name}[ \t]+END\b[^\n]*"
    )


def compile_patterns(block_name: str) -> MarkerPatterns:
    """Compile the marker patterns for a block name.

    Args:
        block_name: Name of the block as declared in the config.

    Returns:
        MarkerPatterns for the block.
    """
    name = re.escape(block_name)
    flags = re.IGNORECASE | re.MULTILINE

    trailing = re.compile(
        rf"^(?P<indent>[ \t]*)(?P<subject>\S[^\n]*?)[ \t]*"
        rf"(?P<comment>//[ \t]*\$\${name}{_NAME_END}{_NOT_FENCE}[^\n]*?)[ \t]*"
        rf"(?P<eol>\r?\n|\Z)",
        flags,
    )
    jsx_trailing = re.compile(
        rf"^(?P<indent>[ \t]*)(?P<subject>\S[^\n]*?)[ \t]*"
        rf"(?P<comment>\{{/\*[ \t]*\$\${name}{_NAME_END}{_NOT_FENCE}[^\n]*?\*/\}})[ \t]*"
        rf"(?P<eol>\r?\n|\Z)",
        flags,
    )
    start = _start_marker(name)
    region = re.compile(
        rf"(?P<start>{start})(?P<interior>(?:(?!{start}).)*?)(?P<end>{_end_marker(name)})",
        flags | re.DOTALL,
    )
    return MarkerPatterns(
        trailing=trailing,
        jsx_trailing=jsx_trailing,
        region=region,
    )


def is_jsx_file(filename: str) -> bool:
    """Check whether a file holds JSX markup."""
    return filename.lower().endswith(JSX_SUFFIX)


def _line_start(content: str, offset: int) -> int:
    return content.rfind("\n", 0, offset) + 1


def _line_end(content: str, offset: int) -> int:
    """Offset right after the line terminator of the line containing offset."""
    newline = content.find("\n", offset)
    return len(content) if newline == -1 else newline + 1


def _alone_on_line(content: str, start: int, end: int) -> bool:
    before = content[_line_start(content, start) : start]
    after_end = _line_end(content, end)
    after = content[end:after_end]
    return not before.strip() and not after.strip()


def find_regions(content: str, patterns: MarkerPatterns) -> list[RegionOccurrence]:
    """Find all fenced regions in content.

    Args:
        content: File content.
        patterns: Compiled patterns for the block.

    Returns:
        Non-overlapping regions in file order.
    """
    regions: list[RegionOccurrence] = []
    previous_end = 0
    for match in patterns.region.finditer(content):
        start, interior_start = match.span("start")
        interior_end, end = match.span("end")

        if _alone_on_line(content, start, interior_start):
            start = max(_line_start(content, start), previous_end)
            interior_start = _line_end(content, interior_start)
        if _alone_on_line(content, interior_end, end):
            interior_end = max(_line_start(content, interior_end), interior_start)
            end = _line_end(content, end)

        kind = (
            MarkerKind.JSX_FENCED_BLOCK
            if match.group("start").startswith("{")
            else MarkerKind.FENCED_BLOCK
        )
        regions.append(RegionOccurrence(kind, start, interior_start, interior_end, end))
        previous_end = end
    return regions


def find_occurrences(content: str, block_name: str, filename: str = "") -> list[MarkerOccurrence]:
    """List every marker occurrence of a block without rewriting anything.

    Args:
        content: File content.
        block_name: Block to look for.
        filename: Name of the file, used to detect JSX files.

    Returns:
        Occurrences sorted by their position in the file.
    """
    patterns = compile_patterns(block_name)
    line_patterns = [patterns.trailing]
    if is_jsx_file(filename):
        line_patterns.append(patterns.jsx_trailing)

    occurrences = [
        MarkerOccurrence(MarkerKind.TRAILING_LINE, match.start(), match.end())
        for pattern in line_patterns
        for match in pattern.finditer(content)
    ]
    occurrences.extend(
        MarkerOccurrence(region.kind, region.start, region.end)
        for region in find_regions(content, patterns)
    )
    return sorted(occurrences, key=lambda occurrence: occurrence.start)


def split_line(line: str) -> tuple[str, str, str]:
    """Split a line into indentation, subject text and line suffix.

    The suffix is the line terminator. A segment without one is followed
    by an end marker on the same line, so its trailing whitespace is kept
    in the suffix to stay between the code and that marker.
    """
    if line.endswith("\r\n"):
        eol = "\r\n"
    elif line.endswith("\n"):
        eol = "\n"
    else:
        eol = ""
    body = line[: len(line) - len(eol)]
    subject = body.lstrip(" \t")
    indentation = body[: len(body) - len(subject)]
    stripped = subject.rstrip()
    if not eol:
        eol = subject[len(stripped) :]
    return indentation, stripped, eol


def _iter_lines(text: str) -> Iterator[str]:
    """Yield the lines of text, each with its terminator."""
    segments = text.split("\n")
    for index, segment in enumerate(segments):
        line = segment if index == len(segments) - 1 else segment + "\n"
        if line:
            yield line


def replace_lines(text: str, replace: LineReplacer) -> str:
    """Pass every non-blank line of text through a line replacer.

    Blank and whitespace-only lines are kept as they are.
    """
    parts: list[str] = []
    for line in _iter_lines(text):
        if not line.strip():
            parts.append(line)
            continue
        indentation, subject, eol = split_line(line)
        parts.append(replace(indentation, subject, "", eol))
    return "".join(parts)


def _replace_trailing(content: str, pattern: re.Pattern[str], replace: LineReplacer) -> str:
    def substitute(match: re.Match[str]) -> str:
        return replace(
            match.group("indent"),
            match.group("subject"),
            match.group("comment"),
            match.group("eol"),
        )

    return pattern.sub(substitute, content)


def _replace_regions(
    content: str,
    patterns: MarkerPatterns,
    replacer: Replacer,
    jsx_file: bool,
) -> str:
    regions = find_regions(content, patterns)
    if not regions:
        return content

    parts: list[str] = []
    cursor = 0
    for region in regions:
        parts.append(content[cursor : region.start])
        start_text = content[region.start : region.interior_start]
        interior = content[region.interior_start : region.interior_end]
        end_text = content[region.interior_end : region.end]

        if replacer.region is not None:
            full = content[region.start : region.end]
            parts.append(replacer.region(full, start_text, interior, end_text))
        else:
            use_jsx = jsx_file and region.kind == MarkerKind.JSX_FENCED_BLOCK
            line_replacer = replacer.jsx_line if use_jsx else replacer.line
            parts.append(start_text + replace_lines(interior, line_replacer) + end_text)
        cursor = region.end
    parts.append(content[cursor:])
    return "".join(parts)


def rewrite_content(content: str, block_name: str, replacer: Replacer, filename: str = "") -> str:
    """Rewrite every occurrence of a block in file content.

    Trailing-line markers are handled first, then JSX trailing-line markers
    (JSX files only), then fenced regions.

    Args:
        content: Original file content.
        block_name: Block to look for.
        replacer: Transformation applied to each occurrence.
        filename: Name of the file, used to detect JSX files.

    Returns:
        The new content. Equal to ``content`` when nothing matched.
    """
    patterns = compile_patterns(block_name)
    jsx_file = is_jsx_file(filename)

    result = _replace_trailing(content, patterns.trailing, replacer.line)
    if jsx_file:
        result = _replace_trailing(result, patterns.jsx_trailing, replacer.jsx_line)
    return _replace_regions(result, patterns, replacer, jsx_file)
