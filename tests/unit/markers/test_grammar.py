"""Unit tests for the marker grammar.

Tests for locating trailing-line markers and fenced regions and for
rewriting them with the comment, erase and uncomment replacers.
"""

import pytest

from stardestroyer.markers.grammar import (
    MarkerKind,
    compile_patterns,
    find_occurrences,
    find_regions,
    is_jsx_file,
    replace_lines,
    rewrite_content,
    split_line,
)
from stardestroyer.markers.replacers import ReplacerKind, comment_line, get_replacer

COMMENT = get_replacer(ReplacerKind.COMMENT)
ERASE = get_replacer(ReplacerKind.ERASE)
UNCOMMENT = get_replacer(ReplacerKind.UNCOMMENT)


class TestTrailingLineMarker:
    """Tests for ``// $$NAME`` at the end of a line."""

    def test_comment_out_line(self) -> None:
        """Commenting wraps the code and keeps the marker."""
        content = "import { Chart } from './chart'; // $$chart\n"

        result = rewrite_content(content, "chart", COMMENT, "index.js")

        assert result == "// import { Chart } from './chart'; // $$chart\n"

    def test_indentation_is_kept(self) -> None:
        """Leading indentation stays in front of the comment."""
        content = "function f() {\n    draw(); // $$chart\n}\n"

        result = rewrite_content(content, "chart", COMMENT, "index.js")

        assert result == "function f() {\n    // draw(); // $$chart\n}\n"

    def test_erase_removes_whole_line(self) -> None:
        """Erasing drops the line together with its terminator."""
        content = "a();\nb(); // $$chart\nc();\n"

        assert rewrite_content(content, "chart", ERASE, "index.js") == "a();\nc();\n"

    def test_uncomment_drops_marker(self) -> None:
        """Uncommenting keeps the code but drops the marker comment."""
        content = "draw(); // $$chart keep this\n"

        assert rewrite_content(content, "chart", UNCOMMENT, "index.js") == "draw();\n"

    def test_comment_then_uncomment_restores_code(self) -> None:
        """Uncommenting a commented line restores the original code."""
        original = "  const chart = new Chart(el);"
        commented = rewrite_content(f"{original} // $$chart\n", "chart", COMMENT, "a.js")

        assert rewrite_content(commented, "chart", UNCOMMENT, "a.js") == f"{original}\n"

    def test_name_is_case_insensitive(self) -> None:
        """Marker names match regardless of case."""
        content = "draw(); // $$CHART\n"

        assert rewrite_content(content, "chart", ERASE, "index.js") == ""

    def test_name_prefix_does_not_match(self) -> None:
        """A block name never matches a longer marker name."""
        content = "a(); // $$charts\nb(); // $$chart-extra\n"

        assert rewrite_content(content, "chart", ERASE, "index.js") == content

    def test_marker_at_end_of_file(self) -> None:
        """A marker on the last line without terminator is matched."""
        content = "a();\nb(); // $$chart"

        assert rewrite_content(content, "chart", COMMENT, "index.js") == "a();\n// b(); // $$chart"

    def test_crlf_line_endings_preserved(self) -> None:
        """Windows line terminators are kept as they are."""
        content = "a(); // $$chart\r\nb();\r\n"

        result = rewrite_content(content, "chart", COMMENT, "index.js")

        assert result == "// a(); // $$chart\r\nb();\r\n"

    def test_marker_alone_on_line_is_not_trailing(self) -> None:
        """A line holding only a marker has no code to rewrite."""
        content = "a();\n    // $$chart\nb();\n"

        assert rewrite_content(content, "chart", COMMENT, "index.js") == content

    def test_other_block_untouched(self) -> None:
        """Markers of other blocks are left alone."""
        content = "a(); // $$analytics\n"

        assert rewrite_content(content, "chart", COMMENT, "index.js") == content


class TestJsxTrailingMarker:
    """Tests for ``{/* $$NAME */}`` at the end of a JSX line."""

    def test_comment_out_jsx_line(self) -> None:
        """JSX lines are wrapped in a JSX comment."""
        content = "    <Chart data={data} /> {/* $$chart */}\n"

        result = rewrite_content(content, "chart", COMMENT, "App.jsx")

        assert result == "    {/* <Chart data={data} /> */} {/* $$chart */}\n"

    def test_block_close_inside_subject_is_escaped(self) -> None:
        """A closing ``*/`` in the code cannot end the wrapper early."""
        content = "<a>{/* note */}</a> {/* $$chart */}\n"

        result = rewrite_content(content, "chart", COMMENT, "App.jsx")

        assert result == "{/* <a>{/* note *!/}</a> */} {/* $$chart */}\n"

    def test_jsx_marker_ignored_outside_jsx_files(self) -> None:
        """JSX trailing markers only apply to .jsx files."""
        content = "<Chart /> {/* $$chart */}\n"

        assert rewrite_content(content, "chart", ERASE, "index.js") == content

    def test_erase_jsx_line(self) -> None:
        """Erasing drops the JSX line."""
        content = "<main>\n  <Chart /> {/* $$chart */}\n</main>\n"

        assert rewrite_content(content, "chart", ERASE, "App.jsx") == "<main>\n</main>\n"

    def test_uncomment_commented_jsx_line(self) -> None:
        """Uncommenting restores escaped JSX code."""
        content = "{/* <a>{/* note *!/}</a> */} {/* $$chart */}\n"

        result = rewrite_content(content, "chart", UNCOMMENT, "App.jsx")

        assert result == "<a>{/* note */}</a>\n"


class TestFencedRegions:
    """Tests for regions delimited by start and end markers."""

    @pytest.fixture
    def line_region(self) -> str:
        """Region fenced with ``//`` markers."""
        return (
            "export function App() {\n"
            "  // $$chart BEGIN\n"
            "  const data = loadData();\n"
            "\n"
            "  render(data);\n"
            "  // $$chart END\n"
            "  return null;\n"
            "}\n"
        )

    def test_comment_region_lines(self, line_region: str) -> None:
        """Each non-blank interior line is commented, markers are kept."""
        result = rewrite_content(line_region, "chart", COMMENT, "index.js")

        assert result == (
            "export function App() {\n"
            "  // $$chart BEGIN\n"
            "  // const data = loadData();\n"
            "\n"
            "  // render(data);\n"
            "  // $$chart END\n"
            "  return null;\n"
            "}\n"
        )

    def test_erase_region_leaves_no_blank_lines(self, line_region: str) -> None:
        """Erasing drops the markers and their lines entirely."""
        result = rewrite_content(line_region, "chart", ERASE, "index.js")

        assert result == "export function App() {\n  return null;\n}\n"

    def test_uncomment_region_keeps_interior(self, line_region: str) -> None:
        """Uncommenting keeps the code and drops only the marker lines."""
        result = rewrite_content(line_region, "chart", UNCOMMENT, "index.js")

        assert result == (
            "export function App() {\n"
            "  const data = loadData();\n"
            "\n"
            "  render(data);\n"
            "  return null;\n"
            "}\n"
        )

    def test_comment_keeps_space_before_shared_end_marker(self) -> None:
        """Code sharing a line with the end marker keeps its spacing."""
        content = "// $$b BEGIN\nfoo();\n}  // $$b END\nbar();\n"

        result = rewrite_content(content, "b", COMMENT, "index.js")

        assert result == "// $$b BEGIN\n// foo();\n// }  // $$b END\nbar();\n"

    def test_uncomment_drops_space_before_shared_end_marker(self) -> None:
        """No trailing whitespace is left where the end marker was."""
        content = "// $$b BEGIN\nfoo();\n}  // $$b END\nbar();\n"

        result = rewrite_content(content, "b", UNCOMMENT, "index.js")

        assert result == "foo();\n}\nbar();\n"

    def test_block_comment_region(self) -> None:
        """``/* $$NAME */`` and ``/* $$NAME END */`` fence a region."""
        content = (
            "body { margin: 0; }\n"
            "/* $$chart */\n"
            ".chart { width: 100%; }\n"
            "/* $$chart END */\n"
        )

        assert rewrite_content(content, "chart", ERASE, "styles.css") == "body { margin: 0; }\n"

    def test_jsx_region_uses_jsx_comments(self) -> None:
        """Interior lines of a JSX region in a JSX file get JSX comments."""
        content = (
            "  {/* $$analytics BEGIN */}\n"
            '  <Tracker id="main" />\n'
            "  {/* $$analytics END */}\n"
        )

        result = rewrite_content(content, "analytics", COMMENT, "App.jsx")

        assert result == (
            "  {/* $$analytics BEGIN */}\n"
            '  {/* <Tracker id="main" /> */}\n'
            "  {/* $$analytics END */}\n"
        )

    def test_end_marker_tolerates_trailing_text(self) -> None:
        """Text after END inside the end marker is accepted."""
        content = "// $$chart BEGIN\na();\n// $$chart END of charts\nb();\n"

        assert rewrite_content(content, "chart", ERASE, "index.js") == "b();\n"

    def test_sequential_regions_match_independently(self) -> None:
        """Two regions of the same block are handled one after another."""
        content = (
            "// $$chart BEGIN\n"
            "a();\n"
            "// $$chart END\n"
            "keep();\n"
            "// $$chart BEGIN\n"
            "b();\n"
            "// $$chart END\n"
        )

        assert rewrite_content(content, "chart", ERASE, "index.js") == "keep();\n"
        assert len(find_regions(content, compile_patterns("chart"))) == 2

    def test_stray_start_marker_matches_nothing(self) -> None:
        """A start marker without an end marker leaves the file unchanged."""
        content = "// $$chart BEGIN\na();\nb();\n"

        assert rewrite_content(content, "chart", ERASE, "index.js") == content

    def test_stray_start_before_region_is_skipped(self) -> None:
        """A start marker pairs with an end only if no other start lies between."""
        content = (
            "// $$chart BEGIN\n"
            "stray();\n"
            "// $$chart BEGIN\n"
            "b();\n"
            "// $$chart END\n"
        )

        result = rewrite_content(content, "chart", ERASE, "index.js")

        assert result == "// $$chart BEGIN\nstray();\n"

    def test_inline_region(self) -> None:
        """Markers sharing a line with code only remove the region itself."""
        content = "const x = /* $$chart */ chart() /* $$chart END */ || null;\n"

        assert rewrite_content(content, "chart", ERASE, "index.js") == "const x =  || null;\n"


class TestFindOccurrences:
    """Tests for find_occurrences()."""

    def test_lists_all_kinds_in_order(self) -> None:
        """Trailing markers and regions are listed by position."""
        content = (
            "import c from 'c'; // $$chart\n"
            "/* $$chart */\n"
            ".chart {}\n"
            "/* $$chart END */\n"
            "<Chart /> {/* $$chart */}\n"
        )

        occurrences = find_occurrences(content, "chart", "App.jsx")

        assert [o.kind for o in occurrences] == [
            MarkerKind.TRAILING_LINE,
            MarkerKind.FENCED_BLOCK,
            MarkerKind.TRAILING_LINE,
        ]

    def test_no_occurrences(self) -> None:
        """Content without markers yields nothing."""
        assert find_occurrences("a();\n", "chart", "index.js") == []

    def test_jsx_region_kind(self) -> None:
        """Regions opened by a JSX marker are JSX fenced blocks."""
        content = "{/* $$chart BEGIN */}\n<Chart />\n{/* $$chart END */}\n"

        occurrences = find_occurrences(content, "chart", "App.jsx")

        assert [o.kind for o in occurrences] == [MarkerKind.JSX_FENCED_BLOCK]


class TestLineHelpers:
    """Tests for split_line(), replace_lines() and is_jsx_file()."""

    def test_split_line(self) -> None:
        """Lines split into indentation, subject and terminator."""
        assert split_line("\t  code();  \r\n") == ("\t  ", "code();", "\r\n")
        assert split_line("code();") == ("", "code();", "")

    def test_split_line_keeps_space_of_unterminated_segment(self) -> None:
        """Trailing whitespace of a segment without terminator is the suffix."""
        assert split_line("  }  ") == ("  ", "}", "  ")

    def test_replace_lines_keeps_blank_lines(self) -> None:
        """Blank lines are not passed to the replacer."""
        assert replace_lines("a();\n\n  \nb();", comment_line) == "// a();\n\n  \n// b();"

    def test_is_jsx_file(self) -> None:
        """Only the .jsx extension marks JSX files."""
        assert is_jsx_file("App.jsx")
        assert is_jsx_file("APP.JSX")
        assert not is_jsx_file("App.js")
