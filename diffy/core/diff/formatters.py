"""
Text renderings of a comparison result.

- Unified diff export (`-`/`+`/` ` prefixed lines with hunk headers)
- Plain side-by-side columns for terminals and logs
"""

from __future__ import annotations

from typing import Iterator

from diffy.core.models import ChangeKind, ComparisonResult, Row


_LEFT_SIDE = (ChangeKind.DELETED, ChangeKind.MODIFIED)
_RIGHT_SIDE = (ChangeKind.INSERTED, ChangeKind.MODIFIED)


def unified_lines(result: ComparisonResult) -> list[tuple[str, str]]:
    """
    Flatten aligned rows into (prefix, text) pairs.

    Imaginary rows are skipped. Within a run of changed rows all
    removed lines come before the added lines.
    """
    lines: list[tuple[str, str]] = []
    removed: list[str] = []
    added: list[str] = []

    def flush() -> None:
        lines.extend(('-', text) for text in removed)
        lines.extend(('+', text) for text in added)
        removed.clear()
        added.clear()

    for left, right in result.rows():
        if left.kind == ChangeKind.UNCHANGED:
            flush()
            lines.append((' ', left.text))
            continue
        if left.kind in _LEFT_SIDE:
            removed.append(left.text)
        if right.kind in _RIGHT_SIDE:
            added.append(right.text)

    flush()
    return lines


def format_unified(
    result: ComparisonResult,
    left_label: str = "left",
    right_label: str = "right",
    context_lines: int = 3
) -> str:
    """
    Export a result as a unified diff.

    Compatible with the `diff -u` layout. Identical documents produce
    an empty string; a negative `context_lines` keeps the whole
    document in a single hunk.
    """
    if result.is_identical:
        return ""

    lines = unified_lines(result)
    output = [f"--- {left_label}", f"+++ {right_label}"]

    for start, end in _hunk_ranges(lines, context_lines):
        left_before = sum(1 for prefix, _ in lines[:start] if prefix != '+')
        right_before = sum(1 for prefix, _ in lines[:start] if prefix != '-')
        hunk = lines[start:end]
        left_count = sum(1 for prefix, _ in hunk if prefix != '+')
        right_count = sum(1 for prefix, _ in hunk if prefix != '-')

        output.append(
            f"@@ -{_format_range(left_before, left_count)} "
            f"+{_format_range(right_before, right_count)} @@"
        )
        output.extend(prefix + text for prefix, text in hunk)

    return '\n'.join(output) + '\n'


def _hunk_ranges(
    lines: list[tuple[str, str]],
    context_lines: int
) -> list[tuple[int, int]]:
    """Group changed lines with their context into [start, end) ranges."""
    if context_lines < 0:
        return [(0, len(lines))]

    ranges: list[tuple[int, int]] = []
    for index, (prefix, _) in enumerate(lines):
        if prefix == ' ':
            continue
        start = max(0, index - context_lines)
        end = min(len(lines), index + context_lines + 1)
        if ranges and start <= ranges[-1][1]:
            ranges[-1] = (ranges[-1][0], end)
        else:
            ranges.append((start, end))
    return ranges


def _format_range(before: int, count: int) -> str:
    """Format a hunk range the way `diff -u` does."""
    beginning = before + 1
    if count == 1:
        return f"{beginning}"
    if count == 0:
        beginning -= 1
    return f"{beginning},{count}"


class SideBySideFormatter:
    """Format comparison results for side-by-side display."""

    SEPARATORS = {
        ChangeKind.UNCHANGED: "   ",
        ChangeKind.MODIFIED: " | ",
        ChangeKind.DELETED: " < ",
        ChangeKind.IMAGINARY: " > ",
    }

    def __init__(self, width: int = 80, tab_size: int = 4):
        self.width = width
        self.tab_size = tab_size

    def format(self, result: ComparisonResult) -> Iterator[tuple[str, str, str]]:
        """
        Format a result for side-by-side display.

        Yields tuples of (left_line, separator, right_line)
        """
        for left, right in result.rows():
            yield (
                self._format_row(left),
                self.SEPARATORS.get(left.kind, "   "),
                self._format_row(right),
            )

    def render(self, result: ComparisonResult) -> str:
        """Render a result as padded text columns."""
        column = self._column_width()
        return '\n'.join(
            f"{left:<{column}}{sep}{right}".rstrip()
            for left, sep, right in self.format(result)
        )

    def _column_width(self) -> int:
        return max(10, (self.width - 3) // 2)

    def _format_row(self, row: Row) -> str:
        """Format a single row with its line number."""
        if row.is_imaginary:
            return ""

        content = row.text.replace('\t', ' ' * self.tab_size)
        prefix = f"{row.line_number:4d}: "

        max_content = self._column_width() - len(prefix)
        if len(content) > max_content:
            content = content[:max(0, max_content - 3)] + "..."

        return prefix + content
