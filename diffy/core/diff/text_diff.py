"""
Text diff engine.

Runs the comparison pipeline for two documents:
- Line splitting
- Line-level LCS diff with modified-line pairing
- Side-by-side alignment with imaginary placeholder rows
- Intraline (character or word) segments for modified rows
- Aggregation of change counts

The engine is synchronous, keeps no state between calls and performs
no I/O. Callers that need responsiveness run it on a worker thread.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Optional, Sequence

from diffy.core.diff.aligner import align
from diffy.core.diff.line_diff import diff_lines
from diffy.core.diff.segment_diff import (
    SegmentGranularity,
    diff_segments,
    whole_line_segments,
)
from diffy.core.diff.splitter import split_lines
from diffy.core.models import ChangeKind, ComparisonResult, Row, Segment


logger = logging.getLogger(__name__)


@dataclass
class TextCompareOptions:
    """Options for text comparison."""
    granularity: SegmentGranularity = SegmentGranularity.CHARACTER
    word_fallback_length: int = 1000  # Longer lines use word tokens; 0 disables
    compute_segments: bool = True

    def granularity_for(self, old_line: str, new_line: str) -> SegmentGranularity:
        """Pick the intraline granularity for one line pair."""
        if (self.granularity == SegmentGranularity.CHARACTER
                and self.word_fallback_length > 0
                and max(len(old_line), len(new_line)) > self.word_fallback_length):
            return SegmentGranularity.WORD
        return self.granularity


class TextDiffEngine:
    """
    Engine for comparing two text documents side by side.

    Usage:
        engine = TextDiffEngine()
        result = engine.compare(left_text, right_text)
        for left_row, right_row in result.rows():
            ...
    """

    def __init__(self, options: Optional[TextCompareOptions] = None):
        self.options = options or TextCompareOptions()

    def compare(
        self,
        left_text: Optional[str],
        right_text: Optional[str]
    ) -> ComparisonResult:
        """
        Compare two documents.

        Args:
            left_text: The left/original document (None is empty)
            right_text: The right/modified document (None is empty)

        Returns:
            ComparisonResult with aligned rows and change counts
        """
        return self.compare_lines(split_lines(left_text), split_lines(right_text))

    def compare_lines(
        self,
        left_lines: Sequence[str],
        right_lines: Sequence[str]
    ) -> ComparisonResult:
        """Compare two documents that are already split into lines."""
        script = diff_lines(left_lines, right_lines)
        left_rows, right_rows = align(
            script, left_lines, right_lines, self.compute_segments
        )
        result = aggregate(left_rows, right_rows)

        logger.debug(
            "Compared %d/%d lines into %d rows (%d changes)",
            len(left_lines), len(right_lines), result.row_count, result.total_changes
        )
        return result

    def compute_segments(
        self,
        old_line: str,
        new_line: str
    ) -> tuple[tuple[Segment, ...], tuple[Segment, ...]]:
        """
        Compute the intraline segments of a modified line pair.

        Returns:
            Tuple of (left_segments, right_segments)
        """
        if not self.options.compute_segments:
            return whole_line_segments(old_line, new_line)

        return diff_segments(
            old_line,
            new_line,
            self.options.granularity_for(old_line, new_line)
        )


def aggregate(
    left_rows: Sequence[Row],
    right_rows: Sequence[Row]
) -> ComparisonResult:
    """
    Tally change counts over aligned rows.

    Insertions are counted on the right side, deletions on the left;
    modified and unchanged rows appear on both sides and are counted
    once per pair. Both sequences are scanned in full, so trailing
    insertions past the end of the left document are included.
    """
    inserted = deleted = modified = unchanged = 0

    for left, right in zip(left_rows, right_rows):
        if right.kind == ChangeKind.INSERTED:
            inserted += 1

        if left.kind == ChangeKind.DELETED:
            deleted += 1
        elif left.kind == ChangeKind.MODIFIED:
            modified += 1
        elif left.kind == ChangeKind.UNCHANGED:
            unchanged += 1

    return ComparisonResult(
        left_rows=tuple(left_rows),
        right_rows=tuple(right_rows),
        inserted_count=inserted,
        deleted_count=deleted,
        modified_count=modified,
        unchanged_count=unchanged,
    )


def compare(
    left_text: Optional[str],
    right_text: Optional[str],
    options: Optional[TextCompareOptions] = None
) -> ComparisonResult:
    """Compare two documents with a fresh engine."""
    return TextDiffEngine(options).compare(left_text, right_text)
