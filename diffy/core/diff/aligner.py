"""
Aligner: converts an edit script into two index-aligned row sequences.
"""

from __future__ import annotations

from typing import Callable, Sequence

from diffy.core.models import ChangeKind, EditKind, EditOp, Row, Segment


SegmentFunc = Callable[[str, str], tuple[tuple[Segment, ...], tuple[Segment, ...]]]


def align(
    script: Sequence[EditOp],
    old_lines: Sequence[str],
    new_lines: Sequence[str],
    segment_func: SegmentFunc
) -> tuple[tuple[Row, ...], tuple[Row, ...]]:
    """
    Build left/right rows following the edit script order.

    KEEP and REPLACE emit a real row on each side; DELETE pads the
    right side and INSERT pads the left side with an imaginary row.
    Line numbers count real rows only, independently per side.

    Args:
        script: Edit script from the line differ
        old_lines: Lines of the left/old document
        new_lines: Lines of the right/new document
        segment_func: Called with (old_line, new_line) for every
            REPLACE entry to produce the intraline segments

    Returns:
        Tuple of (left_rows, right_rows) of equal length
    """
    left: list[Row] = []
    right: list[Row] = []
    left_num = 1
    right_num = 1

    for op in script:
        if op.kind == EditKind.KEEP:
            text = old_lines[op.old_index]
            left.append(Row(left_num, text, ChangeKind.UNCHANGED))
            right.append(Row(right_num, new_lines[op.new_index], ChangeKind.UNCHANGED))
            left_num += 1
            right_num += 1

        elif op.kind == EditKind.REPLACE:
            old_text = old_lines[op.old_index]
            new_text = new_lines[op.new_index]
            left_segments, right_segments = segment_func(old_text, new_text)
            left.append(Row(left_num, old_text, ChangeKind.MODIFIED, left_segments))
            right.append(Row(right_num, new_text, ChangeKind.MODIFIED, right_segments))
            left_num += 1
            right_num += 1

        elif op.kind == EditKind.DELETE:
            left.append(Row(left_num, old_lines[op.old_index], ChangeKind.DELETED))
            right.append(Row.imaginary())
            left_num += 1

        elif op.kind == EditKind.INSERT:
            left.append(Row.imaginary())
            right.append(Row(right_num, new_lines[op.new_index], ChangeKind.INSERTED))
            right_num += 1

    return tuple(left), tuple(right)
