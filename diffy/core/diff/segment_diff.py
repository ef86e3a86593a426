"""
Segment differ for modified line pairs.

Runs a second LCS pass inside a pair of lines and returns the typed
segments for each side. Character granularity is the default; word
granularity splits lines into runs of whitespace and non-whitespace
so that segments still concatenate back to the exact line text.
"""

from __future__ import annotations

import re
from enum import Enum, auto
from typing import Sequence

from diffy.core.diff.lcs import common_subsequence
from diffy.core.models import ChangeKind, Segment


_TOKEN_PATTERN = re.compile(r'(\s+|\S+)')


class SegmentGranularity(Enum):
    """Token size used for intraline comparison."""
    CHARACTER = auto()
    WORD = auto()


def tokenize(text: str, granularity: SegmentGranularity) -> list[str]:
    """Split a line into tokens for the given granularity."""
    if granularity == SegmentGranularity.WORD:
        return _TOKEN_PATTERN.findall(text)
    return list(text)


def diff_segments(
    old_line: str,
    new_line: str,
    granularity: SegmentGranularity = SegmentGranularity.CHARACTER
) -> tuple[tuple[Segment, ...], tuple[Segment, ...]]:
    """
    Compute intraline segments for a modified line pair.

    Returns:
        Tuple of (left_segments, right_segments). Left segments are
        UNCHANGED or DELETED, right segments UNCHANGED or INSERTED.
        An empty line yields no segments.
    """
    old_tokens = tokenize(old_line, granularity)
    new_tokens = tokenize(new_line, granularity)

    matches = common_subsequence(old_tokens, new_tokens)
    old_matched = {i for i, _ in matches}
    new_matched = {j for _, j in matches}

    left = _coalesce(old_tokens, old_matched, ChangeKind.DELETED)
    right = _coalesce(new_tokens, new_matched, ChangeKind.INSERTED)
    return left, right


def whole_line_segments(old_line: str, new_line: str) -> tuple[tuple[Segment, ...], tuple[Segment, ...]]:
    """Segments marking both lines as changed in full."""
    left = (Segment(old_line, ChangeKind.DELETED),) if old_line else ()
    right = (Segment(new_line, ChangeKind.INSERTED),) if new_line else ()
    return left, right


def _coalesce(
    tokens: Sequence[str],
    matched: set[int],
    changed_kind: ChangeKind
) -> tuple[Segment, ...]:
    """Merge adjacent tokens of the same kind into segments."""
    segments: list[Segment] = []
    run: list[str] = []
    run_kind = None

    for index, token in enumerate(tokens):
        kind = ChangeKind.UNCHANGED if index in matched else changed_kind
        if kind != run_kind and run:
            segments.append(Segment(''.join(run), run_kind))
            run = []
        run_kind = kind
        run.append(token)

    if run:
        segments.append(Segment(''.join(run), run_kind))

    return tuple(segments)
