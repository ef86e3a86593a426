"""
Diff module for text comparison.

Provides the comparison pipeline:
- Line splitting
- Line-level LCS diff (linear-space Myers)
- Side-by-side alignment
- Intraline (character/word) segments
- Unified and side-by-side text output
"""

from diffy.core.diff.text_diff import (
    TextDiffEngine,
    TextCompareOptions,
    aggregate,
    compare,
)
from diffy.core.diff.segment_diff import (
    SegmentGranularity,
    diff_segments,
)
from diffy.core.diff.line_diff import diff_lines
from diffy.core.diff.aligner import align
from diffy.core.diff.splitter import split_lines
from diffy.core.diff.formatters import (
    SideBySideFormatter,
    format_unified,
)

__all__ = [
    # Engine
    'TextDiffEngine',
    'TextCompareOptions',
    'aggregate',
    'compare',
    # Pipeline stages
    'split_lines',
    'diff_lines',
    'align',
    'diff_segments',
    'SegmentGranularity',
    # Output
    'SideBySideFormatter',
    'format_unified',
]
