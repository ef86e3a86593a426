"""
Diffy - side-by-side text comparison.

Compares two documents line by line, aligns them for side-by-side
display and highlights character-level changes in modified lines.
"""

from diffy.core.diff import compare, TextCompareOptions, TextDiffEngine
from diffy.core.models import ChangeKind, ComparisonResult, Row, Segment

__version__ = "1.0.0"

__all__ = [
    'compare',
    'TextCompareOptions',
    'TextDiffEngine',
    'ChangeKind',
    'ComparisonResult',
    'Row',
    'Segment',
]
