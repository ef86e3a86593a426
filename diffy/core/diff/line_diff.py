"""
Line-level differ.

Turns two line sequences into an edit script of KEEP, DELETE, INSERT
and REPLACE entries. Lines outside the longest common subsequence are
the deletions and insertions; inside each change region (the lines
between two kept lines) deletions are listed before insertions, and
the overlapping prefix of the two runs is paired positionally into
REPLACE entries:

    old: a b c d      region old=[b c], new=[x y z]
    new: a x y z d    -> REPLACE(b,x) REPLACE(c,y) INSERT(z)

The pairing is what later produces "modified" rows with inline
highlighting.
"""

from __future__ import annotations

import logging
from typing import Sequence

from diffy.core.diff.lcs import common_subsequence
from diffy.core.models import EditOp


logger = logging.getLogger(__name__)


def diff_lines(old_lines: Sequence[str], new_lines: Sequence[str]) -> list[EditOp]:
    """
    Compute the edit script transforming `old_lines` into `new_lines`.

    Lines are compared by exact text equality.
    """
    old_lines = list(old_lines)
    new_lines = list(new_lines)
    matches = common_subsequence(old_lines, new_lines)

    script: list[EditOp] = []
    regions = 0
    old_pos = 0
    new_pos = 0

    # Sentinel closes the trailing region
    for old_index, new_index in matches + [(len(old_lines), len(new_lines))]:
        if old_index > old_pos or new_index > new_pos:
            regions += 1
            script.extend(_pair_region(old_pos, old_index, new_pos, new_index))
        if old_index < len(old_lines):
            script.append(EditOp.keep(old_index, new_index))
        old_pos = old_index + 1
        new_pos = new_index + 1

    logger.debug(
        "Line diff: %d old, %d new, %d kept, %d change regions",
        len(old_lines), len(new_lines), len(matches), regions
    )
    return script


def _pair_region(
    old_start: int,
    old_end: int,
    new_start: int,
    new_end: int
) -> list[EditOp]:
    """Pair a change region into REPLACE entries plus the unpaired remainder."""
    paired = min(old_end - old_start, new_end - new_start)

    ops = [
        EditOp.replace(old_start + k, new_start + k)
        for k in range(paired)
    ]
    ops.extend(EditOp.delete(i) for i in range(old_start + paired, old_end))
    ops.extend(EditOp.insert(j) for j in range(new_start + paired, new_end))
    return ops
