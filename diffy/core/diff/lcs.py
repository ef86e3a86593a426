"""
Longest common subsequence in linear space.

Implements Myers' O(ND) difference algorithm with the "middle snake"
divide-and-conquer refinement, so memory stays proportional to the
input length instead of the edit distance squared. Used by both the
line differ (sequences of lines) and the segment differ (sequences of
characters or word tokens).

Tokens that occur on only one side can never be matched, so they are
removed before the search. The edit distance D then only counts
reordered or duplicated common tokens, which keeps heavily rewritten
documents close to linear time.
"""

from __future__ import annotations

from typing import Hashable, Optional, Sequence


def common_subsequence(
    a: Sequence[Hashable],
    b: Sequence[Hashable]
) -> list[tuple[int, int]]:
    """
    Find a longest common subsequence of `a` and `b`.

    Returns the matched index pairs (i, j) with a[i] == b[j], in
    ascending order. The matching is computed with the smaller of
    the two sequences (by ordinary comparison) as the left operand
    and transposed otherwise, so swapping the arguments always yields
    the exact transpose.

    Among equally long subsequences the choice follows that canonical
    orientation: duplicates pair with their earliest counterpart in
    the canonical left operand, which is not necessarily `a`. For
    example ["a", "b"] against ["b", "a"] is solved as
    (["b", "a"], ["a", "b"]), so which line survives depends on the
    content rather than on which argument came first.
    """
    a, b = list(a), list(b)
    if b < a:
        return [(i, j) for j, i in _match_shared(b, a)]
    return _match_shared(a, b)


def _match_shared(
    a: list[Hashable],
    b: list[Hashable]
) -> list[tuple[int, int]]:
    """Run the matcher on the tokens common to both sides only."""
    shared = set(a).intersection(b)
    if not shared:
        return []

    a_index = [i for i, item in enumerate(a) if item in shared]
    b_index = [j for j, item in enumerate(b) if item in shared]

    pairs = _MyersMatcher(
        [a[i] for i in a_index],
        [b[j] for j in b_index],
    ).run()
    return [(a_index[i], b_index[j]) for i, j in pairs]


class _MyersMatcher:
    """Recursive middle-snake matcher over interned sequences."""

    def __init__(self, a: Sequence[Hashable], b: Sequence[Hashable]):
        ids: dict[Hashable, int] = {}
        self.a = [ids.setdefault(item, len(ids)) for item in a]
        self.b = [ids.setdefault(item, len(ids)) for item in b]
        self.pairs: list[tuple[int, int]] = []

    def run(self) -> list[tuple[int, int]]:
        self._walk(0, len(self.a), 0, len(self.b))
        return self.pairs

    def _walk(self, a_lo: int, a_hi: int, b_lo: int, b_hi: int) -> None:
        a, b, pairs = self.a, self.b, self.pairs

        # Common prefix is matched first so leading duplicates
        # pair with their earliest counterpart
        while a_lo < a_hi and b_lo < b_hi and a[a_lo] == b[b_lo]:
            pairs.append((a_lo, b_lo))
            a_lo += 1
            b_lo += 1

        suffix = 0
        while a_lo < a_hi and b_lo < b_hi and a[a_hi - 1] == b[b_hi - 1]:
            a_hi -= 1
            b_hi -= 1
            suffix += 1

        if a_lo < a_hi and b_lo < b_hi:
            split = self._middle_snake(a_lo, a_hi, b_lo, b_hi)
            if split is not None:
                x, y = split
                self._walk(a_lo, x, b_lo, y)
                self._walk(x, a_hi, y, b_hi)

        pairs.extend((a_hi + k, b_hi + k) for k in range(suffix))

    def _middle_snake(
        self,
        a_lo: int,
        a_hi: int,
        b_lo: int,
        b_hi: int
    ) -> Optional[tuple[int, int]]:
        """
        Find the point where the forward and reverse D-paths overlap.

        Returns the absolute split point, or None when the two ranges
        have nothing in common.
        """
        a, b = self.a, self.b
        n = a_hi - a_lo
        m = b_hi - b_lo
        delta = n - m
        max_d = (n + m + 1) // 2
        offset = max_d
        v_length = 2 * max_d + 2
        forward = [-1] * v_length
        reverse = [-1] * v_length
        forward[offset + 1] = 0
        reverse[offset + 1] = 0

        # Odd delta: overlap is detected on the forward pass
        front = delta % 2 != 0

        # Trim diagonals that ran off the edge of the grid
        k1_start = k1_end = k2_start = k2_end = 0

        for d in range(max_d):
            for k1 in range(-d + k1_start, d + 1 - k1_end, 2):
                k1_offset = offset + k1
                if k1 == -d or (k1 != d and forward[k1_offset - 1] < forward[k1_offset + 1]):
                    x1 = forward[k1_offset + 1]
                else:
                    x1 = forward[k1_offset - 1] + 1
                y1 = x1 - k1
                while x1 < n and y1 < m and a[a_lo + x1] == b[b_lo + y1]:
                    x1 += 1
                    y1 += 1
                forward[k1_offset] = x1
                if x1 > n:
                    k1_end += 2
                elif y1 > m:
                    k1_start += 2
                elif front:
                    k2_offset = offset + delta - k1
                    if 0 <= k2_offset < v_length and reverse[k2_offset] != -1:
                        if x1 >= n - reverse[k2_offset]:
                            return a_lo + x1, b_lo + y1

            for k2 in range(-d + k2_start, d + 1 - k2_end, 2):
                k2_offset = offset + k2
                if k2 == -d or (k2 != d and reverse[k2_offset - 1] < reverse[k2_offset + 1]):
                    x2 = reverse[k2_offset + 1]
                else:
                    x2 = reverse[k2_offset - 1] + 1
                y2 = x2 - k2
                while x2 < n and y2 < m and a[a_hi - x2 - 1] == b[b_hi - y2 - 1]:
                    x2 += 1
                    y2 += 1
                reverse[k2_offset] = x2
                if x2 > n:
                    k2_end += 2
                elif y2 > m:
                    k2_start += 2
                elif not front:
                    k1_offset = offset + delta - k2
                    if 0 <= k1_offset < v_length and forward[k1_offset] != -1:
                        x1 = forward[k1_offset]
                        y1 = offset + x1 - k1_offset
                        if x1 >= n - x2:
                            return a_lo + x1, b_lo + y1

        return None
