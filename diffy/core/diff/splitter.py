"""
Line splitting for documents entering the diff engine.
"""

from __future__ import annotations

from typing import Optional


def split_lines(text: Optional[str]) -> list[str]:
    """
    Split a document into lines.

    Lines end at '\\n', with an optional '\\r' before it; a lone '\\r'
    is ordinary content. A trailing terminator does not produce an
    empty final line, and an empty (or None) document has no lines.

        >>> split_lines("a\\r\\nb\\n")
        ['a', 'b']
        >>> split_lines("\\n")
        ['']
    """
    if not text:
        return []

    lines = text.split('\n')

    # The last piece has no terminator after it
    tail = lines.pop()
    lines = [line[:-1] if line.endswith('\r') else line for line in lines]
    if tail:
        lines.append(tail)
    return lines
