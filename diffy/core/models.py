"""
Core data models for the diff engine.

This module defines the value objects produced by one comparison:
- Change kinds for rows and segments
- Character-level segments of modified lines
- Aligned rows for side-by-side display
- The aggregated comparison result
- Edit script entries produced by the line differ

All models are:
- UI-agnostic (consumed by any renderer)
- Immutable (frozen dataclasses, tuples instead of lists)
- Safe to share across threads once returned
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum, auto
from typing import Optional


# =============================================================================
# Enumerations
# =============================================================================

class ChangeKind(Enum):
    """Classification of a row or a segment in a comparison."""
    UNCHANGED = auto()  # Identical on both sides
    INSERTED = auto()   # Present only in the right/new document
    DELETED = auto()    # Present only in the left/old document
    MODIFIED = auto()   # Paired line whose text differs
    IMAGINARY = auto()  # Placeholder row for alignment, no content

    @property
    def mirror(self) -> ChangeKind:
        """The kind seen from the opposite side."""
        if self is ChangeKind.INSERTED:
            return ChangeKind.DELETED
        if self is ChangeKind.DELETED:
            return ChangeKind.INSERTED
        return self


class EditKind(Enum):
    """Operation in a line-level edit script."""
    KEEP = auto()
    DELETE = auto()
    INSERT = auto()
    REPLACE = auto()


# Kinds a segment may carry
SEGMENT_KINDS = frozenset({
    ChangeKind.UNCHANGED,
    ChangeKind.INSERTED,
    ChangeKind.DELETED,
})


# =============================================================================
# Text Diff Models
# =============================================================================

@dataclass(frozen=True)
class Segment:
    """
    A contiguous span of a line's text with its own change kind.

    Used to highlight the changed portions of a modified line.
    """
    text: str
    kind: ChangeKind

    def __post_init__(self) -> None:
        if self.kind not in SEGMENT_KINDS:
            raise ValueError(f"Segment kind cannot be {self.kind.name}")

    @property
    def length(self) -> int:
        return len(self.text)

    def mirrored(self) -> Segment:
        return Segment(self.text, self.kind.mirror)


@dataclass(frozen=True)
class Row:
    """
    One aligned row on one side of a side-by-side comparison.

    `line_number` is the 1-based position of the line in its own
    document and is None only for imaginary rows. `segments` is
    non-empty only for modified rows.
    """
    line_number: Optional[int]
    text: str
    kind: ChangeKind
    segments: tuple[Segment, ...] = ()

    @classmethod
    def imaginary(cls) -> Row:
        """Create a blank placeholder row."""
        return cls(line_number=None, text="", kind=ChangeKind.IMAGINARY)

    @property
    def is_imaginary(self) -> bool:
        return self.kind is ChangeKind.IMAGINARY

    @property
    def has_segments(self) -> bool:
        return len(self.segments) > 0

    def mirrored(self) -> Row:
        """Row as it would appear had the documents been swapped."""
        return Row(
            line_number=self.line_number,
            text=self.text,
            kind=self.kind.mirror,
            segments=tuple(s.mirrored() for s in self.segments),
        )


@dataclass(frozen=True)
class ComparisonResult:
    """
    Complete result of comparing two documents.

    `left_rows` and `right_rows` always have the same length; row i on
    the left corresponds to row i on the right.
    """
    left_rows: tuple[Row, ...] = ()
    right_rows: tuple[Row, ...] = ()
    inserted_count: int = 0
    deleted_count: int = 0
    modified_count: int = 0
    unchanged_count: int = 0

    def __post_init__(self) -> None:
        if len(self.left_rows) != len(self.right_rows):
            raise ValueError(
                f"Unaligned result: {len(self.left_rows)} left rows, "
                f"{len(self.right_rows)} right rows"
            )

    @property
    def row_count(self) -> int:
        return len(self.left_rows)

    @property
    def total_changes(self) -> int:
        return self.inserted_count + self.deleted_count + self.modified_count

    @property
    def is_identical(self) -> bool:
        return self.total_changes == 0

    def rows(self):
        """Iterate over (left, right) row pairs."""
        return zip(self.left_rows, self.right_rows)

    def summary(self) -> str:
        """Status line describing the counts."""
        return (
            f"Compared: {self.inserted_count} inserted, "
            f"{self.deleted_count} deleted, "
            f"{self.modified_count} modified, "
            f"{self.unchanged_count} unchanged"
        )

    def swapped(self) -> ComparisonResult:
        """The mirror result: sides exchanged, insertions and deletions swapped."""
        return ComparisonResult(
            left_rows=tuple(r.mirrored() for r in self.right_rows),
            right_rows=tuple(r.mirrored() for r in self.left_rows),
            inserted_count=self.deleted_count,
            deleted_count=self.inserted_count,
            modified_count=self.modified_count,
            unchanged_count=self.unchanged_count,
        )


@dataclass(frozen=True)
class EditOp:
    """
    One entry of a line-level edit script.

    Indices are 0-based positions in the old/new line sequences;
    the index a kind does not use is None.
    """
    kind: EditKind
    old_index: Optional[int] = None
    new_index: Optional[int] = None

    @classmethod
    def keep(cls, old_index: int, new_index: int) -> EditOp:
        return cls(EditKind.KEEP, old_index, new_index)

    @classmethod
    def delete(cls, old_index: int) -> EditOp:
        return cls(EditKind.DELETE, old_index, None)

    @classmethod
    def insert(cls, new_index: int) -> EditOp:
        return cls(EditKind.INSERT, None, new_index)

    @classmethod
    def replace(cls, old_index: int, new_index: int) -> EditOp:
        return cls(EditKind.REPLACE, old_index, new_index)
