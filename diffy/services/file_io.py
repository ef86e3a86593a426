"""
File I/O service for loading documents to compare.

Handles:
- Encoding detection
- Byte order marks
- Binary file rejection
- Line ending detection
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from enum import Enum, auto
from pathlib import Path
from typing import Optional

import chardet


logger = logging.getLogger(__name__)


class LineEnding(Enum):
    """Line ending style."""
    LF = auto()      # Unix: \n
    CRLF = auto()    # Windows: \r\n
    CR = auto()      # Old Mac: \r
    MIXED = auto()   # Mixed endings
    NONE = auto()    # No line endings (single line or empty)


@dataclass
class FileContent:
    """Container for file content with metadata."""
    text: str
    encoding: str
    line_ending: LineEnding
    bom: bool
    size: int


@dataclass
class ReadResult:
    """Result of a file read operation."""
    success: bool
    content: Optional[FileContent] = None
    error: Optional[str] = None
    is_binary: bool = False

    @property
    def text(self) -> str:
        return self.content.text if self.content else ""


class FileIOService:
    """Service for reading documents safely."""

    # Binary file signatures (magic bytes)
    BINARY_SIGNATURES = [
        b'\x00',           # Null byte (strong indicator)
        b'\x89PNG',        # PNG
        b'\xff\xd8\xff',   # JPEG
        b'GIF8',           # GIF
        b'PK\x03\x04',     # ZIP
        b'\x1f\x8b',       # GZIP
        b'%PDF',           # PDF
        b'\x7fELF',        # ELF
        b'MZ',             # Windows executable
    ]

    # BOM prefixes, longest first
    BOMS = [
        (b'\xef\xbb\xbf', 'utf-8-sig'),
        (b'\xff\xfe', 'utf-16'),
        (b'\xfe\xff', 'utf-16'),
    ]

    def __init__(
        self,
        default_encoding: str = 'utf-8',
        fallback_encoding: str = 'latin-1',
        binary_check_size: int = 8192
    ):
        self.default_encoding = default_encoding
        self.fallback_encoding = fallback_encoding
        self.binary_check_size = binary_check_size

    def read_file(
        self,
        path: Path | str,
        encoding: Optional[str] = None,
        max_text_size: int = 50 * 1024 * 1024  # 50MB default limit
    ) -> ReadResult:
        """
        Read a text file with automatic encoding detection.

        Args:
            path: Path to the file
            encoding: Force specific encoding (auto-detect if None)
            max_text_size: Maximum file size in bytes to read as text

        Returns:
            ReadResult with content or error information
        """
        path = Path(path)

        if not path.exists():
            return ReadResult(success=False, error=f"File not found: {path}")

        if not path.is_file():
            return ReadResult(success=False, error=f"Not a file: {path}")

        try:
            size = path.stat().st_size
            if size > max_text_size:
                return ReadResult(
                    success=False,
                    error=f"File too large for text comparison ({size / 1024 / 1024:.2f} MB). "
                          f"Max size is {max_text_size / 1024 / 1024:.2f} MB."
                )

            raw_content = path.read_bytes()
        except PermissionError:
            return ReadResult(success=False, error=f"Permission denied: {path}")
        except OSError as e:
            logger.warning("Failed to read %s: %s", path, e)
            return ReadResult(success=False, error=f"OS error: {e}")

        bom_encoding = self._detect_bom(raw_content)

        if bom_encoding is None and self.is_binary(raw_content):
            return ReadResult(success=False, is_binary=True,
                              error="File appears to be binary")

        detected_encoding = encoding or bom_encoding or self._detect_encoding(raw_content)

        try:
            text = raw_content.decode(detected_encoding)
        except (UnicodeDecodeError, LookupError):
            logger.warning(
                "Decoding %s as %s failed, falling back to %s",
                path, detected_encoding, self.fallback_encoding
            )
            text = raw_content.decode(self.fallback_encoding, errors='replace')
            detected_encoding = self.fallback_encoding

        return ReadResult(
            success=True,
            content=FileContent(
                text=text,
                encoding=detected_encoding,
                line_ending=self.detect_line_ending(text),
                bom=bom_encoding is not None,
                size=size
            )
        )

    def is_binary(self, content: bytes) -> bool:
        """Check whether raw content looks binary."""
        chunk = content[:self.binary_check_size]
        if not chunk:
            return False

        for sig in self.BINARY_SIGNATURES:
            if chunk.startswith(sig):
                return True

        if b'\x00' in chunk:
            return True

        # Check ratio of non-text bytes
        non_text = sum(1 for b in chunk if b < 9 or (b > 13 and b < 32))
        return non_text / len(chunk) > 0.3

    def detect_line_ending(self, content: str) -> LineEnding:
        """Detect line ending style in content."""
        crlf_count = content.count('\r\n')
        lf_count = content.count('\n') - crlf_count
        cr_count = content.count('\r') - crlf_count

        total = crlf_count + lf_count + cr_count
        if total == 0:
            return LineEnding.NONE

        if crlf_count == total:
            return LineEnding.CRLF
        elif lf_count == total:
            return LineEnding.LF
        elif cr_count == total:
            return LineEnding.CR
        else:
            return LineEnding.MIXED

    def _detect_bom(self, content: bytes) -> Optional[str]:
        for bom, encoding in self.BOMS:
            if content.startswith(bom):
                return encoding
        return None

    def _detect_encoding(self, content: bytes) -> str:
        """Detect encoding of content."""
        if not content:
            return self.default_encoding

        result = chardet.detect(content)

        if result['confidence'] > 0.7 and result['encoding']:
            encoding = result['encoding'].lower()
            if encoding == 'ascii':
                return 'utf-8'  # ASCII is subset of UTF-8
            return encoding

        return self.default_encoding
