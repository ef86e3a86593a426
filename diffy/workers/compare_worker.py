"""
Workers for text comparison operations.
"""

from __future__ import annotations

import logging
from pathlib import Path
from typing import Optional

from PyQt6.QtCore import QObject

from diffy.core.diff.text_diff import TextDiffEngine, TextCompareOptions
from diffy.core.models import ComparisonResult
from diffy.services.file_io import FileIOService
from diffy.workers.base_worker import BaseWorker


logger = logging.getLogger(__name__)


class TextCompareWorker(BaseWorker):
    """
    Worker for comparing text files.

    Reads both files and runs the text diff engine in a background thread.
    """

    def __init__(
        self,
        left_path: str | Path,
        right_path: str | Path,
        options: Optional[TextCompareOptions] = None,
        encoding: Optional[str] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent=parent)
        self.left_path = Path(left_path)
        self.right_path = Path(right_path)
        self.options = options or TextCompareOptions()
        self.encoding = encoding

    def do_work(self) -> ComparisonResult:
        """Perform text comparison."""
        self.report_status(f"Comparing {self.left_path.name}...")

        file_io_service = FileIOService()

        self.report_progress(0, 3, "Reading left file...")
        left_text = self._read(file_io_service, self.left_path, "left")
        self.check_cancelled()

        self.report_progress(1, 3, "Reading right file...")
        right_text = self._read(file_io_service, self.right_path, "right")
        self.check_cancelled()

        self.report_progress(2, 3, "Computing differences...")
        result = TextDiffEngine(self.options).compare(left_text, right_text)

        self.report_progress(3, 3, "Complete")
        self.report_status(result.summary())
        return result

    def _read(self, service: FileIOService, path: Path, side: str) -> str:
        read_result = service.read_file(path, encoding=self.encoding)
        if not read_result.success:
            if read_result.is_binary:
                raise IOError(f"File appears to be binary and cannot be compared as text: {path}")
            raise IOError(f"Failed to read {side} file: {read_result.error}")

        logger.debug("Read %s (%s, %d bytes)", path, read_result.content.encoding, read_result.content.size)
        return read_result.text


class TextCompareWorkerFromContent(BaseWorker):
    """
    Worker for comparing text content directly.

    Useful when content is already in memory.
    """

    def __init__(
        self,
        left_content: Optional[str],
        right_content: Optional[str],
        options: Optional[TextCompareOptions] = None,
        parent: Optional[QObject] = None
    ):
        super().__init__(parent=parent)
        self.left_content = left_content
        self.right_content = right_content
        self.options = options or TextCompareOptions()

    def do_work(self) -> ComparisonResult:
        """Perform text comparison."""
        self.report_status("Computing differences...")

        result = TextDiffEngine(self.options).compare(self.left_content, self.right_content)

        self.report_status(result.summary())
        return result
