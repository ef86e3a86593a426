"""
Tests for comparison workers.
"""

import pytest

pytest.importorskip("PyQt6.QtCore")

from PyQt6.QtCore import QEventLoop, QTimer

from diffy.workers import (
    TextCompareWorker,
    TextCompareWorkerFromContent,
    WorkerState,
    WorkerThread,
)


class SignalRecorder:
    """Collects worker signal emissions."""

    def __init__(self, worker):
        self.finished = []
        self.errors = []
        self.cancelled = 0
        self.progress = []
        self.states = []
        worker.signals.finished.connect(self.finished.append)
        worker.signals.error.connect(lambda kind, message: self.errors.append((kind, message)))
        worker.signals.cancelled.connect(self._on_cancelled)
        worker.signals.progress.connect(lambda current, total, message: self.progress.append((current, total)))
        worker.signals.state_changed.connect(self.states.append)

    def _on_cancelled(self):
        self.cancelled += 1


@pytest.mark.usefixtures("qapp")
class TestContentWorker:
    def test_completes_with_result(self):
        worker = TextCompareWorkerFromContent("a\nb", "a\nx\nb")
        recorder = SignalRecorder(worker)

        worker.run()

        assert worker.state == WorkerState.COMPLETED
        assert recorder.finished == [worker.result]
        assert worker.result.inserted_count == 1
        assert recorder.cancelled == 0
        assert WorkerState.RUNNING in recorder.states

    def test_cancel_before_run(self):
        worker = TextCompareWorkerFromContent("a", "b")
        recorder = SignalRecorder(worker)

        worker.cancel()
        worker.run()

        assert worker.state == WorkerState.CANCELLED
        assert recorder.cancelled == 1
        assert recorder.finished == []
        assert worker.result is None

    def test_cancel_while_running_discards_result(self):
        worker = TextCompareWorkerFromContent("a\nb\nc", "a\nB\nc")
        recorder = SignalRecorder(worker)
        worker.signals.started.connect(worker.cancel)

        worker.run()

        assert worker.state == WorkerState.CANCELLED
        assert recorder.cancelled == 1
        assert recorder.finished == []
        assert worker.result is None


@pytest.mark.usefixtures("qapp")
class TestFileWorker:
    def test_compares_files(self, write_text):
        left = write_text("left.txt", "hello\nworld\n")
        right = write_text("right.txt", "hallo\nworld\n")
        worker = TextCompareWorker(left, right)
        recorder = SignalRecorder(worker)

        worker.run()

        assert worker.state == WorkerState.COMPLETED
        assert worker.result.modified_count == 1
        assert worker.result.unchanged_count == 1
        assert recorder.progress[0] == (0, 3)
        assert recorder.progress[-1] == (3, 3)

    def test_missing_file_fails(self, write_text, tmp_path):
        left = write_text("left.txt", "a\n")
        worker = TextCompareWorker(left, tmp_path / "missing.txt")
        recorder = SignalRecorder(worker)

        worker.run()

        assert worker.state == WorkerState.FAILED
        assert worker.error[0] == "OSError"
        assert "right" in worker.error[1]
        assert recorder.errors == [worker.error]
        assert worker.result is None

    def test_binary_file_fails(self, write_text, tmp_path):
        left = write_text("left.txt", "a\n")
        right = tmp_path / "blob.bin"
        right.write_bytes(b"\x00\x01\x02\x03")
        worker = TextCompareWorker(left, right)

        worker.run()

        assert worker.state == WorkerState.FAILED
        assert "binary" in worker.error[1]

    def test_cancel_between_stages(self, write_text):
        left = write_text("left.txt", "a\n")
        right = write_text("right.txt", "b\n")
        worker = TextCompareWorker(left, right)
        recorder = SignalRecorder(worker)
        worker.signals.started.connect(worker.cancel)

        worker.run()

        assert worker.state == WorkerState.CANCELLED
        assert recorder.cancelled == 1
        assert worker.result is None


def test_worker_thread_runs_worker(qapp):
    worker = TextCompareWorkerFromContent("a", "a")
    thread = WorkerThread(worker)

    # The quit request is queued to the main thread, so run a local loop
    loop = QEventLoop()
    thread.finished.connect(loop.quit)
    timeout = QTimer()
    timeout.setSingleShot(True)
    timeout.timeout.connect(loop.quit)
    timeout.start(10000)

    thread.start()
    loop.exec()
    timeout.stop()
    assert thread.wait(1000)

    assert worker.state == WorkerState.COMPLETED
    assert thread.result.is_identical
    assert thread.error is None
