"""
Tests for the command line entry point.
"""

import logging
import signal
import sys

import pytest

pytest.importorskip("PyQt6.QtCore")

import main
from diffy import compare
from diffy.core.diff.segment_diff import SegmentGranularity
from diffy.services.settings import ComparisonSettings, OutputStyle


@pytest.fixture
def restore_process_state(monkeypatch):
    """Undo the logging and signal changes main() makes."""
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    sigint = signal.getsignal(signal.SIGINT)
    monkeypatch.setattr(sys, "excepthook", sys.excepthook)
    yield
    root.handlers[:] = handlers
    root.setLevel(level)
    signal.signal(signal.SIGINT, sigint)


class TestParseArguments:
    def test_defaults(self):
        args = main.parse_arguments(["a.txt", "b.txt"])
        assert args.left_path == "a.txt"
        assert args.right_path == "b.txt"
        assert args.output_style is None
        assert args.granularity is None
        assert args.context_lines is None
        assert not args.swap
        assert args.log_level == "WARNING"

    def test_flags(self):
        args = main.parse_arguments([
            "-f", "unified", "-g", "word", "-U", "0", "-w", "100",
            "--swap", "-v", "a.txt", "b.txt",
        ])
        assert args.output_style == OutputStyle.UNIFIED
        assert args.granularity == SegmentGranularity.WORD
        assert args.context_lines == 0
        assert args.width == 100
        assert args.swap
        assert args.log_level == "DEBUG"

    def test_missing_paths(self):
        with pytest.raises(SystemExit):
            main.parse_arguments(["only-one.txt"])


class TestEffectiveSettings:
    def test_flags_override_settings(self):
        args = main.parse_arguments(["-f", "summary", "-U", "0", "a", "b"])
        settings = main.effective_settings(args, ComparisonSettings(context_lines=5, width=90))
        assert settings.output_style == OutputStyle.SUMMARY
        assert settings.context_lines == 0
        assert settings.width == 90

    def test_settings_used_without_flags(self):
        args = main.parse_arguments(["a", "b"])
        defaults = ComparisonSettings(
            granularity=SegmentGranularity.WORD, output_style=OutputStyle.UNIFIED
        )
        assert main.effective_settings(args, defaults) == defaults


class TestRendering:
    def test_summary(self):
        result = compare("a\nb", "a\nc\nd")
        text = main.render_result(result, ComparisonSettings(output_style=OutputStyle.SUMMARY))
        assert text == "Compared: 1 inserted, 0 deleted, 1 modified, 1 unchanged"

    def test_unified(self):
        result = compare("a", "b")
        text = main.render_result(
            result, ComparisonSettings(output_style=OutputStyle.UNIFIED), "x", "y"
        )
        assert text == "--- x\n+++ y\n@@ -1 +1 @@\n-a\n+b"

    def test_exit_codes(self):
        assert main.exit_code_for(compare("a", "a")) == main.EXIT_IDENTICAL
        assert main.exit_code_for(compare("a", "b")) == main.EXIT_DIFFERENT


@pytest.mark.usefixtures("qapp", "restore_process_state")
class TestMain:
    def test_different_files(self, write_text, tmp_path, capsys):
        left = write_text("left.txt", "a\nb\n")
        right = write_text("right.txt", "a\nc\n")
        settings = tmp_path / "settings.json"

        code = main.main(["-f", "summary", "-c", str(settings), str(left), str(right)])

        assert code == main.EXIT_DIFFERENT
        out = capsys.readouterr().out
        assert out == "Compared: 0 inserted, 0 deleted, 1 modified, 1 unchanged\n"
        assert settings.exists()

    def test_identical_files(self, write_text, tmp_path, capsys):
        left = write_text("left.txt", "same\n")
        right = write_text("right.txt", "same\n")

        code = main.main(["-f", "unified", "-c", str(tmp_path / "s.json"), str(left), str(right)])

        assert code == main.EXIT_IDENTICAL
        assert capsys.readouterr().out == ""

    def test_swap(self, write_text, tmp_path, capsys):
        left = write_text("left.txt", "a\n")
        right = write_text("right.txt", "a\nb\n")

        code = main.main([
            "-f", "summary", "--swap", "-c", str(tmp_path / "s.json"), str(left), str(right)
        ])

        assert code == main.EXIT_DIFFERENT
        assert "0 inserted, 1 deleted" in capsys.readouterr().out

    def test_missing_file_is_an_error(self, write_text, tmp_path, capsys):
        left = write_text("left.txt", "a\n")

        code = main.main(["-c", str(tmp_path / "s.json"), str(left), str(tmp_path / "nope.txt")])

        assert code == main.EXIT_ERROR
        assert capsys.readouterr().out == ""
