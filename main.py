"""
Main entry point for the Diffy command line.

This module handles:
- Command line argument parsing
- Logging configuration
- Settings loading
- Running the comparison on a worker thread
- Rendering the result
- Exception handling
"""

from __future__ import annotations

import argparse
import faulthandler
import logging
import signal
import sys
from dataclasses import dataclass
from pathlib import Path
from typing import Optional, List

from PyQt6.QtCore import QCoreApplication, QTimer

from diffy import __version__
from diffy.core.diff.formatters import SideBySideFormatter, format_unified
from diffy.core.diff.segment_diff import SegmentGranularity
from diffy.core.models import ComparisonResult
from diffy.services.settings import ComparisonSettings, OutputStyle, SettingsManager
from diffy.workers.base_worker import WorkerState, WorkerThread
from diffy.workers.compare_worker import TextCompareWorker


# =============================================================================
# Constants
# =============================================================================

APP_NAME = "Diffy"
APP_VERSION = __version__

EXIT_IDENTICAL = 0
EXIT_DIFFERENT = 1
EXIT_ERROR = 2
EXIT_CANCELLED = 130

OUTPUT_STYLES = {
    'side-by-side': OutputStyle.SIDE_BY_SIDE,
    'unified': OutputStyle.UNIFIED,
    'summary': OutputStyle.SUMMARY,
}

GRANULARITIES = {
    'char': SegmentGranularity.CHARACTER,
    'word': SegmentGranularity.WORD,
}


# =============================================================================
# Data Classes
# =============================================================================

@dataclass
class CommandLineArgs:
    """Parsed command line arguments."""
    left_path: str = ""
    right_path: str = ""
    output_style: Optional[OutputStyle] = None
    granularity: Optional[SegmentGranularity] = None
    context_lines: Optional[int] = None
    width: Optional[int] = None
    swap: bool = False
    settings_file: Optional[str] = None
    log_level: str = "WARNING"
    log_file: Optional[str] = None


# =============================================================================
# Logging Setup
# =============================================================================

class LogFormatter(logging.Formatter):
    """Custom log formatter with colors for console."""

    COLORS = {
        logging.INFO: '\033[32m',      # Green
        logging.WARNING: '\033[33m',   # Yellow
        logging.ERROR: '\033[31m',     # Red
        logging.CRITICAL: '\033[35m',  # Magenta
    }
    RESET = '\033[0m'

    def __init__(self, use_colors: bool = True):
        super().__init__(
            fmt='%(asctime)s | %(levelname)-8s | %(name)s | %(message)s',
            datefmt='%Y-%m-%d %H:%M:%S'
        )
        self.use_colors = use_colors and sys.stderr.isatty()

    def format(self, record: logging.LogRecord) -> str:
        formatted = super().format(record)

        if self.use_colors:
            color = self.COLORS.get(record.levelno, '')
            return f"{color}{formatted}{self.RESET}"

        return formatted


def setup_logging(level: str = "WARNING", log_file: Optional[Path] = None) -> logging.Logger:
    """
    Configure application logging.

    Console output goes to stderr so that stdout carries only the
    rendered comparison.

    Args:
        level: Log level string
        log_file: Optional file path for logging

    Returns:
        Root logger instance
    """
    numeric_level = getattr(logging, level.upper(), logging.WARNING)

    root_logger = logging.getLogger()
    root_logger.setLevel(numeric_level)
    root_logger.handlers.clear()

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(numeric_level)
    console_handler.setFormatter(LogFormatter(use_colors=True))
    root_logger.addHandler(console_handler)

    if log_file:
        log_file.parent.mkdir(parents=True, exist_ok=True)

        file_handler = logging.FileHandler(
            log_file,
            encoding='utf-8'
        )
        file_handler.setLevel(numeric_level)
        file_handler.setFormatter(LogFormatter(use_colors=False))
        root_logger.addHandler(file_handler)

    # chardet logs every prober at DEBUG
    logging.getLogger('chardet').setLevel(logging.WARNING)

    return root_logger


# =============================================================================
# Exception Handling
# =============================================================================

class ExceptionHandler:
    """Global handler that logs unhandled exceptions."""

    def __init__(self, logger: logging.Logger):
        self.logger = logger

    def handle_exception(
        self,
        exc_type: type,
        exc_value: BaseException,
        exc_tb
    ) -> None:
        """Handle an unhandled exception."""
        # Don't handle keyboard interrupt
        if issubclass(exc_type, KeyboardInterrupt):
            sys.__excepthook__(exc_type, exc_value, exc_tb)
            return

        self.logger.critical(
            "Unhandled exception",
            exc_info=(exc_type, exc_value, exc_tb)
        )


# =============================================================================
# Command Line Parsing
# =============================================================================

def parse_arguments(args: Optional[List[str]] = None) -> CommandLineArgs:
    """
    Parse command line arguments.

    Args:
        args: Arguments to parse (defaults to sys.argv)

    Returns:
        Parsed arguments
    """
    parser = argparse.ArgumentParser(
        prog=APP_NAME.lower(),
        description="Side-by-side text comparison with inline change highlighting",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  %(prog)s old.txt new.txt                  Side-by-side comparison
  %(prog)s -f unified old.txt new.txt       Unified diff export
  %(prog)s -f summary --swap a.txt b.txt    Counts, right against left

Exit status is 0 for identical documents, 1 when they differ and
2 on errors.
        """
    )

    parser.add_argument('left', help='Left (original) file')
    parser.add_argument('right', help='Right (modified) file')

    # Output options
    parser.add_argument(
        '-f', '--format',
        choices=sorted(OUTPUT_STYLES),
        default=None,
        help='Output format (default from settings)'
    )
    parser.add_argument(
        '-g', '--granularity',
        choices=sorted(GRANULARITIES),
        default=None,
        help='Intraline comparison granularity'
    )
    parser.add_argument(
        '-U', '--context',
        type=int,
        default=None,
        help='Context lines in unified output (negative: whole file)'
    )
    parser.add_argument(
        '-w', '--width',
        type=int,
        default=None,
        help='Total width of side-by-side output'
    )
    parser.add_argument(
        '--swap',
        action='store_true',
        help='Swap the left and right documents'
    )

    # Configuration
    parser.add_argument(
        '-c', '--settings',
        help='Settings file path'
    )

    # Logging
    parser.add_argument(
        '-v', '--verbose',
        action='store_true',
        help='Enable verbose output'
    )
    parser.add_argument(
        '--log-level',
        choices=['DEBUG', 'INFO', 'WARNING', 'ERROR', 'CRITICAL'],
        default='WARNING',
        help='Log level'
    )
    parser.add_argument(
        '--log-file',
        help='Also write log records to this file'
    )

    parser.add_argument(
        '--version',
        action='version',
        version=f'{APP_NAME} {APP_VERSION}'
    )

    parsed = parser.parse_args(args)

    result = CommandLineArgs()
    result.left_path = parsed.left
    result.right_path = parsed.right
    result.swap = parsed.swap
    result.settings_file = parsed.settings
    result.log_file = parsed.log_file
    result.context_lines = parsed.context
    result.width = parsed.width

    if parsed.format:
        result.output_style = OUTPUT_STYLES[parsed.format]
    if parsed.granularity:
        result.granularity = GRANULARITIES[parsed.granularity]

    result.log_level = 'DEBUG' if parsed.verbose else parsed.log_level

    return result


def effective_settings(
    args: CommandLineArgs,
    defaults: ComparisonSettings
) -> ComparisonSettings:
    """Overlay command line flags on the persisted comparison settings."""
    return ComparisonSettings(
        granularity=args.granularity or defaults.granularity,
        word_fallback_length=defaults.word_fallback_length,
        compute_segments=defaults.compute_segments,
        context_lines=defaults.context_lines if args.context_lines is None else args.context_lines,
        output_style=args.output_style or defaults.output_style,
        tab_size=defaults.tab_size,
        width=args.width or defaults.width,
    )


# =============================================================================
# Rendering
# =============================================================================

def render_result(
    result: ComparisonResult,
    comparison: ComparisonSettings,
    left_label: str = "left",
    right_label: str = "right"
) -> str:
    """Render a comparison in the configured output style."""
    if comparison.output_style == OutputStyle.SUMMARY:
        return result.summary()

    if comparison.output_style == OutputStyle.UNIFIED:
        return format_unified(
            result, left_label, right_label, comparison.context_lines
        ).rstrip('\n')

    formatter = SideBySideFormatter(comparison.width, comparison.tab_size)
    return formatter.render(result)


def exit_code_for(result: ComparisonResult) -> int:
    return EXIT_IDENTICAL if result.is_identical else EXIT_DIFFERENT


# =============================================================================
# Comparison
# =============================================================================

def run_comparison(worker: TextCompareWorker) -> Optional[ComparisonResult]:
    """
    Run a comparison worker on its own thread inside a Qt event loop.

    Ctrl+C cancels: the comparison runs to completion but its result
    is discarded. A second Ctrl+C terminates immediately.

    Returns:
        The result, or None if the worker failed or was cancelled
    """
    app = QCoreApplication.instance() or QCoreApplication(sys.argv[:1])

    thread = WorkerThread(worker)
    thread.finished.connect(app.quit)
    worker.signals.status.connect(lambda message: logging.info(message))

    timer = setup_signal_handlers(thread)
    thread.start()
    app.exec()
    thread.wait()

    if timer is not None:
        timer.stop()

    if worker.state == WorkerState.COMPLETED:
        return worker.result
    return None


def setup_signal_handlers(thread: WorkerThread) -> Optional[QTimer]:
    """Route SIGINT to worker cancellation."""
    if sys.platform == 'win32':
        return None

    def _signal_handler(signum, frame) -> None:
        logging.info(f"Received signal {signum}, cancelling comparison...")
        signal.signal(signal.SIGINT, signal.SIG_DFL)
        thread.cancel()

    signal.signal(signal.SIGINT, _signal_handler)

    # Allow Python to process signals while Qt runs the event loop
    timer = QTimer()
    timer.timeout.connect(lambda: None)
    timer.start(200)
    return timer


# =============================================================================
# Main Function
# =============================================================================

def main(argv: Optional[List[str]] = None) -> int:
    """
    Command line entry point.

    Returns:
        Exit code
    """
    if not faulthandler.is_enabled():
        faulthandler.enable()

    args = parse_arguments(argv)

    logger = setup_logging(args.log_level, Path(args.log_file) if args.log_file else None)
    logger.debug(f"Starting {APP_NAME} v{APP_VERSION}")

    sys.excepthook = ExceptionHandler(logger).handle_exception

    settings_manager = SettingsManager(Path(args.settings_file) if args.settings_file else None)
    comparison = effective_settings(args, settings_manager.settings.comparison)

    left_path, right_path = args.left_path, args.right_path
    if args.swap:
        left_path, right_path = right_path, left_path

    worker = TextCompareWorker(left_path, right_path, comparison.to_options())
    result = run_comparison(worker)

    if result is None:
        if worker.state == WorkerState.CANCELLED:
            logger.warning("Comparison cancelled")
            return EXIT_CANCELLED
        error_type, message = worker.error or ("Error", "comparison failed")
        logger.error(f"{error_type}: {message}")
        return EXIT_ERROR

    settings_manager.add_recent_path(str(Path(left_path).resolve()), is_left=True)
    settings_manager.add_recent_path(str(Path(right_path).resolve()), is_left=False)

    logger.info(result.summary())
    output = render_result(result, comparison, left_path, right_path)
    if output:
        print(output)

    return exit_code_for(result)


if __name__ == '__main__':
    sys.exit(main())
