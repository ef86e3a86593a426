"""
Application settings management.
"""

from __future__ import annotations

import json
import logging
import os
from dataclasses import dataclass, field, asdict
from enum import Enum, auto
from pathlib import Path
from typing import Any, Callable, Optional

from diffy.core.diff.segment_diff import SegmentGranularity
from diffy.core.diff.text_diff import TextCompareOptions


logger = logging.getLogger(__name__)


class OutputStyle(Enum):
    """How a comparison is written out."""
    SIDE_BY_SIDE = auto()
    UNIFIED = auto()
    SUMMARY = auto()


@dataclass
class ComparisonSettings:
    """Settings for text comparison and its output."""
    granularity: SegmentGranularity = SegmentGranularity.CHARACTER
    word_fallback_length: int = 1000
    compute_segments: bool = True
    context_lines: int = 3
    output_style: OutputStyle = OutputStyle.SIDE_BY_SIDE
    tab_size: int = 4
    width: int = 160

    def to_options(self) -> TextCompareOptions:
        """Build engine options from these settings."""
        return TextCompareOptions(
            granularity=self.granularity,
            word_fallback_length=self.word_fallback_length,
            compute_segments=self.compute_segments,
        )


@dataclass
class ApplicationSettings:
    """Main application settings container."""
    comparison: ComparisonSettings = field(default_factory=ComparisonSettings)

    recent_left_paths: list[str] = field(default_factory=list)
    recent_right_paths: list[str] = field(default_factory=list)
    recent_files_limit: int = 5
    last_directory: str = ""


class SettingsManager:
    """Manager for loading/saving application settings."""

    def __init__(self, settings_path: Optional[Path] = None):
        self.settings_path = Path(settings_path) if settings_path else self._get_default_path()
        self._settings: Optional[ApplicationSettings] = None
        self._observers: list[Callable[[ApplicationSettings], None]] = []

    @staticmethod
    def _get_default_path() -> Path:
        """Get the default settings file path."""
        if os.name == 'nt':
            # Windows
            app_data = os.environ.get('APPDATA', os.path.expanduser('~'))
            return Path(app_data) / 'Diffy' / 'settings.json'
        else:
            # Linux/Mac
            config_home = os.environ.get('XDG_CONFIG_HOME',
                                         os.path.expanduser('~/.config'))
            return Path(config_home) / 'diffy' / 'settings.json'

    @property
    def settings(self) -> ApplicationSettings:
        """Get current settings, loading from disk if needed."""
        if self._settings is None:
            self._settings = self.load()
        return self._settings

    def load(self) -> ApplicationSettings:
        """Load settings from disk."""
        if not self.settings_path.exists():
            return ApplicationSettings()

        try:
            with open(self.settings_path, 'r', encoding='utf-8') as f:
                data = json.load(f)
            return self._from_dict(data)
        except (OSError, ValueError, TypeError, AttributeError) as e:
            logger.warning("Ignoring unreadable settings file %s: %s", self.settings_path, e)
            return ApplicationSettings()

    def save(self, settings: Optional[ApplicationSettings] = None) -> bool:
        """Save settings to disk."""
        settings = settings or self._settings
        if settings is None:
            return False

        try:
            self.settings_path.parent.mkdir(parents=True, exist_ok=True)

            with open(self.settings_path, 'w', encoding='utf-8') as f:
                json.dump(self._to_dict(settings), f, indent=2)
        except OSError as e:
            logger.error("Failed to save settings to %s: %s", self.settings_path, e)
            return False

        self._settings = settings
        self._notify_observers()
        return True

    def reset(self) -> ApplicationSettings:
        """Reset to default settings."""
        self._settings = ApplicationSettings()
        self.save()
        return self._settings

    def add_observer(self, callback: Callable[[ApplicationSettings], None]) -> None:
        """Add a callback to be notified of settings changes."""
        self._observers.append(callback)

    def remove_observer(self, callback: Callable[[ApplicationSettings], None]) -> None:
        """Remove a settings change observer."""
        if callback in self._observers:
            self._observers.remove(callback)

    def _notify_observers(self) -> None:
        for callback in self._observers:
            try:
                callback(self._settings)
            except Exception:
                logger.exception("Settings observer %r failed", callback)

    def add_recent_path(self, path: str, is_left: bool) -> None:
        """Add a path to the front of the recent files list."""
        settings = self.settings
        recent = settings.recent_left_paths if is_left else settings.recent_right_paths

        if path in recent:
            recent.remove(path)
        recent.insert(0, path)
        del recent[settings.recent_files_limit:]

        settings.last_directory = str(Path(path).parent)
        self.save()

    def _to_dict(self, settings: ApplicationSettings) -> dict:
        """Convert settings to dictionary for JSON serialization."""
        def convert(obj: Any) -> Any:
            if isinstance(obj, Enum):
                return obj.name
            elif isinstance(obj, list):
                return [convert(item) for item in obj]
            elif isinstance(obj, dict):
                return {k: convert(v) for k, v in obj.items()}
            else:
                return obj

        return convert(asdict(settings))

    def _from_dict(self, data: dict) -> ApplicationSettings:
        """Convert dictionary back to settings objects."""
        def get_enum(enum_class: type, value: Any) -> Enum:
            if isinstance(value, str):
                try:
                    return enum_class[value]
                except KeyError:
                    return list(enum_class)[0]
            return list(enum_class)[0]

        defaults = ComparisonSettings()
        comparison_data = data.get('comparison', {})

        comparison = ComparisonSettings(
            granularity=get_enum(SegmentGranularity, comparison_data.get('granularity', 'CHARACTER')),
            word_fallback_length=comparison_data.get('word_fallback_length', defaults.word_fallback_length),
            compute_segments=comparison_data.get('compute_segments', defaults.compute_segments),
            context_lines=comparison_data.get('context_lines', defaults.context_lines),
            output_style=get_enum(OutputStyle, comparison_data.get('output_style', 'SIDE_BY_SIDE')),
            tab_size=comparison_data.get('tab_size', defaults.tab_size),
            width=comparison_data.get('width', defaults.width),
        )

        return ApplicationSettings(
            comparison=comparison,
            recent_left_paths=data.get('recent_left_paths', []),
            recent_right_paths=data.get('recent_right_paths', []),
            recent_files_limit=data.get('recent_files_limit', 5),
            last_directory=data.get('last_directory', ''),
        )
