import sys
from datetime import datetime, timedelta
from pathlib import Path

import pytest

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from purge_temp.config.settings import StageSettings
from purge_temp.engine.executor import RotationExecutor
from purge_temp.shared.interfaces import AppLogger, DesktopNotification, PurgeLogger
from purge_temp.utils.paths import TEST_SYSTEM_PATH


class RecordingAppLogger(AppLogger):
    def __init__(self):
        self.lines = []

    def info(self, message):
        self.lines.append(("info", message))

    def warning(self, message):
        self.lines.append(("warning", message))

    def error(self, message):
        self.lines.append(("error", message))

    def messages(self, level):
        return [message for line_level, message in self.lines if line_level == level]


class RecordingPurgeLogger(PurgeLogger):
    def __init__(self):
        self.calls = []

    def report_purge(self, folder, relative_file):
        self.calls.append(("purge", folder, relative_file))

    def report_move(self, from_folder, to_folder, relative_file):
        self.calls.append(("move", from_folder, to_folder, relative_file))

    def report_skipped_purge(self, folder, skipped_count, all_skipped):
        self.calls.append(("skipped_purge", folder, skipped_count, all_skipped))

    def report_skipped_move(self, from_folder, to_folder, skipped_count, all_skipped):
        self.calls.append(("skipped_move", from_folder, to_folder, skipped_count, all_skipped))

    def of_kind(self, kind):
        return [call for call in self.calls if call[0] == kind]


class RecordingNotification(DesktopNotification):
    def __init__(self):
        self.shown = []

    def show_notification(self, title, message, status):
        self.shown.append((title, message, status))


class FakeClock:
    """Deterministic replacement for ``datetime.now``."""

    def __init__(self, start=datetime(2024, 6, 1, 12, 0, 0)):
        self.current = start

    def __call__(self):
        return self.current

    def advance(self, seconds):
        self.current += timedelta(seconds=seconds)


@pytest.fixture
def app_logger():
    return RecordingAppLogger()


@pytest.fixture
def purge_logger():
    return RecordingPurgeLogger()


@pytest.fixture
def notification():
    return RecordingNotification()


@pytest.fixture
def clock():
    return FakeClock()


@pytest.fixture
def stage_root(tmp_path):
    return tmp_path / "stages"


@pytest.fixture
def make_settings(tmp_path, stage_root):
    """Settings whose folders all live below ``tmp_path``."""

    def _make(**overrides):
        base = StageSettings(
            stage_root_folder=str(stage_root),
            config_folder=str(tmp_path / "config"),
            temp_folder=str(tmp_path / "temp"),
            logging_folder=str(tmp_path / "log"),
            log_enabled=False,
            staging_delay_seconds=10,
        )
        return base.with_overrides(overrides)

    return _make


@pytest.fixture
def make_executor(tmp_path, make_settings, app_logger, purge_logger, notification, clock):
    def _make(settings=None, **overrides):
        if settings is None:
            settings = make_settings(**overrides)
        return RotationExecutor(
            settings,
            home=tmp_path,
            app_logger=app_logger,
            purge_logger=purge_logger,
            notification=notification,
            protected_paths=[TEST_SYSTEM_PATH],
            clock=clock,
        )

    return _make
