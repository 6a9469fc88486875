#!/usr/bin/env python3
"""Tests for the threshold rules of ActivityReporter."""

import os

import pytest

from purge_temp.engine.reporter import ActivityReporter


@pytest.fixture
def folders(tmp_path):
    """Three stage folders, newest first; the first two hold files."""
    paths = [str(tmp_path / name) for name in ("stage-1", "stage-2", "stage-LAST")]
    for path in paths:
        os.makedirs(path)
    return paths


def fill(folder, count):
    for index in range(count):
        with open(os.path.join(folder, f"file{index:02d}.txt"), "w", encoding="utf-8") as handle:
            handle.write("x")


class TestThreshold:
    """Individual versus aggregated report lines"""

    def test_unlimited(self, folders, purge_logger):
        fill(folders[0], 5)
        report = ActivityReporter(purge_logger, -1).report_folder_contents(folders, folders[0])

        assert len(purge_logger.of_kind("move")) == 5
        assert purge_logger.of_kind("skipped_move") == []
        assert report.reported_files == 5
        assert report.skipped_files == 0

    def test_zero_aggregates_everything(self, folders, purge_logger):
        fill(folders[0], 5)
        ActivityReporter(purge_logger, 0).report_folder_contents(folders, folders[0])

        assert purge_logger.of_kind("move") == []
        assert purge_logger.of_kind("skipped_move") == [("skipped_move", folders[0], folders[1], 5, True)]

    def test_partial(self, folders, purge_logger):
        fill(folders[0], 5)
        ActivityReporter(purge_logger, 2).report_folder_contents(folders, folders[0])

        assert len(purge_logger.of_kind("move")) == 2
        assert purge_logger.of_kind("skipped_move") == [("skipped_move", folders[0], folders[1], 3, False)]

    def test_threshold_above_count(self, folders, purge_logger):
        fill(folders[0], 3)
        ActivityReporter(purge_logger, 10).report_folder_contents(folders, folders[0])

        assert len(purge_logger.of_kind("move")) == 3
        assert purge_logger.of_kind("skipped_move") == []

    def test_empty_folder(self, folders, purge_logger):
        ActivityReporter(purge_logger, 0).report_folder_contents(folders, folders[0])
        assert purge_logger.calls == []


class TestOperationKind:
    def test_last_folder_is_purged(self, folders, purge_logger):
        fill(folders[2], 2)
        report = ActivityReporter(purge_logger, -1).report_folder_contents(folders, folders[2])

        assert report.is_purge
        assert purge_logger.calls == [
            ("purge", folders[2], "file00.txt"),
            ("purge", folders[2], "file01.txt"),
        ]

    def test_last_folder_aggregate(self, folders, purge_logger):
        fill(folders[2], 3)
        ActivityReporter(purge_logger, 1).report_folder_contents(folders, folders[2])

        assert purge_logger.of_kind("skipped_purge") == [("skipped_purge", folders[2], 2, False)]

    def test_move_targets_next_folder(self, folders, purge_logger):
        fill(folders[1], 1)
        ActivityReporter(purge_logger, -1).report_folder_contents(folders, folders[1])

        assert purge_logger.calls == [("move", folders[1], folders[2], "file00.txt")]

    def test_nested_files_are_relative(self, folders, purge_logger):
        nested = os.path.join(folders[0], "sub", "deeper")
        os.makedirs(nested)
        fill(nested, 1)

        ActivityReporter(purge_logger, -1).report_folder_contents(folders, folders[0])

        relative = os.path.join("sub", "deeper", "file00.txt")
        assert purge_logger.calls == [("move", folders[0], folders[1], relative)]

    def test_reporting_is_read_only(self, folders, purge_logger):
        fill(folders[0], 2)
        ActivityReporter(purge_logger, -1).report_folder_contents(folders, folders[0])
        assert sorted(os.listdir(folders[0])) == ["file00.txt", "file01.txt"]
