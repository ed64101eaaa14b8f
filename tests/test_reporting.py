"""Tests for the progress observers."""

import logging

from heatedplate.config import PlateConfig
from heatedplate.controller.reporting import HistoryRecorder, PowerOfTwoReporter
from heatedplate.controller.solver import solve


def test_history_recorder_keeps_every_pass():
    recorder = HistoryRecorder()
    for iteration, change in [(1, 4.0), (2, 2.0), (3, 1.0)]:
        recorder(iteration, change)

    assert recorder.history == [(1, 4.0), (2, 2.0), (3, 1.0)]
    assert recorder.iterations == [1, 2, 3]
    assert recorder.changes == [4.0, 2.0, 1.0]


def test_reports_only_powers_of_two(caplog):
    reporter = PowerOfTwoReporter()
    with caplog.at_level(logging.INFO, logger="heatedplate"):
        for iteration in range(1, 21):
            reporter(iteration, 1.0 / iteration)

    assert [it for it, _ in reporter.reported] == [1, 2, 4, 8, 16]
    messages = [r.getMessage() for r in caplog.records if r.name == "heatedplate.controller.reporting"]
    assert len(messages) == 5
    assert messages[0].split() == ["1", "1"]
    assert messages[-1].split() == ["16", "0.0625"]


def test_custom_logger_and_level(caplog):
    log = logging.getLogger("heatedplate.tests.progress")
    reporter = PowerOfTwoReporter(log=log, level=logging.DEBUG)
    with caplog.at_level(logging.DEBUG, logger="heatedplate.tests.progress"):
        reporter(1, 0.5)

    assert [(r.name, r.levelno) for r in caplog.records] == [("heatedplate.tests.progress", logging.DEBUG)]


def test_reporter_keeps_only_reported_passes():
    reporter = PowerOfTwoReporter()
    for iteration in range(1, 100_001):
        reporter(iteration, 1.0)

    # 1, 2, 4, ..., 65536
    assert len(reporter.reported) == 17
    assert not hasattr(reporter, "history")
    assert not isinstance(reporter, HistoryRecorder)


def test_reporter_as_solver_callback():
    reporter = PowerOfTwoReporter()
    result = solve(PlateConfig(epsilon=1e-6, rows=12, cols=12), callback=reporter)

    expected = [it for it in (2 ** k for k in range(32)) if it <= result.iterations]
    assert [it for it, _ in reporter.reported] == expected
    assert len(reporter.reported) == result.iterations.bit_length()
