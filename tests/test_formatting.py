from datetime import date, datetime

import pytest

from smarthub.formatting import (
    answer_status,
    attempt_status_label,
    format_compact_time,
    format_countdown,
    format_file_size,
    format_score,
    question_type_label,
    score_level,
)
from smarthub.models import AttemptStatus, QuestionType


@pytest.mark.parametrize(
    "seconds,expected",
    [(0, "0m 0s"), (59, "0m 59s"), (1800, "30m 0s"), (3725, "1h 2m 5s"), (-4, "0m 0s")],
)
def test_format_countdown(seconds, expected):
    assert format_countdown(seconds) == expected


def test_format_score():
    assert format_score(None) == "Not graded"
    assert format_score(66.666) == "66.67%"
    assert format_score(100) == "100.00%"


@pytest.mark.parametrize("score,level", [(None, "neutral"), (95, "success"), (80, "success"), (60, "warning"), (59.9, "danger")])
def test_score_level(score, level):
    assert score_level(score) == level


def test_labels_fall_back_to_raw_value():
    assert attempt_status_label(AttemptStatus.COMPLETED) == "Completed"
    assert question_type_label(QuestionType.TRUE_FALSE) == "True/False"
    assert attempt_status_label("EXPIRED") == "EXPIRED"


def test_answer_status():
    assert answer_status(True) == "Correct"
    assert answer_status(False) == "Incorrect"
    assert answer_status(None) == "Not graded"


def test_format_compact_time():
    assert format_compact_time(None) == ""
    assert format_compact_time(date(2024, 3, 9)) == "9 March 2024"
    assert format_compact_time(datetime(2024, 3, 9, 14, 5)) == "9 March 14:05"
    assert format_compact_time("2024-03-09T14:05:00") == "9 March 14:05"
    assert format_compact_time("yesterday") == "yesterday"


def test_format_file_size():
    assert format_file_size(None) == ""
    assert format_file_size(512) == "512 B"
    assert format_file_size(2048) == "2.0 KB"
    assert format_file_size(5 * 1024 * 1024) == "5.0 MB"
