import io
from unittest import mock

import pytest

from rutkit.bench import Record


def _timed_record(stamps):
    record = Record()
    with mock.patch("time.perf_counter", side_effect=stamps):
        for _ in range(len(stamps) // 2):
            record.beg()
            record.end()
    return record


def test_durations_in_milliseconds():
    record = _timed_record([1.0, 1.5, 2.0, 2.25])
    assert record.records == [500.0, 250.0]


def test_average_is_mean_of_records():
    record = _timed_record([1.0, 1.5, 2.0, 2.25])
    assert record.average() == 375.0


def test_log_output():
    record = _timed_record([1.0, 1.5, 2.0, 2.25])
    out = io.StringIO()
    record.log(out)
    assert out.getvalue() == "500ms\n250ms\nAvg:375ms\n"


def test_end_returns_duration():
    record = Record()
    with mock.patch("time.perf_counter", side_effect=[3.0, 3.5]):
        record.beg()
        assert record.end() == 500.0
    assert record.records == [500.0]


def test_real_timing_is_non_negative():
    record = Record()
    record.beg()
    record.end()
    assert len(record.records) == 1
    assert record.records[0] >= 0.0


def test_end_without_beg_raises():
    with pytest.raises(RuntimeError):
        Record().end()


def test_empty_average_is_nan():
    record = Record()
    assert record.records == []
    assert str(record.average()) == "nan"