"""Tests for weather_record module."""
import pytest
from time_snapshot import TimeSnapshot
from weather_record import WeatherRecord


@pytest.fixture
def sample_record():
    return WeatherRecord(
        content={"temperature": 54, "description": "A light drizzle", "climate": 0},
        snapshot=TimeSnapshot(second=0, minute=0, day=1, month=1, year=1000),
    )


def test_to_dict_is_one_value(sample_record):
    data = sample_record.to_dict()
    assert set(data.keys()) == {"content", "date"}
    assert data["content"]["temperature"] == 54
    assert data["date"]["year"] == 1000


def test_from_dict_restores_record(sample_record):
    restored = WeatherRecord.from_dict(sample_record.to_dict())
    assert restored == sample_record


def test_from_dict_without_date():
    record = WeatherRecord.from_dict({"content": {"temperature": 70}, "date": None})
    assert record.snapshot is None
    assert record.content == {"temperature": 70}


@pytest.mark.parametrize("raw", ["text", 5, [], {"date": None}, {"content": "x"}])
def test_from_dict_rejects_malformed(raw):
    with pytest.raises(ValueError):
        WeatherRecord.from_dict(raw)


def test_with_snapshot_leaves_original_alone(sample_record):
    new_snapshot = TimeSnapshot(second=1, minute=1, day=2, month=1, year=1000)
    updated = sample_record.with_snapshot(new_snapshot)

    assert updated.snapshot is new_snapshot
    assert sample_record.snapshot.day == 1
    updated.content["temperature"] = 99
    assert sample_record.content["temperature"] == 54


def test_with_content_keeps_snapshot(sample_record):
    updated = sample_record.with_content({"temperature": 80})
    assert updated.snapshot is sample_record.snapshot
    assert updated.content == {"temperature": 80}
