"""Tests for weather dialog view data."""
import pytest
from time_snapshot import TimeSnapshot
from weather_record import WeatherRecord
from weather_store import DisplayOptions
from weather_view import build_view, format_date, get_description, get_temperature


@pytest.fixture
def sample_record():
    return WeatherRecord(
        content={"temperature": 72, "description": "Warm and sunny"},
        snapshot=TimeSnapshot(
            second=0, minute=15, hour=9, day=12, month=3, year=1000,
            day_of_the_week=2, weekdays=["Sunday", "Monday", "Tuesday"],
            display={"date": "April 13, 1000", "time": "09:15:00"},
        ),
    )


def test_format_date():
    assert format_date(TimeSnapshot(second=0, minute=0, day=1, month=2, year=1000)) == "1/2/1000"
    assert format_date(None) == ""


def test_format_date_partial_snapshot():
    """A partially delivered date renders as nothing rather than None/1/1000."""
    assert format_date(TimeSnapshot(second=0, minute=0, day=None, month=1, year=1000)) == ""
    assert format_date(TimeSnapshot(day=1, month=1, year=1000)) == ""


def test_temperature_fahrenheit():
    assert get_temperature({"temperature": 72}, use_celsius=False) == "72°F"


def test_temperature_celsius():
    assert get_temperature({"temperature": 212}, use_celsius=True) == "100°C"
    assert get_temperature({"temperature": 32}, use_celsius=True) == "0°C"


def test_temperature_missing():
    assert get_temperature({}, use_celsius=False) == ""
    assert get_temperature({"temperature": "hot"}, use_celsius=True) == ""


def test_description():
    assert get_description({"description": "Fog"}) == "Fog"
    assert get_description({}) == ""


def test_build_view(sample_record):
    view = build_view(sample_record, is_gm=False, options=DisplayOptions(use_celsius=True))

    assert view["display_date"] == "April 13, 1000"
    assert view["formatted_date"] == "12/3/1000"
    assert view["formatted_time"] == "09:15:00"
    assert view["weekday"] == "Tuesday"
    assert view["current_temperature"] == "22°C"
    assert view["current_description"] == "Warm and sunny"
    assert view["hide_weather"] is False


def test_build_view_without_record():
    view = build_view(None, is_gm=True, options=DisplayOptions())
    assert view["formatted_date"] == ""
    assert view["current_temperature"] == ""
    assert view["weekday"] == ""


@pytest.mark.parametrize("is_gm,dialog_display,hidden", [
    (True, False, False),
    (True, True, False),
    (False, True, False),
    (False, False, True),
])
def test_hide_weather(sample_record, is_gm, dialog_display, hidden):
    """Weather is hidden from observers only when the dialog display setting is off."""
    view = build_view(sample_record, is_gm=is_gm, options=DisplayOptions(dialog_display=dialog_display))
    assert view["hide_weather"] is hidden
