"""Tests for the weather store adapter."""
import pytest
from climate import Climate, ClimateParameters, Humidity, Season
from settings_store import MemorySettingsStore, SettingKeys, StoreReadError
from time_snapshot import TimeSnapshot
from weather_record import WeatherRecord
from weather_store import DisplayOptions, WeatherStore, WindowPosition


@pytest.fixture
def settings():
    return MemorySettingsStore()


@pytest.fixture
def store(settings):
    return WeatherStore(settings)


def test_read_empty_store(store):
    assert store.read() is None


def test_write_then_read(store, settings):
    record = WeatherRecord(
        content={"temperature": 40},
        snapshot=TimeSnapshot(second=0, minute=0, day=4, month=5, year=1000),
    )
    store.write(record)

    assert settings.get(SettingKeys.LAST_WEATHER_DATA)["date"]["day"] == 4
    assert store.read() == record


def test_malformed_record_is_read_error(store, settings):
    settings.set(SettingKeys.LAST_WEATHER_DATA, "garbage")
    with pytest.raises(StoreReadError):
        store.read()


def test_parameters_round_trip(store, settings):
    assert store.read_parameters() == ClimateParameters()

    store.write_parameters(ClimateParameters(Climate.HOT, Humidity.VERDANT, Season.SUMMER))

    assert settings.get(SettingKeys.CLIMATE) == 2
    assert store.read_parameters() == ClimateParameters(Climate.HOT, Humidity.VERDANT, Season.SUMMER)


def test_write_parameters_skips_missing(store, settings):
    settings.set(SettingKeys.SEASON, 3)
    store.write_parameters(ClimateParameters(climate=Climate.COLD))
    assert settings.get(SettingKeys.SEASON) == 3
    assert settings.get(SettingKeys.HUMIDITY) is None


def test_biome(store):
    assert store.read_biome() is None
    store.write_biome("desert")
    assert store.read_biome() == "desert"


def test_unknown_biome_is_ignored(store, settings):
    settings.set(SettingKeys.BIOME, "moon")
    assert store.read_biome() is None


def test_window_position_default(store):
    assert store.read_window_position() == WindowPosition(left=100, top=100)


def test_window_position_round_trip(store):
    store.write_window_position(WindowPosition(left=20, top=30))
    assert store.read_window_position() == WindowPosition(left=20, top=30)


def test_window_position_malformed(store, settings):
    settings.set(SettingKeys.WINDOW_POSITION, {"left": "far", "top": 1})
    assert store.read_window_position() == WindowPosition()


def test_display_options(store, settings):
    assert store.read_display_options() == DisplayOptions(use_celsius=False, dialog_display=True)
    settings.set(SettingKeys.USE_CELSIUS, True)
    settings.set(SettingKeys.DIALOG_DISPLAY, False)
    assert store.read_display_options() == DisplayOptions(use_celsius=True, dialog_display=False)
