"""Narrow adapter between the weather engine and the shared settings store."""
import logging
from dataclasses import dataclass
from typing import Optional

from climate import BIOME_MAPPINGS, ClimateParameters
from settings_store import SettingKeys, SettingsStoreBase, StoreReadError
from weather_record import WeatherRecord


@dataclass(frozen=True)
class WindowPosition:
    left: int = 100
    top: int = 100


@dataclass(frozen=True)
class DisplayOptions:
    use_celsius: bool = False
    dialog_display: bool = True


class WeatherStore:
    """
    Reads and writes the weather record and its related settings.

    Nothing is cached here: every read goes to the store, and every write
    either completes or raises before returning.
    """

    def __init__(self, settings: SettingsStoreBase):
        self.settings = settings

    def read(self) -> Optional[WeatherRecord]:
        """
        Read the current weather record.

        Returns:
            WeatherRecord, or None if no record has ever been written

        Raises:
            StoreReadError: If the store failed or holds a malformed record
        """
        raw = self.settings.get(SettingKeys.LAST_WEATHER_DATA)
        if raw is None:
            return None
        try:
            return WeatherRecord.from_dict(raw)
        except ValueError as e:
            logging.error(f"Stored weather record is malformed: {e}")
            raise StoreReadError(f"Malformed weather record: {e}")

    def write(self, record: WeatherRecord) -> None:
        """
        Write the whole record as a single value.

        Raises:
            StoreWriteError: If the store rejected the write
        """
        self.settings.set(SettingKeys.LAST_WEATHER_DATA, record.to_dict())
        logging.debug(f"Committed weather record: {record.to_dict()}")

    def read_parameters(self) -> ClimateParameters:
        return ClimateParameters.from_values(
            self.settings.get(SettingKeys.CLIMATE),
            self.settings.get(SettingKeys.HUMIDITY),
            self.settings.get(SettingKeys.SEASON),
        )

    def write_parameters(self, params: ClimateParameters) -> None:
        """Write whichever members of params are set."""
        if params.climate is not None:
            self.settings.set(SettingKeys.CLIMATE, int(params.climate))
        if params.humidity is not None:
            self.settings.set(SettingKeys.HUMIDITY, int(params.humidity))
        if params.season is not None:
            self.settings.set(SettingKeys.SEASON, int(params.season))

    def read_biome(self) -> Optional[str]:
        biome = self.settings.get(SettingKeys.BIOME)
        return biome if biome in BIOME_MAPPINGS else None

    def write_biome(self, biome: str) -> None:
        self.settings.set(SettingKeys.BIOME, biome)

    def read_window_position(self) -> WindowPosition:
        raw = self.settings.get(SettingKeys.WINDOW_POSITION)
        if not isinstance(raw, dict):
            return WindowPosition()
        try:
            return WindowPosition(left=int(raw.get("left", 100)), top=int(raw.get("top", 100)))
        except (TypeError, ValueError):
            logging.warning(f"Ignoring malformed window position: {raw}")
            return WindowPosition()

    def write_window_position(self, position: WindowPosition) -> None:
        self.settings.set(SettingKeys.WINDOW_POSITION, {"top": position.top, "left": position.left})

    def read_display_options(self) -> DisplayOptions:
        use_celsius = self.settings.get(SettingKeys.USE_CELSIUS)
        dialog_display = self.settings.get(SettingKeys.DIALOG_DISPLAY)
        return DisplayOptions(
            use_celsius=bool(use_celsius) if use_celsius is not None else False,
            dialog_display=bool(dialog_display) if dialog_display is not None else True,
        )
