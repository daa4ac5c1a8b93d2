"""Persisted key-value store abstraction - allows swapping the backing store."""
import copy
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional


class SettingKeys:
    """Keys shared by every instance reading or writing the store."""
    LAST_WEATHER_DATA = "lastWeatherData"
    CLIMATE = "climate"
    HUMIDITY = "humidity"
    SEASON = "season"
    BIOME = "biome"
    WINDOW_POSITION = "windowPosition"
    USE_CELSIUS = "useCelsius"
    DIALOG_DISPLAY = "dialogDisplay"


class StoreReadError(Exception):
    """Raised when the store fails to read for any reason other than a missing key."""
    pass


class StoreWriteError(Exception):
    """Raised when the store rejects a write."""
    pass


class SettingsStoreBase(ABC):
    """Abstract base class for the shared settings store."""

    @abstractmethod
    def get(self, key: str) -> Optional[Any]:
        """
        Read a value.

        Args:
            key: One of SettingKeys

        Returns:
            The stored value, or None if the key has never been set

        Raises:
            StoreReadError: If the store could not be read
        """
        pass

    @abstractmethod
    def set(self, key: str, value: Any) -> None:
        """
        Write a value as one indivisible unit.

        Raises:
            StoreWriteError: If the store rejected the write
        """
        pass


class MemorySettingsStore(SettingsStoreBase):
    """In-process store, shared by reference between engines in the same process."""

    def __init__(self, initial: Optional[Dict[str, Any]] = None):
        self._values: Dict[str, Any] = copy.deepcopy(initial) if initial else {}

    def get(self, key: str) -> Optional[Any]:
        return copy.deepcopy(self._values.get(key))

    def set(self, key: str, value: Any) -> None:
        self._values[key] = copy.deepcopy(value)
