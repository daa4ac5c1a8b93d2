"""Climate selections passed into weather generation."""
from dataclasses import dataclass
from enum import IntEnum
from typing import Dict, Optional


class Climate(IntEnum):
    COLD = 0
    TEMPERATE = 1
    HOT = 2


class Humidity(IntEnum):
    BARREN = 0
    MODEST = 1
    VERDANT = 2


class Season(IntEnum):
    SPRING = 0
    SUMMER = 1
    FALL = 2
    WINTER = 3


class IncompleteParametersError(Exception):
    """Raised when climate, humidity or season is missing."""
    pass


@dataclass(frozen=True)
class ClimateParameters:
    """The climate/humidity/season triple selected by the operator."""
    climate: Optional[Climate] = None
    humidity: Optional[Humidity] = None
    season: Optional[Season] = None

    @classmethod
    def from_values(cls, climate, humidity, season) -> "ClimateParameters":
        """
        Build parameters from stored values, dropping anything unrecognised.

        Args:
            climate: Climate value (int or enum) or None
            humidity: Humidity value (int or enum) or None
            season: Season value (int or enum) or None
        """
        return cls(
            climate=_coerce(Climate, climate),
            humidity=_coerce(Humidity, humidity),
            season=_coerce(Season, season),
        )

    def is_complete(self) -> bool:
        return self.climate is not None and self.humidity is not None and self.season is not None

    def require_complete(self) -> None:
        if not self.is_complete():
            missing = [name for name in ("climate", "humidity", "season") if getattr(self, name) is None]
            raise IncompleteParametersError(f"Missing climate parameters: {', '.join(missing)}")

    def merged_with(self, fallback: "ClimateParameters") -> "ClimateParameters":
        """Fill any missing member from fallback."""
        return ClimateParameters(
            climate=self.climate if self.climate is not None else fallback.climate,
            humidity=self.humidity if self.humidity is not None else fallback.humidity,
            season=self.season if self.season is not None else fallback.season,
        )


def _coerce(enum_type, value):
    if value is None or isinstance(value, bool):
        return None
    try:
        return enum_type(int(value))
    except (TypeError, ValueError):
        return None


DEFAULT_PARAMETERS = ClimateParameters(Climate.COLD, Humidity.MODEST, Season.SPRING)


@dataclass(frozen=True)
class BiomeMapping:
    climate: Climate
    humidity: Humidity


# Biome presets set climate and humidity together; season stays as selected
BIOME_MAPPINGS: Dict[str, BiomeMapping] = {
    "tundra": BiomeMapping(Climate.COLD, Humidity.BARREN),
    "taiga": BiomeMapping(Climate.COLD, Humidity.MODEST),
    "glacier": BiomeMapping(Climate.COLD, Humidity.VERDANT),
    "grassland": BiomeMapping(Climate.TEMPERATE, Humidity.BARREN),
    "forest": BiomeMapping(Climate.TEMPERATE, Humidity.MODEST),
    "swamp": BiomeMapping(Climate.TEMPERATE, Humidity.VERDANT),
    "desert": BiomeMapping(Climate.HOT, Humidity.BARREN),
    "savanna": BiomeMapping(Climate.HOT, Humidity.MODEST),
    "jungle": BiomeMapping(Climate.HOT, Humidity.VERDANT),
}
