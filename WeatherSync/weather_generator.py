"""Weather generator abstraction - allows swapping the content algorithm."""
from abc import ABC, abstractmethod
from typing import Any, Dict, Optional

from climate import Climate, Humidity, Season


class WeatherGeneratorBase(ABC):
    """Abstract base class for weather content generators."""

    @abstractmethod
    def generate(
        self,
        climate: Climate,
        humidity: Humidity,
        season: Season,
        previous: Optional[Dict[str, Any]]
    ) -> Dict[str, Any]:
        """
        Generate weather content for one calendar day.

        Args:
            climate: Selected climate
            humidity: Selected humidity
            season: Selected season
            previous: Content of the previous record, for continuity (None on first run)

        Returns:
            New weather content

        Raises:
            WeatherGeneratorError: If the generator fails to produce content
        """
        pass


class WeatherGeneratorError(Exception):
    """Exception raised when a weather generator fails."""
    pass
