"""Weather generator that delegates to a remote generation service."""
import logging
from typing import Any, Dict, Optional

import requests

from climate import Climate, Humidity, Season
from weather_generator import WeatherGeneratorBase, WeatherGeneratorError


class HttpWeatherGenerator(WeatherGeneratorBase):
    """
    Weather generator calling a generation service over HTTP.

    The service receives the climate selections and the previous content as
    a JSON body and answers with the new content object.
    """

    def __init__(self, url: str, timeout: int = 10):
        """
        Initialize the generator client.

        Args:
            url: Generation endpoint (POST)
            timeout: HTTP request timeout in seconds
        """
        self.url = url
        self.timeout = timeout

    def generate(
        self,
        climate: Climate,
        humidity: Humidity,
        season: Season,
        previous: Optional[Dict[str, Any]]
    ) -> Dict[str, Any]:
        payload = {
            "climate": int(climate),
            "humidity": int(humidity),
            "season": int(season),
            "previous": previous,
        }

        try:
            logging.info(f"Requesting weather generation: {self.url}")
            logging.debug(f"Generation parameters: climate={climate.name} humidity={humidity.name} season={season.name}")

            response = requests.post(self.url, json=payload, timeout=self.timeout)

            logging.info(f"Generation response status: {response.status_code}")
            if not response.ok:
                self._handle_error_response(response)

            content = response.json()
            if not isinstance(content, dict):
                raise WeatherGeneratorError(
                    f"Generator returned {type(content).__name__}, expected an object"
                )

            logging.debug(f"Generated content keys: {list(content.keys())}")
            return content

        except requests.exceptions.RequestException as e:
            logging.error(f"Network error during generation request: {e}")
            raise WeatherGeneratorError(f"Network error: {str(e)}")
        except ValueError as e:
            logging.error(f"Failed to parse generation response: {e}", exc_info=True)
            raise WeatherGeneratorError(f"Failed to parse response: {str(e)}")

    def _handle_error_response(self, response: requests.Response) -> None:
        """Raise a WeatherGeneratorError describing a failed response."""
        try:
            error_data = response.json()
        except ValueError:
            logging.error(f"Non-JSON error response: HTTP {response.status_code}, body: {response.text[:500]}")
            raise WeatherGeneratorError(f"HTTP {response.status_code}: {response.text[:200]}")

        message = error_data.get("message", "Unknown error") if isinstance(error_data, dict) else str(error_data)
        logging.error(f"Generator error response: {error_data}")
        raise WeatherGeneratorError(f"Generator error {response.status_code}: {message}")
