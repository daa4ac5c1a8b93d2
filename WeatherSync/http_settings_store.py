"""Settings store backed by a shared key-value HTTP service."""
import logging
from typing import Any, Optional

import requests

from settings_store import SettingsStoreBase, StoreReadError, StoreWriteError


class HttpSettingsStore(SettingsStoreBase):
    """
    Client for a key-value service shared by all instances.

    Each key lives at {base_url}/settings/{key}: GET returns the JSON value
    (404 when the key was never set), PUT replaces it with the request body.
    """

    def __init__(self, base_url: str, timeout: int = 10, token: Optional[str] = None):
        """
        Initialize the store client.

        Args:
            base_url: Root URL of the key-value service
            timeout: HTTP request timeout in seconds
            token: Optional bearer token sent with every request
        """
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.token = token

    def _url(self, key: str) -> str:
        return f"{self.base_url}/settings/{key}"

    def _headers(self) -> dict:
        headers = {"Accept": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def get(self, key: str) -> Optional[Any]:
        url = self._url(key)
        try:
            logging.debug(f"Reading setting '{key}' from {url}")
            response = requests.get(url, headers=self._headers(), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error reading setting '{key}': {e}")
            raise StoreReadError(f"Network error: {str(e)}")

        if response.status_code == 404:
            logging.debug(f"Setting '{key}' not found")
            return None
        if not response.ok:
            logging.error(f"Reading setting '{key}' failed with status {response.status_code}")
            raise StoreReadError(f"HTTP {response.status_code}: {response.text[:200]}")

        try:
            return response.json()
        except ValueError as e:
            logging.error(f"Setting '{key}' is not valid JSON: {e}")
            raise StoreReadError(f"Failed to parse setting '{key}': {str(e)}")

    def set(self, key: str, value: Any) -> None:
        url = self._url(key)
        try:
            logging.debug(f"Writing setting '{key}' to {url}")
            response = requests.put(url, json=value, headers=self._headers(), timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            logging.error(f"Network error writing setting '{key}': {e}")
            raise StoreWriteError(f"Network error: {str(e)}")
        except (TypeError, ValueError) as e:
            raise StoreWriteError(f"Setting '{key}' is not JSON serializable: {str(e)}")

        if not response.ok:
            logging.error(f"Writing setting '{key}' failed with status {response.status_code}")
            raise StoreWriteError(f"HTTP {response.status_code}: {response.text[:200]}")
