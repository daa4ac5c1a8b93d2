"""Tests for the HTTP settings store."""
import pytest
import requests
from unittest.mock import Mock, patch
from http_settings_store import HttpSettingsStore
from settings_store import SettingKeys, StoreReadError, StoreWriteError


@pytest.fixture
def store():
    return HttpSettingsStore("http://store.local/api/", timeout=5, token="secret")


def make_response(status_code, json_data=None, text=""):
    response = Mock()
    response.status_code = status_code
    response.ok = 200 <= status_code < 300
    response.text = text
    if isinstance(json_data, Exception):
        response.json.side_effect = json_data
    else:
        response.json.return_value = json_data
    return response


def test_get_success(store):
    with patch('http_settings_store.requests.get') as mock_get:
        mock_get.return_value = make_response(200, {"content": {"temperature": 50}, "date": None})

        value = store.get(SettingKeys.LAST_WEATHER_DATA)

        assert value["content"]["temperature"] == 50
        args, kwargs = mock_get.call_args
        assert args[0] == "http://store.local/api/settings/lastWeatherData"
        assert kwargs["timeout"] == 5
        assert kwargs["headers"]["Authorization"] == "Bearer secret"


def test_get_not_found_is_none(store):
    """404 means the key was never set."""
    with patch('http_settings_store.requests.get') as mock_get:
        mock_get.return_value = make_response(404, text="not found")
        assert store.get(SettingKeys.LAST_WEATHER_DATA) is None


def test_get_server_error_raises(store):
    """Other failures must not look like an empty store."""
    with patch('http_settings_store.requests.get') as mock_get:
        mock_get.return_value = make_response(500, text="boom")
        with pytest.raises(StoreReadError, match="500"):
            store.get(SettingKeys.LAST_WEATHER_DATA)


def test_get_network_error_raises(store):
    with patch('http_settings_store.requests.get') as mock_get:
        mock_get.side_effect = requests.exceptions.ConnectionError("refused")
        with pytest.raises(StoreReadError, match="Network error"):
            store.get(SettingKeys.CLIMATE)


def test_get_invalid_json_raises(store):
    with patch('http_settings_store.requests.get') as mock_get:
        mock_get.return_value = make_response(200, ValueError("bad json"))
        with pytest.raises(StoreReadError):
            store.get(SettingKeys.CLIMATE)


def test_set_success(store):
    with patch('http_settings_store.requests.put') as mock_put:
        mock_put.return_value = make_response(204)

        store.set(SettingKeys.SEASON, 3)

        args, kwargs = mock_put.call_args
        assert args[0] == "http://store.local/api/settings/season"
        assert kwargs["json"] == 3


def test_set_rejected_raises(store):
    with patch('http_settings_store.requests.put') as mock_put:
        mock_put.return_value = make_response(403, text="forbidden")
        with pytest.raises(StoreWriteError, match="403"):
            store.set(SettingKeys.SEASON, 3)


def test_set_network_error_raises(store):
    with patch('http_settings_store.requests.put') as mock_put:
        mock_put.side_effect = requests.exceptions.Timeout("slow")
        with pytest.raises(StoreWriteError):
            store.set(SettingKeys.SEASON, 3)


def test_no_token_no_auth_header():
    store = HttpSettingsStore("http://store.local")
    with patch('http_settings_store.requests.get') as mock_get:
        mock_get.return_value = make_response(404)
        store.get(SettingKeys.BIOME)
        assert "Authorization" not in mock_get.call_args[1]["headers"]
