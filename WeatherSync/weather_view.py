"""View data for the weather dialog - pure functions for testability."""
from typing import Any, Dict, Optional

from time_snapshot import TimeSnapshot, is_valid
from weather_record import WeatherRecord
from weather_store import DisplayOptions


def format_date(snapshot: Optional[TimeSnapshot]) -> str:
    """
    Format a snapshot as day/month/year.

    Returns:
        e.g. "1/1/1000", or empty string unless the snapshot is complete
    """
    if not is_valid(snapshot):
        return ""
    return f"{snapshot.day}/{snapshot.month}/{snapshot.year}"


def get_temperature(content: Dict[str, Any], use_celsius: bool) -> str:
    """
    Format the generated temperature.

    Generated content stores temperature in Fahrenheit.

    Args:
        content: Weather record content
        use_celsius: Convert to Celsius

    Returns:
        e.g. "72°F" or "22°C", or empty string if content has no temperature
    """
    temp = content.get("temperature")
    if isinstance(temp, bool) or not isinstance(temp, (int, float)):
        return ""
    if use_celsius:
        return f"{round((temp - 32) * 5 / 9)}°C"
    return f"{round(temp)}°F"


def get_description(content: Dict[str, Any]) -> str:
    description = content.get("description")
    return description if isinstance(description, str) else ""


def build_view(
    record: Optional[WeatherRecord],
    is_gm: bool,
    options: DisplayOptions,
    panel_open: bool = False
) -> Dict[str, Any]:
    """Fields the presentation layer needs to draw the weather dialog."""
    snapshot = record.snapshot if record is not None else None
    display = snapshot.display if snapshot is not None else {}

    return {
        "is_gm": is_gm,
        "display_date": display.get("date", ""),
        "formatted_date": format_date(snapshot),
        "formatted_time": display.get("time", ""),
        "weekday": snapshot.weekday if snapshot is not None else "",
        "current_temperature": get_temperature(record.content, options.use_celsius) if record else "",
        "current_description": get_description(record.content) if record else "",
        "weather_panel_open": panel_open,
        "hide_weather": not (is_gm or options.dialog_display),
    }
