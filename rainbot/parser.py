"""Detection of rain in a weather forecast response."""

from __future__ import annotations

from typing import Any, Mapping, Optional


def is_rain(forecast: Optional[Mapping[str, Any]], boundaries: tuple[int, int]) -> bool:
    """Return whether any forecast entry within the inclusive time range predicts rain."""
    start, end = boundaries
    entries = (forecast or {}).get("list") or []
    return any(
        weather.get("main") == "Rain"
        for item in entries
        if start <= item["dt"] <= end
        for weather in (item.get("weather") or [])
    )