import httpx
from datetime import date
from typing import List, Dict, Any, Optional

from bistro.core.config import settings
from bistro.domain.weather.value_objects import WeatherAdvisory

class ForecastError(Exception):
    pass

class OpenWeatherAPIClient:
    """Client for the OpenWeatherMap 5 day / 3 hour forecast."""

    def __init__(
        self,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        default_city: Optional[str] = None,
        timeout: Optional[float] = None,
        transport: Optional[httpx.AsyncBaseTransport] = None
    ):
        self.api_key = api_key or settings.OPENWEATHER_API_KEY
        self.default_city = default_city or settings.WEATHER_DEFAULT_CITY
        self.client = httpx.AsyncClient(
            base_url=base_url or settings.OPENWEATHER_BASE_URL,
            timeout=timeout or settings.FORECAST_TIMEOUT_SECONDS,
            transport=transport
        )

    async def close(self):
        await self.client.aclose()

    async def get_forecast_entries(self, lat: Optional[float] = None, lon: Optional[float] = None) -> List[Dict[str, Any]]:
        """Fetches the raw forecast list, by coordinates when given, else for the default city."""
        if not self.api_key:
            raise ForecastError("OPENWEATHER_API_KEY is not configured")

        params: Dict[str, Any] = {"appid": self.api_key, "units": "metric"}
        if lat is not None and lon is not None:
            params.update({"lat": lat, "lon": lon})
        else:
            params["q"] = self.default_city

        try:
            response = await self.client.get("/forecast", params=params)
        except httpx.RequestError as e:
            raise ForecastError(f"Connection error: {str(e)}")

        if response.status_code != 200:
            raise ForecastError(f"Failed to fetch forecast ({response.status_code}): {response.text}")

        try:
            data = response.json()
        except ValueError as e:
            raise ForecastError(f"Invalid forecast payload: {str(e)}")

        if not isinstance(data, dict):
            raise ForecastError(f"Unexpected forecast payload type: {type(data).__name__}")

        entries = data.get("list")
        if not isinstance(entries, list):
            raise ForecastError("Forecast payload has no 'list' of entries")
        return entries

    async def get_forecast_for_date(
        self,
        target: date,
        lat: Optional[float] = None,
        lon: Optional[float] = None
    ) -> WeatherAdvisory:
        """
        Returns the first 3-hour entry whose timestamp falls on the target date.

        Dates outside the forecast horizon give a not-found advisory, not an error.
        """
        entries = await self.get_forecast_entries(lat=lat, lon=lon)
        return select_forecast_entry(entries, target)

def select_forecast_entry(entries: List[Dict[str, Any]], target: date) -> WeatherAdvisory:
    day = target.isoformat()
    for entry in entries:
        if day not in str(entry.get("dt_txt", "")):
            continue
        try:
            condition = entry["weather"][0]["description"]
            temperature = float(entry["main"]["temp"])
        except (KeyError, IndexError, TypeError, ValueError) as e:
            raise ForecastError(f"Malformed forecast entry for {day}: {str(e)}")
        return WeatherAdvisory(condition=condition, temperature_c=temperature, found=True)
    return WeatherAdvisory.not_found()
