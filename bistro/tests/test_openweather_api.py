from datetime import date

import httpx
import pytest

from bistro.infrastructure.external.openweather_api import ForecastError, OpenWeatherAPIClient

FORECAST_PAYLOAD = {
    "cod": "200",
    "list": [
        {"dt_txt": "2024-06-01 18:00:00", "main": {"temp": 33.1}, "weather": [{"description": "clear sky"}]},
        {"dt_txt": "2024-06-02 00:00:00", "main": {"temp": 27.4}, "weather": [{"description": "light rain"}]},
        {"dt_txt": "2024-06-02 03:00:00", "main": {"temp": 29.0}, "weather": [{"description": "few clouds"}]},
    ],
}

def make_client(handler, api_key="test-key") -> OpenWeatherAPIClient:
    return OpenWeatherAPIClient(
        api_key=api_key,
        base_url="https://weather.test/data/2.5",
        default_city="Trichy",
        transport=httpx.MockTransport(handler),
    )

@pytest.mark.asyncio
async def test_first_entry_on_the_target_date_wins():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=FORECAST_PAYLOAD)

    client = make_client(handler)
    try:
        advisory = await client.get_forecast_for_date(date(2024, 6, 2))
    finally:
        await client.close()

    assert advisory.found
    assert advisory.condition == "light rain"
    assert advisory.temperature_c == 27.4
    assert seen[0].url.params["q"] == "Trichy"
    assert seen[0].url.params["units"] == "metric"

@pytest.mark.asyncio
async def test_coordinates_replace_default_city():
    seen = []

    def handler(request: httpx.Request) -> httpx.Response:
        seen.append(request)
        return httpx.Response(200, json=FORECAST_PAYLOAD)

    client = make_client(handler)
    try:
        await client.get_forecast_for_date(date(2024, 6, 1), lat=10.8, lon=78.7)
    finally:
        await client.close()

    params = seen[0].url.params
    assert params["lat"] == "10.8"
    assert params["lon"] == "78.7"
    assert "q" not in params

@pytest.mark.asyncio
async def test_date_beyond_horizon_is_not_found():
    client = make_client(lambda request: httpx.Response(200, json=FORECAST_PAYLOAD))
    try:
        advisory = await client.get_forecast_for_date(date(2024, 6, 20))
    finally:
        await client.close()

    assert advisory.found is False

@pytest.mark.asyncio
async def test_http_error_raises_forecast_error():
    client = make_client(lambda request: httpx.Response(404, json={"cod": "404", "message": "city not found"}))
    try:
        with pytest.raises(ForecastError):
            await client.get_forecast_for_date(date(2024, 6, 2))
    finally:
        await client.close()

@pytest.mark.asyncio
async def test_connection_error_raises_forecast_error():
    def handler(request: httpx.Request) -> httpx.Response:
        raise httpx.ConnectError("unreachable", request=request)

    client = make_client(handler)
    try:
        with pytest.raises(ForecastError):
            await client.get_forecast_for_date(date(2024, 6, 2))
    finally:
        await client.close()

@pytest.mark.asyncio
async def test_missing_api_key_raises_before_any_request():
    def handler(request: httpx.Request) -> httpx.Response:
        raise AssertionError("no request expected")

    client = make_client(handler, api_key=None)
    client.api_key = None
    try:
        with pytest.raises(ForecastError):
            await client.get_forecast_for_date(date(2024, 6, 2))
    finally:
        await client.close()

@pytest.mark.asyncio
@pytest.mark.parametrize("body", [b"[]", b"null", b"\"forecast\""])
async def test_non_object_payload_raises_forecast_error(body):
    client = make_client(lambda request: httpx.Response(200, content=body))
    try:
        with pytest.raises(ForecastError):
            await client.get_forecast_for_date(date(2024, 6, 2))
    finally:
        await client.close()
