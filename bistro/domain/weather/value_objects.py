from typing import Any, Dict, Optional
from pydantic import BaseModel, ConfigDict, Field

class LocationHint(BaseModel):
    lat: float = Field(ge=-90, le=90)
    lon: float = Field(ge=-180, le=180)

class WeatherAdvisory(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    condition: Optional[str] = None
    temperature_c: Optional[float] = Field(default=None, alias="temperatureC")
    found: bool = False

    @classmethod
    def not_found(cls) -> "WeatherAdvisory":
        return cls(found=False)

    @property
    def rounded_temperature(self) -> Optional[int]:
        if self.temperature_c is None:
            return None
        return round(self.temperature_c)

    @property
    def is_rainy(self) -> bool:
        return bool(self.condition) and "rain" in self.condition.lower()

    def to_record(self) -> Dict[str, Any]:
        """Shape stored in a booking's weather_info column."""
        if not self.found:
            return {}
        return {"condition": self.condition, "temp": self.temperature_c}
