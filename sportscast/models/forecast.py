from dataclasses import dataclass
from typing import Any, Dict, Optional, Union

from pydantic import BaseModel, ConfigDict, Field, StrictStr

FORECAST_DAYS = ("day1", "day2", "day3", "day4", "day5")


class ForecastRequest(BaseModel):
    location: Optional[str] = Field(None, description="Place to forecast, e.g. 'Seattle'")


class ForecastSchema(BaseModel):
    """A JSON object with the forecast for the next 5 days"""

    # the prompt also asks for date/day-of-week keys; they ride along untouched
    model_config = ConfigDict(extra="allow")

    day1: StrictStr = Field(..., description="Play-by-play commentary for today")
    day2: StrictStr = Field(..., description="Play-by-play commentary for tomorrow")
    day3: StrictStr = Field(..., description="Play-by-play commentary for day 3")
    day4: StrictStr = Field(..., description="Play-by-play commentary for day 4")
    day5: StrictStr = Field(..., description="Play-by-play commentary for day 5")


class ForecastResponse(BaseModel):
    result: ForecastSchema


@dataclass(frozen=True)
class RawText:
    """Unparsed text straight from the model."""
    text: str


@dataclass(frozen=True)
class RawStructured:
    """A reply the provider already decoded into an object."""
    data: Dict[str, Any]


RawCompletion = Union[RawText, RawStructured]
