import logging

from fastapi import APIRouter, Body, Depends

from sportscast.api.deps import get_forecast_service
from sportscast.core.errors import InputError
from sportscast.models.forecast import ForecastRequest, ForecastResponse
from sportscast.services.forecast_service import ForecastService

logger = logging.getLogger(__name__)

router = APIRouter()


@router.post("/forecast", response_model=ForecastResponse)
async def post_forecast(
    payload: ForecastRequest | None = Body(None),
    svc: ForecastService = Depends(get_forecast_service),
):
    location = ((payload.location if payload else None) or "").strip()
    if not location:
        # stop here: no model call without a location
        raise InputError()

    logger.info("Forecast requested for %r", location)
    return await svc.generate(location)
