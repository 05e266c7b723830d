from fastapi import Depends, Request

from sportscast.core.context import AppContext
from sportscast.services.forecast_service import ForecastService


def get_context(request: Request) -> AppContext:
    return request.app.state.context


def get_forecast_service(ctx: AppContext = Depends(get_context)) -> ForecastService:
    return ForecastService(
        prompts=ctx.prompts,
        client=ctx.client,
        parser=ctx.parser,
    )
