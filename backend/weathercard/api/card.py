"""GET /api/forecast - Rendered weekly forecast card (SVG)."""

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import PlainTextResponse, Response

from ..errors import InvalidInput, UpstreamError
from ..services.forecast_card import CardRequest, ForecastCardService

logger = logging.getLogger(__name__)
router = APIRouter()

SVG_HEADERS = {
    "Cache-Control": "public, max-age=31536000",
    "Access-Control-Allow-Origin": "*",
}


def get_card_service(request: Request) -> ForecastCardService:
    """Dependency returning the service built by ``create_app``."""
    return request.app.state.card_service


@router.get("/forecast")
async def get_forecast_card(
    zip_code: Optional[str] = Query(None, alias="zip"),
    issue: Optional[str] = None,
    width: Optional[str] = None,
    height: Optional[str] = None,
    v: Optional[str] = None,
    service: ForecastCardService = Depends(get_card_service),
):
    """Return the forecast card for a postal code as ``image/svg+xml``."""
    try:
        card_request = CardRequest.from_query(
            service.config,
            zip_code=zip_code,
            issue=issue,
            width=width,
            height=height,
            version=v,
        )
        result = await service.get_card(card_request)
    except InvalidInput as e:
        logger.info("Rejected forecast request: %s", e)
        return PlainTextResponse(f"Error: {e}", status_code=500)
    except UpstreamError as e:
        logger.warning("Forecast request for %s failed: %s", zip_code, e)
        return PlainTextResponse(f"Error: {e}", status_code=500)

    return Response(
        content=result.svg,
        media_type="image/svg+xml",
        headers=SVG_HEADERS,
    )


@router.get("/health")
async def get_health(request: Request):
    """Report configured postal codes and scheduler state."""
    service: ForecastCardService = request.app.state.card_service
    scheduler = getattr(request.app.state, "scheduler", None)
    return {
        "status": "ok",
        "zip_codes": list(service.config.zip_codes),
        "scheduler": scheduler.stats if scheduler is not None else None,
    }
