"""URL shortening endpoint."""

from fastapi import APIRouter, Depends, HTTPException, status
from loguru import logger

from shortlink.api import schemas
from shortlink.api.dependencies import get_shortener_service
from shortlink.core.exceptions import (
    EntropyError,
    InvalidInputError,
    StorageError,
)
from shortlink.services.shortener import ShortenerService

router = APIRouter(tags=["shortener"])


@router.post(
    "/s",
    response_model=schemas.ShortenResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"model": schemas.ErrorResponse, "description": "Invalid request"},
        500: {"model": schemas.ErrorResponse, "description": "Error saving URL"},
    },
    summary="Create short URL",
)
async def create_short_url(
    url_data: schemas.ShortenRequest,
    shortener_service: ShortenerService = Depends(get_shortener_service),
):
    try:
        result = await shortener_service.shorten(url_data.long_url)
    except InvalidInputError as e:
        raise HTTPException(status_code=400, detail="Invalid request") from e
    except (StorageError, EntropyError) as e:
        logger.error("Error saving URL", error=str(e), error_type=type(e).__name__)
        raise HTTPException(status_code=500, detail="Error saving URL") from e
    return schemas.ShortenResponse(short_url=result.short_url)
