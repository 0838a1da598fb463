"""URL redirection endpoint."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from loguru import logger
from starlette.responses import RedirectResponse

from shortlink.api import schemas
from shortlink.api.dependencies import get_shortener_service
from shortlink.core.exceptions import NotFoundError, StorageError
from shortlink.core.logging import log_url_access
from shortlink.services.shortener import ShortenerService

router = APIRouter(tags=["redirect"])


@router.get(
    "/{token}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={
        404: {"model": schemas.ErrorResponse, "description": "URL not found"},
    },
    summary="Redirect to the original URL",
)
async def redirect_to_target(
    request: Request,
    token: str,
    shortener_service: ShortenerService = Depends(get_shortener_service),
):
    try:
        target = await shortener_service.resolve(token)
    except NotFoundError as e:
        raise HTTPException(status_code=404, detail="URL not found") from e
    except StorageError as e:
        logger.error("Error resolving URL", token=token, error=str(e))
        raise HTTPException(status_code=500, detail="Error resolving URL") from e

    log_url_access(
        token=token,
        ip_address=request.client.host if request.client else "unknown",
        user_agent=request.headers.get("user-agent", ""),
    )
    return RedirectResponse(url=target, status_code=status.HTTP_302_FOUND)
