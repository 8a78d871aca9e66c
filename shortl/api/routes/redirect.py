"""Short token redirection endpoint with view counting."""

from fastapi import APIRouter, Depends, HTTPException, Request, status
from loguru import logger
from sqlalchemy.ext.asyncio import AsyncSession
from starlette.responses import RedirectResponse

from shortl.api.dependencies import get_link_service
from shortl.core.access_log import log_link_access
from shortl.db.session import get_db
from shortl.middleware.logging import client_ip_of
from shortl.services.exceptions import LinkNotFoundError, StoreUnavailableError
from shortl.services.links import LinkService

router = APIRouter(tags=["redirect"])

UNKNOWN_TOKEN_MESSAGE = "This short link does not exist"
STORE_ERROR_MESSAGE = "An unknown error occurred. The database threw an error"


@router.get(
    "/{token}",
    response_class=RedirectResponse,
    status_code=status.HTTP_302_FOUND,
    responses={404: {"description": "Unknown token"}},
)
async def redirect_to_long_url(
    token: str,
    request: Request,
    db: AsyncSession = Depends(get_db),
    link_service: LinkService = Depends(get_link_service),
):
    """Redirect to the link's long URL; the view is counted in the same transaction."""
    try:
        long_url = await link_service.resolve_redirect(db, token)
    except LinkNotFoundError:
        raise HTTPException(status_code=404, detail=UNKNOWN_TOKEN_MESSAGE)
    except StoreUnavailableError:
        logger.warning("Redirect failed, store unavailable", token=token)
        raise HTTPException(status_code=500, detail=STORE_ERROR_MESSAGE)

    log_link_access(
        token=token,
        ip_address=client_ip_of(request),
        user_agent=request.headers.get("user-agent", ""),
        long_url=long_url,
    )
    return RedirectResponse(url=long_url, status_code=status.HTTP_302_FOUND)
