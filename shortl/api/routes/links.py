"""Link API endpoints: shortening URLs and reading link statistics."""

from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.ext.asyncio import AsyncSession

from shortl.api import schemas
from shortl.api.dependencies import get_link_service
from shortl.db.session import get_db
from shortl.services.exceptions import (
    BadRequestError,
    InvalidURLError,
    LinkNotFoundError,
    StoreUnavailableError,
    TokenCollisionError,
)
from shortl.services.links import LinkService

router = APIRouter(tags=["links"])

INVALID_URL_MESSAGE = "Invalid URL: only absolute http and https links can be shortened"
WRONG_PARAMETERS_MESSAGE = "Wrong parameters sent"
POST_ONLY_MESSAGE = "Only POST requests allowed"
NOT_FOUND_MESSAGE = "No shortened link matches the given parameters"
COLLISION_MESSAGE = "Could not create a unique short link, please try again"
SERVER_ERROR_MESSAGE = "An unknown server error occurred, please try again"


@router.post(
    "/shorten",
    response_model=schemas.ShortenResponse,
    status_code=status.HTTP_200_OK,
    responses={
        400: {"description": "Invalid URL"},
        500: {"description": "Token collision or store failure, the request may be retried"},
    },
)
async def shorten_url(
    body: schemas.ShortenRequest,
    db: AsyncSession = Depends(get_db),
    link_service: LinkService = Depends(get_link_service),
):
    try:
        link = await link_service.shorten(db, body.url)
    except InvalidURLError:
        raise HTTPException(status_code=400, detail=INVALID_URL_MESSAGE)
    except TokenCollisionError:
        raise HTTPException(status_code=500, detail=COLLISION_MESSAGE)
    except StoreUnavailableError:
        raise HTTPException(status_code=500, detail=SERVER_ERROR_MESSAGE)
    return schemas.ShortenResponse(shortl=link.short_token)


@router.api_route(
    "/shorten",
    methods=["GET", "PUT", "PATCH", "DELETE"],
    include_in_schema=False,
)
async def shorten_url_wrong_method():
    """Reject anything but POST before touching the store."""
    raise HTTPException(
        status_code=status.HTTP_405_METHOD_NOT_ALLOWED,
        detail=POST_ONLY_MESSAGE,
        headers={"Allow": "POST"},
    )


@router.get(
    "/stats",
    response_model=schemas.StatsResponse,
    responses={
        400: {"description": "Neither url nor shortl was given"},
        404: {"description": "No link matches"},
    },
)
async def get_link_stats(
    url: Optional[str] = Query(None, description="Long URL to look up, takes precedence over shortl"),
    shortl: Optional[str] = Query(None, description="Short token to look up"),
    db: AsyncSession = Depends(get_db),
    link_service: LinkService = Depends(get_link_service),
):
    try:
        link = await link_service.get_stats(db, long_url=url, short_token=shortl)
    except BadRequestError:
        raise HTTPException(status_code=400, detail=WRONG_PARAMETERS_MESSAGE)
    except LinkNotFoundError:
        raise HTTPException(status_code=404, detail=NOT_FOUND_MESSAGE)
    except StoreUnavailableError:
        raise HTTPException(status_code=500, detail=SERVER_ERROR_MESSAGE)
    return schemas.StatsResponse.from_link(link)
