import logging

from fastapi import APIRouter, Depends, Request
from fastapi.responses import PlainTextResponse

from app.api.anilist.service import AniListService

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/anilist", tags=["anilist"])


@router.post("")
async def anilist_graphql(request: Request, service: AniListService = Depends(AniListService)):
    """GraphQL passthrough: {query, variables?}"""
    try:
        payload = await request.json()
    except ValueError as e:
        logger.error(f"AniList proxy error: {str(e)}")
        return PlainTextResponse("Internal error", status_code=500)
    return await service.query(payload)
