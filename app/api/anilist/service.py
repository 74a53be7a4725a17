import logging
from typing import Any, Dict

import httpx
from fastapi import Depends, Response
from fastapi.responses import JSONResponse, PlainTextResponse

from app.core.config import settings
from app.core.http import get_http_client

logger = logging.getLogger(__name__)

CACHE_SECONDS = 3600


class AniListService:
    def __init__(self, client: httpx.AsyncClient = Depends(get_http_client)):
        self.client = client

    async def query(self, payload: Dict[str, Any]) -> Response:
        """
        Relays a GraphQL payload as is.
        Upstream errors keep their status and raw text body.
        """
        try:
            res = await self.client.post(
                settings.ANILIST_URL,
                json=payload,
                headers={"Content-Type": "application/json", "Accept": "application/json"},
            )
            if res.is_error:
                return PlainTextResponse(res.text or "AniList error", status_code=res.status_code)
            data = res.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"AniList proxy error: {str(e)}")
            return PlainTextResponse("Internal error", status_code=500)

        return JSONResponse(data, headers={"Cache-Control": f"public, max-age={CACHE_SECONDS}"})
