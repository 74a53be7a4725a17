import logging
from typing import Any
from urllib.parse import quote

import httpx
from fastapi import Depends, HTTPException, status

from app.core.config import settings
from app.core.http import get_http_client

logger = logging.getLogger(__name__)


class AnimePaheService:
    def __init__(self, client: httpx.AsyncClient = Depends(get_http_client)):
        self.client = client
        self.base_url = settings.ANIMEPAHE_API_URL

    async def _get(self, url: str, error: str) -> Any:
        try:
            res = await self.client.get(url)
            if res.is_error:
                raise ValueError(f"API responded with status: {res.status_code}")
            return res.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"AnimePahe error: {str(e)}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=error)

    async def search(self, query: str) -> Any:
        return await self._get(
            f"{self.base_url}/api/search?q={quote(query, safe='')}",
            "Failed to search AnimePahe",
        )

    async def episodes(self, session: str, page: str = "1") -> Any:
        """Episode list of a series, oldest first"""
        return await self._get(
            f"{self.base_url}/api/{session}/releases?sort=episode_asc&page={page}",
            "Failed to fetch episode list",
        )
