import logging
from typing import Any
from urllib.parse import quote

import httpx
from fastapi import Depends, HTTPException, status

from app.core.config import settings
from app.core.http import get_http_client

logger = logging.getLogger(__name__)

SNIPPET_LENGTH = 200


class MangaDexService:
    def __init__(self, client: httpx.AsyncClient = Depends(get_http_client)):
        self.client = client
        self.base_url = settings.MANGADEX_API_URL
        self.headers = {"Accept": "application/json"}

    async def search(self, query: str) -> Any:
        url = (
            f"{self.base_url}/manga?title={quote(query, safe='')}&limit=10"
            "&includes[]=cover_art&includes[]=author&includes[]=artist"
        )
        try:
            res = await self.client.get(url, headers=self.headers)
            if res.is_error:
                raise ValueError(f"MangaDex API error: {res.status_code}")
            return res.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Error fetching from MangaDex API: {str(e)}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to search manga")

    async def chapters(self, manga_id: str) -> Any:
        """
        English chapter feed of a manga.
        MangaDex sometimes answers with a Cloudflare HTML page,
        which is reported as 502 with the head of the body.
        """
        url = f"{self.base_url}/manga/{manga_id}/feed?limit=100&order[chapter]=asc&translatedLanguage[]=en"
        try:
            res = await self.client.get(url, headers=self.headers)
        except httpx.HTTPError as e:
            logger.error(f"Error fetching chapters from MangaDex API: {str(e)}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch chapters")

        try:
            data = res.json()
        except ValueError:
            snippet = res.text[:SNIPPET_LENGTH]
            logger.error(f"Non-JSON from MangaDex: {snippet}")
            raise HTTPException(
                status_code=status.HTTP_502_BAD_GATEWAY,
                detail={"error": "MangaDex returned non-JSON response", "details": snippet},
            )

        if res.is_error:
            raise HTTPException(
                status_code=res.status_code,
                detail={"error": "MangaDex API error", "details": data},
            )
        return data
