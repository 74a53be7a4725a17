import logging
from typing import Any, Dict
from urllib.parse import quote, urlencode

import httpx
from fastapi import Depends, HTTPException, status

from app.core.config import settings
from app.core.http import get_http_client

logger = logging.getLogger(__name__)


class ComickService:
    def __init__(self, client: httpx.AsyncClient = Depends(get_http_client)):
        self.client = client
        self.base_url = settings.COMICK_API_URL

    @staticmethod
    def _internal_error(e: Exception) -> HTTPException:
        return HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail={"error": "Internal server error", "message": str(e)},
        )

    async def search(self, query: str) -> Any:
        try:
            res = await self.client.get(f"{self.base_url}/api/v1.0/search?q={quote(query, safe='')}")
            if res.is_error:
                raise ValueError(f"Comick responded with status: {res.status_code}")
            return res.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Comick search error: {str(e)}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to search Comick")

    async def chapters(self, hid: str, params: Dict[str, str]) -> Any:
        """
        Chapter list of a comic.
        Comick reports missing comics as a JSON body with statusCode 500.
        """
        url = f"{self.base_url}/api/comic/{hid}/chapters?{urlencode(params)}"
        logger.info(f"Fetching from: {url}")
        try:
            res = await self.client.get(url)
            data = res.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Comick chapters error: {str(e)}")
            raise self._internal_error(e)

        if isinstance(data, dict) and data.get("statusCode") == 500:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Chapters not found on Comick.")
        if res.is_error:
            logger.error(f"Comick chapters error: status {res.status_code}")
            raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch chapters")
        return data

    async def images(self, chapter_id: str) -> Any:
        try:
            res = await self.client.get(f"{self.base_url}/api/chapter/{chapter_id}/get_images")
            data = res.json()
        except (httpx.HTTPError, ValueError) as e:
            logger.error(f"Comick images error: {str(e)}")
            raise self._internal_error(e)

        if not isinstance(data, list):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="No images returned")
        return data
