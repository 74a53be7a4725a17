from typing import AsyncIterator

import httpx

from app.core.config import settings


async def get_http_client() -> AsyncIterator[httpx.AsyncClient]:
    """
    One outbound client per request.
    Closed once the response is sent.
    """
    async with httpx.AsyncClient(timeout=settings.HTTP_TIMEOUT, follow_redirects=True) as client:
        yield client
