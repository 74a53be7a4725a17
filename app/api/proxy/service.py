import io
import logging
import re
from pathlib import Path
from typing import Dict, Optional
from urllib.parse import quote

import httpx
from fastapi import Depends, Response
from fastapi.responses import PlainTextResponse, StreamingResponse

from app.core.config import settings
from app.core.http import get_http_client

logger = logging.getLogger(__name__)

STREAM_PATH = "/api/proxy/stream"
PLAYLIST_TYPE = "application/vnd.apple.mpegurl"
DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)
CORS_HEADERS = {
    "Access-Control-Allow-Origin": "*",
    "Access-Control-Allow-Headers": "*",
    "Access-Control-Allow-Methods": "GET, OPTIONS",
}

_KEY_URI = re.compile(r'URI="(.*?)"')
# Characters encodeURIComponent leaves as is
URI_COMPONENT_SAFE = "!'()*"


def url_path(url: str) -> str:
    return url.split("?", 1)[0]


def url_extension(url: str) -> str:
    name = url_path(url).rsplit("/", 1)[-1]
    return name.rsplit(".", 1)[-1] if "." in name else ""


def segment_content_type(url: str) -> str:
    """
    Content type by extension.
    Some hosts disguise TS segments as segment-N.jpg.
    """
    path = url_path(url)
    if path.endswith(".m3u8"):
        return PLAYLIST_TYPE
    if path.endswith(".ts"):
        return "video/mp2t"
    if path.endswith(".m4s"):
        return "video/iso.segment"
    if path.endswith(".key"):
        return "application/octet-stream"
    if path.endswith(".jpg"):
        return "video/mp2t" if "segment-" in url else "image/jpeg"
    if path.endswith(".png"):
        return "image/png"
    return "application/octet-stream"


def proxied_url(url: str) -> str:
    return f"{STREAM_PATH}?url={quote(url, safe=URI_COMPONENT_SAFE)}"


def rewrite_playlist(text: str, base_path: str, is_master: bool) -> str:
    """Points every playlist entry (and key URI of media playlists) back at the stream proxy"""

    def absolute(ref: str) -> str:
        return ref if ref.startswith("http") else base_path + ref

    lines = []
    for line in text.split("\n"):
        stripped = line.strip()
        if line.startswith("#"):
            if not is_master:
                line = _KEY_URI.sub(lambda m: f'URI="{proxied_url(absolute(m.group(1)))}"', line)
            lines.append(line)
        elif not stripped:
            lines.append(line)
        else:
            lines.append(proxied_url(absolute(stripped)))
    return "\n".join(lines)


class ImageProxyService:
    def __init__(self, client: httpx.AsyncClient = Depends(get_http_client)):
        self.client = client

    @staticmethod
    def fallback() -> Response:
        content = Path(settings.FALLBACK_IMAGE_PATH).read_bytes()
        return Response(content=content, media_type="image/jpeg")

    async def fetch(self, url: str) -> Response:
        """
        Relays an arbitrary image URL.
        No SSRF, size or content type checks; callers must validate URLs themselves.
        """
        try:
            res = await self.client.get(url, headers={"Cache-Control": "no-cache"})
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Proxy image error: {str(e)}")
            return self.fallback()

        if res.is_error or not res.content:
            return self.fallback()

        return StreamingResponse(
            io.BytesIO(res.content),
            media_type=res.headers.get("Content-Type") or "image/jpeg",
        )


class StreamProxyService:
    def __init__(self, client: httpx.AsyncClient = Depends(get_http_client)):
        self.client = client

    @staticmethod
    def build_headers(user_agent: Optional[str], range_header: Optional[str]) -> Dict[str, str]:
        headers = {
            "Referer": settings.STREAM_REFERER,
            "Origin": settings.STREAM_REFERER,
            "User-Agent": user_agent or DEFAULT_USER_AGENT,
        }
        if range_header:
            headers["Range"] = range_header
        return headers

    async def fetch(self, url: str, headers: Dict[str, str]) -> Response:
        if url_extension(url) == "m3u8":
            return await self.playlist(url, headers)
        return await self.segment(url, headers)

    async def segment(self, url: str, headers: Dict[str, str]) -> Response:
        try:
            res = await self.client.get(url, headers=headers)
        except httpx.TimeoutException:
            logger.error(f"Segment fetch timed out: {url}")
            return PlainTextResponse("Request timeout", status_code=504)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Segment fetch failed: {url} {str(e)}")
            return PlainTextResponse("Segment fetch failed", status_code=500)

        if res.is_error:
            logger.error(f"Segment fetch failed: {url} HTTP {res.status_code}")
            return PlainTextResponse("Segment fetch failed", status_code=500)

        response_headers = {**CORS_HEADERS, "Cache-Control": "public, max-age=300", "Accept-Ranges": "bytes"}
        if "Content-Range" in res.headers:
            response_headers["Content-Range"] = res.headers["Content-Range"]

        return Response(
            content=res.content,
            status_code=res.status_code,
            headers=response_headers,
            media_type=segment_content_type(url),
        )

    async def playlist(self, url: str, headers: Dict[str, str]) -> Response:
        # Playlists are always fetched whole
        headers = {k: v for k, v in headers.items() if k != "Range"}
        try:
            res = None
            is_master = False
            final_url = url

            if "/uwu.m3u8" in url:
                master_url = url.replace("/uwu.m3u8", "/master.m3u8")
                try:
                    master_res = await self.client.get(master_url, headers=headers)
                    if master_res.is_success:
                        res, final_url, is_master = master_res, master_url, True
                    else:
                        logger.info("Master playlist not found, falling back to uwu.m3u8")
                except httpx.HTTPError as e:
                    logger.info(f"Master playlist fetch failed, falling back to uwu.m3u8: {str(e)}")

            if res is None:
                res = await self.client.get(final_url, headers=headers)
                res.raise_for_status()

            base_path = final_url.rsplit("/", 1)[0] + "/"
            rewritten = rewrite_playlist(res.text, base_path, is_master)
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            logger.error(f"Playlist fetch failed: {str(e)}")
            return PlainTextResponse("Playlist proxy failed", status_code=500)

        return Response(
            content=rewritten,
            headers={**CORS_HEADERS, "Cache-Control": "public, max-age=30"},
            media_type=PLAYLIST_TYPE,
        )
