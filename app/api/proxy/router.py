from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query, status

from app.api.proxy.service import ImageProxyService, StreamProxyService

router = APIRouter(prefix="/api", tags=["proxy"])


@router.get("/proxy-image")
async def proxy_image(url: Optional[str] = Query(None), service: ImageProxyService = Depends(ImageProxyService)):
    """Image passthrough, bundled JPEG on any failure"""
    if not url:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing URL")
    return await service.fetch(url)


@router.get("/proxy/stream")
async def proxy_stream(
        url: Optional[str] = Query(None),
        user_agent: Optional[str] = Header(None),
        range_header: Optional[str] = Header(None, alias="range"),
        service: StreamProxyService = Depends(StreamProxyService)
):
    """HLS playlists and segments with hotlink headers"""
    if not url:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing URL")
    return await service.fetch(url, service.build_headers(user_agent, range_header))
