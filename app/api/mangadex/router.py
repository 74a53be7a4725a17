from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.mangadex.service import MangaDexService

router = APIRouter(prefix="/api/mangadex", tags=["mangadex"])


@router.get("/search")
async def search(query: Optional[str] = Query(None), service: MangaDexService = Depends(MangaDexService)):
    if not query:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Query parameter is required")
    return await service.search(query)


@router.get("/chapters")
async def chapters(
        manga_id: Optional[str] = Query(None, alias="mangaId"),
        service: MangaDexService = Depends(MangaDexService)
):
    if not manga_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="mangaId parameter is required")
    return await service.chapters(manga_id)
