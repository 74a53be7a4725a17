from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.animepahe.service import AnimePaheService

router = APIRouter(prefix="/api/animepahe", tags=["animepahe"])


@router.get("/search")
async def search(q: Optional[str] = Query(None), service: AnimePaheService = Depends(AnimePaheService)):
    if not q:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing search query")
    return await service.search(q)


@router.get("/episodes")
async def episodes(
        session: Optional[str] = Query(None),
        page: Optional[str] = Query(None),
        service: AnimePaheService = Depends(AnimePaheService)
):
    if not session:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing session ID")
    return await service.episodes(session, page or "1")
