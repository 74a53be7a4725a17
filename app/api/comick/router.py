from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status

from app.api.comick.service import ComickService

router = APIRouter(prefix="/api/comick", tags=["comick"])


@router.get("/search")
async def search(query: Optional[str] = Query(None), service: ComickService = Depends(ComickService)):
    if not query:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing query")
    return await service.search(query)


@router.get("/chapters")
async def chapters(
        hid: Optional[str] = Query(None),
        limit: str = Query("60"),
        page: str = Query("1"),
        chap_order: str = Query("0", alias="chap-order"),
        date_order: Optional[str] = Query(None, alias="date-order"),
        lang: Optional[str] = Query(None),
        chap: Optional[str] = Query(None),
        service: ComickService = Depends(ComickService)
):
    if not hid:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing hid")

    params = {"limit": limit, "page": page, "chap-order": chap_order}
    # Optional filters are only sent when set
    if date_order:
        params["date-order"] = date_order
    if lang:
        params["lang"] = lang
    if chap:
        params["chap"] = chap
    return await service.chapters(hid, params)


@router.get("/images")
async def images(
        chapter_id: Optional[str] = Query(None, alias="chapterId"),
        service: ComickService = Depends(ComickService)
):
    if not chapter_id:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing chapterId")
    return await service.images(chapter_id)
