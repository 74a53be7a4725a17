import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.comments.schemas import CommentCreate, CommentListResponse, CommentResponse
from app.api.comments.service import CommentService
from app.core.utils import parse_int
from app.database.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/comments", tags=["comments"])


def get_comment_service(db: Session = Depends(get_db)) -> CommentService:
    return CommentService(db)


@router.get("", response_model=CommentListResponse)
async def get_comments(
        anime_id: Optional[str] = Query(None, alias="animeId"),
        episode: Optional[str] = Query(None),
        comment_service: CommentService = Depends(get_comment_service)
):
    """Episode comments, newest first"""
    if not anime_id or not episode:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing animeId or episode")
    try:
        comments = comment_service.get_comments(parse_int(anime_id), parse_int(episode))
    except SQLAlchemyError as e:
        logger.error(f"Database error: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch comments")
    return {"comments": comments}


@router.post("", response_model=CommentResponse)
async def add_comment(
        data: CommentCreate,
        comment_service: CommentService = Depends(get_comment_service)
):
    try:
        comment = comment_service.add_comment(data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError as e:
        logger.error(f"Database error: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save comment")
    return {"comment": comment}
