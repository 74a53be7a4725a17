import logging
from typing import Optional

from fastapi import APIRouter, Depends, HTTPException, Query, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.ratings.schemas import RatingCreate, RatingResponse, RatingSummary
from app.api.ratings.service import RatingService
from app.core.utils import parse_int
from app.database.database import get_db

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/ratings", tags=["ratings"])


def get_rating_service(db: Session = Depends(get_db)) -> RatingService:
    return RatingService(db)


@router.get("", response_model=RatingSummary)
async def get_ratings(
        anime_id: Optional[str] = Query(None, alias="animeId"),
        episode: Optional[str] = Query(None),
        rating_service: RatingService = Depends(get_rating_service)
):
    """Episode ratings with average and count"""
    if not anime_id or not episode:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail="Missing animeId or episode")
    try:
        return rating_service.get_ratings(parse_int(anime_id), parse_int(episode))
    except SQLAlchemyError as e:
        logger.error(f"Database error: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to fetch ratings")


@router.post("", response_model=RatingResponse)
async def rate_episode(
        data: RatingCreate,
        rating_service: RatingService = Depends(get_rating_service)
):
    """Create or replace the user's rating"""
    try:
        rating = rating_service.rate(data)
    except ValueError as e:
        raise HTTPException(status_code=status.HTTP_400_BAD_REQUEST, detail=str(e))
    except SQLAlchemyError as e:
        logger.error(f"Database error: {str(e)}")
        raise HTTPException(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail="Failed to save rating")
    return {"rating": rating}
