from typing import Any, Callable, Dict, List, Optional

from sqlalchemy.dialects import postgresql
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.ratings.models import Rating
from app.api.ratings.schemas import RatingCreate
from app.core.utils import is_blank, parse_int

MIN_RATING = 1
MAX_RATING = 5

# Dialect insert construct with on_conflict_do_update
UpsertInsert = Callable[..., Any]


def average_rating(values: List[int]) -> float:
    """Mean rounded to one decimal, 0 when there are no ratings"""
    if not values:
        return 0
    # Half-up like the frontend does, not banker's rounding
    return int(sum(values) / len(values) * 10 + 0.5) / 10


class RatingService:
    def __init__(self, db: Session, insert: UpsertInsert = postgresql.insert):
        self.db = db
        self.insert = insert

    def get_ratings(self, anime_id: Optional[int], episode_number: Optional[int]) -> Dict[str, Any]:
        ratings: List[Rating] = []
        if anime_id is not None and episode_number is not None:
            ratings = (
                self.db.query(Rating)
                .filter(Rating.anime_id == anime_id, Rating.episode_number == episode_number)
                .all()
            )
        return {
            "ratings": ratings,
            "averageRating": average_rating([r.rating for r in ratings]),
            "totalRatings": len(ratings),
        }

    def rate(self, data: RatingCreate) -> Rating:
        """
        Insert or replace the user's rating of an episode.
        Conflict target is (username, anime_id, episode_number).
        """
        if any(is_blank(v) for v in (data.username, data.rating, data.anime_id, data.episode_number)):
            raise ValueError("Missing required fields")

        anime_id = parse_int(data.anime_id)
        episode_number = parse_int(data.episode_number)
        username = data.username.strip()
        if anime_id is None or episode_number is None or not username:
            raise ValueError("Missing required fields")

        rating = parse_int(data.rating)
        if rating is None or rating < MIN_RATING or rating > MAX_RATING:
            raise ValueError("Rating must be between 1 and 5")

        stmt = self.insert(Rating).values(
            username=username,
            rating=rating,
            anime_id=anime_id,
            episode_number=episode_number,
        )
        stmt = stmt.on_conflict_do_update(
            index_elements=[Rating.username, Rating.anime_id, Rating.episode_number],
            set_={"rating": stmt.excluded.rating},
        )
        try:
            self.db.execute(stmt)
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        return (
            self.db.query(Rating)
            .filter(
                Rating.username == username,
                Rating.anime_id == anime_id,
                Rating.episode_number == episode_number,
            )
            .one()
        )
