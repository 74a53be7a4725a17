from sqlalchemy import Column, Integer, Text, DateTime, Index, UniqueConstraint, CheckConstraint
from sqlalchemy.sql import func

from app.database.database import Base


class Rating(Base):
    """
    Episode ratings, one per user per episode
    """
    __tablename__ = "ratings"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(Text, nullable=False)
    rating = Column(Integer, nullable=False)
    anime_id = Column(Integer, nullable=False)
    episode_number = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    # Upsert conflict target
    __table_args__ = (
        UniqueConstraint('username', 'anime_id', 'episode_number', name='uq_ratings_user_episode'),
        CheckConstraint('rating BETWEEN 1 AND 5', name='ck_ratings_range'),
        Index('idx_ratings_episode', 'anime_id', 'episode_number'),
    )
