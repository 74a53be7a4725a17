from sqlalchemy import Column, Integer, String, Text, DateTime, Index
from sqlalchemy.sql import func

from app.database.database import Base


class Comment(Base):
    """
    Episode comments
    """
    __tablename__ = "comments"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(Text, nullable=False)
    message = Column(String(500), nullable=False)
    anime_id = Column(Integer, nullable=False)
    episode_number = Column(Integer, nullable=False)

    created_at = Column(DateTime(timezone=True), server_default=func.now())

    __table_args__ = (
        Index('idx_comments_episode_created', 'anime_id', 'episode_number', 'created_at'),
    )
