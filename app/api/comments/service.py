from typing import List, Optional

from sqlalchemy import desc
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from app.api.comments.models import Comment
from app.api.comments.schemas import CommentCreate
from app.core.utils import is_blank, parse_int

MAX_MESSAGE_LENGTH = 500


class CommentService:
    def __init__(self, db: Session):
        self.db = db

    def get_comments(self, anime_id: Optional[int], episode_number: Optional[int]) -> List[Comment]:
        # Unparseable filters match nothing
        if anime_id is None or episode_number is None:
            return []
        return (
            self.db.query(Comment)
            .filter(Comment.anime_id == anime_id, Comment.episode_number == episode_number)
            .order_by(desc(Comment.created_at), desc(Comment.id))
            .all()
        )

    def add_comment(self, data: CommentCreate) -> Comment:
        if any(is_blank(v) for v in (data.username, data.message, data.anime_id, data.episode_number)):
            raise ValueError("Missing required fields")

        anime_id = parse_int(data.anime_id)
        episode_number = parse_int(data.episode_number)
        if anime_id is None or episode_number is None or not data.username.strip():
            raise ValueError("Missing required fields")

        if not data.message.strip() or len(data.message) > MAX_MESSAGE_LENGTH:
            raise ValueError("Message must be between 1 and 500 characters")

        comment = Comment(
            username=data.username.strip(),
            message=data.message.strip(),
            anime_id=anime_id,
            episode_number=episode_number,
        )
        self.db.add(comment)
        try:
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        self.db.refresh(comment)
        return comment
