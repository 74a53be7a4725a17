from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class CommentCreate(BaseModel):
    """New comment, camelCase body as sent by the frontend"""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: Optional[str] = Field(None, description="Author name")
    message: Optional[str] = Field(None, description="Comment text, 1-500 chars")
    anime_id: Optional[Union[int, float, str]] = Field(None, description="AniList anime ID")
    episode_number: Optional[Union[int, float, str]] = Field(None, description="Episode number")


class CommentItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    message: str
    anime_id: int
    episode_number: int
    created_at: datetime


class CommentListResponse(BaseModel):
    comments: List[CommentItem]


class CommentResponse(BaseModel):
    comment: CommentItem
