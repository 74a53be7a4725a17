from datetime import datetime
from typing import List, Optional, Union

from pydantic import BaseModel, ConfigDict, Field
from pydantic.alias_generators import to_camel


class RatingCreate(BaseModel):
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)

    username: Optional[str] = Field(None, description="Author name")
    rating: Optional[Union[int, float, str]] = Field(None, description="Score 1-5")
    anime_id: Optional[Union[int, float, str]] = Field(None, description="AniList anime ID")
    episode_number: Optional[Union[int, float, str]] = Field(None, description="Episode number")


class RatingItem(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    rating: int
    anime_id: int
    episode_number: int
    created_at: datetime


class RatingSummary(BaseModel):
    """All ratings of an episode with the aggregate"""
    ratings: List[RatingItem]
    averageRating: float
    totalRatings: int


class RatingResponse(BaseModel):
    rating: RatingItem
