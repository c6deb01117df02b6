"""Pydantic DTOs for likes, saved articles and per-user interaction status."""

from pydantic import BaseModel, Field


class LikeResponse(BaseModel):
    likes: int
    liked: bool
    message: str


class SaveArticleRequest(BaseModel):
    article_id: str = Field(..., min_length=1)


class SaveArticleResponse(BaseModel):
    saved: bool
    was_already_saved: bool
    message: str


class UnsaveArticleResponse(BaseModel):
    saved: bool
    was_saved: bool
    message: str


class InteractionStatusSchema(BaseModel):
    article_id: str
    liked: bool
    saved: bool

    model_config = {"from_attributes": True}


class InteractionStatusResponse(BaseModel):
    status: list[InteractionStatusSchema]
