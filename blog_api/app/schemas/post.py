"""
Pydantic models for blog posts.

``PostCreate`` and ``PostUpdate`` describe the partial payloads
clients may send; ``PostRead`` is the stored and returned record.
Field names follow the JSON used by the frontend (``fullContent`` is
camel case).  Unknown keys in a payload are ignored, so a client can
never set ``id`` or ``timestamp`` through the request body.
"""

from typing import List, Optional

from pydantic import BaseModel, Field, field_validator


class PostImage(BaseModel):
    """An illustration attached to a post."""

    url: str = Field(..., example="https://placehold.co/600x400")
    prompt: str = Field(..., example="Angular 17 logo concept")


class PostBase(BaseModel):
    title: Optional[str] = Field(None, example="First Blog Post")
    snippet: Optional[str] = Field(None, example="A short introduction to my blog.")
    fullContent: Optional[str] = Field(None, example="This is the full content of the post.")
    author: Optional[str] = Field(None, example="Sourabh Madane")
    date: Optional[str] = Field(None, example="2023-03-15")
    images: List[PostImage] = Field(default_factory=list)

    model_config = {
        "extra": "ignore",
    }

    @field_validator("images", mode="before")
    @classmethod
    def null_images_to_empty(cls, v):
        # ``"images": null`` means "no images", on create as on update.
        return [] if v is None else v


class PostCreate(PostBase):
    """Schema for creating a post.

    Every field is optional; ``id`` and ``timestamp`` are assigned by
    the store.
    """
    pass


class PostUpdate(BaseModel):
    """Schema for updating a post.

    All fields are optional; only fields present in the request body
    are applied (``model_dump(exclude_unset=True)``).
    """

    title: Optional[str] = None
    snippet: Optional[str] = None
    fullContent: Optional[str] = None
    author: Optional[str] = None
    date: Optional[str] = None
    images: Optional[List[PostImage]] = None

    model_config = {
        "extra": "ignore",
    }


class PostRead(PostBase):
    """Schema for a stored post as returned by the API."""

    id: str = Field(..., example="post_1678886400000")
    timestamp: int = Field(..., example=1678886400000)


class MessageResponse(BaseModel):
    """Body of the 404 responses of the posts endpoints."""

    message: str
