"""Pydantic models for posts."""

from datetime import datetime
from typing import Optional

from pydantic import BaseModel, Field, ConfigDict

from ..pagination import PaginatedResponse


class PostBase(BaseModel):
    """Base post model with common fields."""

    title: str = Field(
        ...,
        min_length=1,
        max_length=200,
        description="Post title",
        examples=["Cursor pagination in practice"]
    )
    content: str = Field(default="", description="Post body")
    published: bool = Field(default=False, description="Whether the post is published")


class PostCreate(PostBase):
    """Model for creating a new post."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "title": "My First Post",
                "content": "Offset pagination skips rows when data changes underneath it.",
                "published": False
            }
        }
    )


class PostUpdate(BaseModel):
    """Model for updating a post (partial updates)."""

    title: Optional[str] = Field(default=None, min_length=1, max_length=200, description="Updated title")
    content: Optional[str] = Field(default=None, description="Updated body")
    published: Optional[bool] = Field(default=None, description="Updated publication flag")

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "published": True
            }
        }
    )

    def changes(self) -> dict:
        """Fields the client actually set."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class Post(PostBase):
    """Complete post model with all fields."""

    id: str = Field(description="Post ID (UUID string, also the pagination key)")
    created_at: datetime = Field(description="Creation timestamp")
    updated_at: datetime = Field(description="Last update timestamp")

    model_config = ConfigDict(
        from_attributes=True,
        json_schema_extra={
            "example": {
                "id": "550e8400-e29b-41d4-a716-446655440000",
                "title": "Meeting Notes",
                "content": "Important meeting notes from today",
                "published": True,
                "created_at": "2024-01-01T12:00:00Z",
                "updated_at": "2024-01-01T12:30:00Z"
            }
        }
    )


class PostListResponse(PaginatedResponse[Post]):
    """Response model for listing posts."""

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "data": [
                    {
                        "id": "0b6f0a7e-0c57-4f38-9a1f-4c3f7f0f2b11",
                        "title": "Post 1",
                        "content": "First post",
                        "published": True,
                        "created_at": "2024-01-01T12:00:00Z",
                        "updated_at": "2024-01-01T12:00:00Z"
                    }
                ],
                "pagination": {
                    "nextCursor": "eyJ2IjoiMGI2ZjBhN2UtMGM1Ny00ZjM4LTlhMWYtNGMzZjdmMGYyYjExIiwiZCI6ImZvcndhcmQifQ",
                    "prevCursor": None,
                    "hasNextPage": True,
                    "hasPrevPage": False,
                    "count": 1
                }
            }
        }
    )
