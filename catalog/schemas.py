"""
Pydantic schemas for the catalog routes.
"""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, Field, HttpUrl, field_validator

MIN_YEAR = 1890


class Genre(str, Enum):
    ACTION = "Action"
    COMEDY = "Comedy"
    DRAMA = "Drama"
    FANTASY = "Fantasy"
    HORROR = "Horror"
    MYSTERY = "Mystery"
    ROMANCE = "Romance"
    THRILLER = "Thriller"
    WESTERN = "Western"


def _strip_all(values: List[str]) -> List[str]:
    stripped = [v.strip() for v in values]
    if any(not v for v in stripped):
        raise ValueError("entries must be non-empty")
    return stripped


class ActorIn(BaseModel):
    name: str = Field(..., min_length=1, max_length=255)
    bio: Optional[str] = Field(None, min_length=1)
    avatar: Optional[HttpUrl] = None

    @field_validator("name", "bio")
    @classmethod
    def _not_blank(cls, value: Optional[str]) -> Optional[str]:
        if value is not None and not value.strip():
            raise ValueError("must not be blank")
        return value.strip() if value is not None else None


class ActorOut(BaseModel):
    id: str
    name: str
    bio: Optional[str] = None
    avatar: Optional[str] = None


class MovieIn(BaseModel):
    title: str = Field(..., min_length=1, max_length=255)
    year: int = Field(..., ge=MIN_YEAR)
    genres: List[Genre] = Field(..., min_length=1)
    directors: List[str] = Field(..., min_length=1)
    actors: List[str] = Field(..., min_length=1)
    producer: str = Field(..., min_length=1, max_length=255)
    plot: Optional[str] = Field(None, min_length=1)
    poster: Optional[HttpUrl] = None

    @field_validator("title", "producer")
    @classmethod
    def _not_blank(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("must not be blank")
        return value.strip()

    @field_validator("directors", "actors")
    @classmethod
    def _entries_not_blank(cls, values: List[str]) -> List[str]:
        return _strip_all(values)


class MovieOut(BaseModel):
    id: str
    title: str
    year: int
    genres: List[str]
    directors: List[str]
    actors: List[str]
    producer: str
    plot: Optional[str] = None
    poster: Optional[str] = None


class CreatedResponse(BaseModel):
    message: str
    id: str
