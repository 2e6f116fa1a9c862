"""
Movie Pydantic Schemas
"""

import math
from datetime import datetime
from typing import Any, Mapping, Optional

from pydantic import BaseModel, ConfigDict, Field, computed_field, field_validator
from pydantic import ValidationError as PydanticValidationError

from movie_catalog.core.exceptions import ValidationError

THUMBNAIL_TRANSFORM = "w_300,h_450,c_fill"


def round_rating(value: float) -> float:
    """Round half-up to one decimal place"""
    return math.floor(value * 10 + 0.5) / 10


def thumbnail_url_for(image_url: Optional[str]) -> str:
    """Rewrite a hosted image URL to request the 300x450 fill-cropped variant.

    An empty URL gives an empty string; a URL without an ``/upload/``
    segment is returned unchanged.
    """
    if not image_url:
        return ""
    return image_url.replace("/upload/", f"/upload/{THUMBNAIL_TRANSFORM}/", 1)


class MovieFields(BaseModel):
    """Scalar movie fields submitted through the add and edit forms"""

    model_config = ConfigDict(str_strip_whitespace=True)

    title: str = Field(..., min_length=1, max_length=100)
    genre: str = Field(..., min_length=1, max_length=50)
    description: str = Field(..., min_length=1, max_length=500)
    rating: float = Field(..., ge=0.0, le=10.0, allow_inf_nan=False)
    release_year: int

    @field_validator("rating", mode="before")
    @classmethod
    def round_rating_field(cls, v: Any) -> Any:
        # Stored as a multiple of 0.1; the range is checked on the rounded value
        if isinstance(v, str):
            v = v.strip()
            if not v:
                return v
        if isinstance(v, bool):
            return v
        try:
            number = float(v)
        except (TypeError, ValueError):
            return v
        if math.isnan(number) or math.isinf(number):
            return number
        return round_rating(number)


class MovieImage(BaseModel):
    """Image fields of a movie record"""

    image_url: str = Field(..., min_length=1)
    media_public_id: Optional[str] = None


class MovieCreate(MovieFields, MovieImage):
    """Create movie schema"""


class Movie(MovieCreate):
    """Movie response schema"""

    id: str
    created_at: Optional[datetime] = None
    updated_at: Optional[datetime] = None

    model_config = ConfigDict(from_attributes=True)

    @computed_field
    @property
    def thumbnail_url(self) -> str:
        return thumbnail_url_for(self.image_url)


class AssistantSearchResult(BaseModel):
    """Assistant search response: the query and the model's answer as display lines"""

    query: str = ""
    lines: list[str] = Field(default_factory=list)


def _raise_validation_error(exc: PydanticValidationError) -> None:
    errors = [
        {"field": ".".join(str(part) for part in err["loc"]), "message": err["msg"]}
        for err in exc.errors()
    ]
    summary = "; ".join(f"{e['field']}: {e['message']}" for e in errors)
    raise ValidationError(f"Invalid movie fields: {summary}", errors=errors) from exc


def validate_movie_fields(data: Mapping[str, Any]) -> MovieFields:
    """Validate the scalar fields of a movie, raising ValidationError"""
    try:
        return MovieFields.model_validate(dict(data))
    except PydanticValidationError as exc:
        _raise_validation_error(exc)


def validate_movie(data: Mapping[str, Any]) -> MovieCreate:
    """Validate a complete movie record, raising ValidationError"""
    try:
        return MovieCreate.model_validate(dict(data))
    except PydanticValidationError as exc:
        _raise_validation_error(exc)


def validate_movie_image(data: Mapping[str, Any]) -> MovieImage:
    try:
        return MovieImage.model_validate(dict(data))
    except PydanticValidationError as exc:
        _raise_validation_error(exc)


__all__ = [
    "MovieFields",
    "MovieImage",
    "MovieCreate",
    "Movie",
    "AssistantSearchResult",
    "round_rating",
    "thumbnail_url_for",
    "validate_movie",
    "validate_movie_fields",
    "validate_movie_image",
]
