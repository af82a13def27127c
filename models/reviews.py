# models/reviews.py - Review submission models
from pydantic import BaseModel, Field, HttpUrl, field_validator
from typing import List, Optional


class CategoryRatings(BaseModel):
    cleanliness: Optional[int] = Field(None, ge=1, le=5)
    punctuality: Optional[int] = Field(None, ge=1, le=5)
    skill: Optional[int] = Field(None, ge=1, le=5)
    professionalism: Optional[int] = Field(None, ge=1, le=5)


class SubmitReviewRequest(BaseModel):
    bookingId: str
    lookerId: str
    providerId: str
    rating: int = Field(..., ge=1, le=5)
    text: Optional[str] = None
    images: Optional[List[HttpUrl]] = None
    categoryRatings: Optional[CategoryRatings] = None

    @field_validator('text')
    @classmethod
    def validate_text(cls, v):
        if v and len(v) > 2000:
            raise ValueError('Review text cannot exceed 2000 characters')
        return v
