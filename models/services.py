# models/services.py - Service catalog models
from pydantic import BaseModel, Field, HttpUrl, field_validator
from typing import List, Optional


class CreateServiceRequest(BaseModel):
    name: str
    description: Optional[str] = None
    price: float = Field(..., gt=0)
    duration: int = Field(..., gt=0, description="Duration in minutes")
    providerId: str
    category: str
    imageUrl: Optional[HttpUrl] = None
    availableDays: Optional[List[str]] = None
    availableTimes: Optional[List[str]] = None


class UpdateServiceRequest(BaseModel):
    """Partial update; optional catalog fields may be cleared with null"""
    name: Optional[str] = None
    description: Optional[str] = None
    price: Optional[float] = Field(None, gt=0)
    duration: Optional[int] = Field(None, gt=0)
    category: Optional[str] = None
    imageUrl: Optional[HttpUrl] = None
    availableDays: Optional[List[str]] = None
    availableTimes: Optional[List[str]] = None

    @field_validator('name', 'price', 'duration', 'category')
    @classmethod
    def validate_required_fields(cls, v, info):
        if v is None:
            raise ValueError(f'{info.field_name} cannot be cleared')
        return v
