# models/bookings.py - Booking request models
from pydantic import BaseModel, ConfigDict, field_validator
from datetime import datetime
from typing import List, Optional


class BookedService(BaseModel):
    serviceId: str
    location: Optional[str] = None

    @field_validator('serviceId')
    @classmethod
    def validate_service_id(cls, v):
        if not v.strip():
            raise ValueError('serviceId cannot be empty')
        return v


class CreateBookingRequest(BaseModel):
    model_config = ConfigDict(extra='ignore')

    lookerId: str
    providerId: str
    services: List[BookedService]
    dateTime: datetime
    customRequest: Optional[str] = None

    @field_validator('services')
    @classmethod
    def validate_services(cls, v):
        if not v:
            raise ValueError('At least one service is required')
        return v

    @field_validator('customRequest')
    @classmethod
    def validate_custom_request(cls, v):
        if v and len(v) > 1000:
            raise ValueError('Custom request cannot exceed 1000 characters')
        return v
