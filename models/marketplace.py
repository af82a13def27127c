# models/marketplace.py - Marketplace request models
from pydantic import BaseModel
from enum import Enum
from typing import Optional


class MarketplaceRequestStatus(str, Enum):
    PENDING = "pending"
    MATCHED = "matched"
    CANCELLED = "cancelled"
    FULFILLED = "fulfilled"


class SubmitMarketplaceRequest(BaseModel):
    lookerId: str
    serviceName: str
    area: str
    notes: Optional[str] = None
    notificationOptIn: bool


class UpdateMarketplaceRequestStatus(BaseModel):
    status: MarketplaceRequestStatus
