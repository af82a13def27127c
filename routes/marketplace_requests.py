# routes/marketplace_requests.py - Lookers post open requests, providers triage them
from fastapi import APIRouter, Body, Depends, Query
from typing import Any, Optional
from config import get_store
from models.marketplace import (
    MarketplaceRequestStatus, SubmitMarketplaceRequest, UpdateMarketplaceRequestStatus,
)
from models.users import UserRole
from repository.store import DocumentStore, Transaction, SERVER_TIMESTAMP, MARKETPLACE_REQUESTS
from repository.users import UserRepo, get_current_uid
from utils.errors import Forbidden, NotFound, parse_payload
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/marketplace-requests", tags=["Marketplace Requests"])

TRIAGE_ROLES = (UserRole.PROVIDER.value, UserRole.ADMIN.value)


def ensure_triage_role(store: DocumentStore, uid: str, action: str) -> None:
    if UserRepo.get_role(store, uid) not in TRIAGE_ROLES:
        raise Forbidden(f"Forbidden: Only Providers and Admins can {action} marketplace requests")


@router.post("", status_code=201)
def submit_marketplace_request(
    payload: Any = Body(...),
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    """Submit an open request for a provider in an area"""
    if not isinstance(payload, dict) or payload.get("lookerId") != current_uid:
        raise Forbidden("Forbidden: Cannot submit request for another user")
    if UserRepo.get_role(store, current_uid) != UserRole.LOOKER.value:
        raise Forbidden("Forbidden: Only Lookers can submit marketplace requests")

    req = parse_payload(SubmitMarketplaceRequest, payload)
    request_id = store.add(MARKETPLACE_REQUESTS, {
        **req.model_dump(exclude_none=True),
        "lookerId": current_uid,
        "status": MarketplaceRequestStatus.PENDING.value,
        "timestamp": SERVER_TIMESTAMP,
        "createdAt": SERVER_TIMESTAMP,
        "updatedAt": SERVER_TIMESTAMP,
    })
    logger.info(f"Marketplace request {request_id} submitted by {current_uid}")

    return {"message": "Marketplace request submitted", "requestId": request_id}


@router.get("")
def get_marketplace_requests(
    status: Optional[MarketplaceRequestStatus] = Query(None, description="Filter by status"),
    area: Optional[str] = Query(None, description="Filter by area"),
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    """List marketplace requests for providers and admins"""
    ensure_triage_role(store, current_uid, "view")

    filters = []
    if status:
        filters.append(("status", "==", status.value))
    if area:
        filters.append(("area", "==", area))
    return store.find(MARKETPLACE_REQUESTS, filters)


@router.put("/{request_id}")
def update_marketplace_request_status(
    request_id: str,
    payload: Any = Body(...),
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    """Move a marketplace request to any of its statuses"""
    ensure_triage_role(store, current_uid, "update")
    req = parse_payload(UpdateMarketplaceRequestStatus, payload)

    fields = {"status": req.status.value, "updatedAt": SERVER_TIMESTAMP}
    if req.status == MarketplaceRequestStatus.MATCHED:
        fields["matchedProviderId"] = current_uid

    def _update(txn: Transaction):
        if txn.get(MARKETPLACE_REQUESTS, request_id) is None:
            raise NotFound("Marketplace request not found")
        txn.update(MARKETPLACE_REQUESTS, request_id, fields)

    store.run_transaction(_update)
    logger.info(f"Marketplace request {request_id} -> {req.status.value} by {current_uid}")

    return {"message": "Marketplace request status updated", "status": req.status.value}
