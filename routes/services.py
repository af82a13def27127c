# routes/services.py - Provider service catalog
from fastapi import APIRouter, Body, Depends, Query
from typing import Any, Dict, Optional
from config import get_store
from models.services import CreateServiceRequest, UpdateServiceRequest
from repository.store import DocumentStore, SERVER_TIMESTAMP, SERVICES
from repository.users import get_current_uid
from utils.errors import Forbidden, NotFound, parse_payload
import logging

logger = logging.getLogger(__name__)
router = APIRouter(prefix="/services", tags=["Services"])


def get_owned_service(store: DocumentStore, service_id: str, caller_id: str, action: str) -> Dict[str, Any]:
    service = store.get(SERVICES, service_id)
    if service is None:
        raise NotFound("Service not found")
    if service.get("providerId") != caller_id:
        raise Forbidden(f"Forbidden: You are not authorized to {action} this service")
    return service


@router.get("")
def get_services(
    category: Optional[str] = Query(None, description="Filter by category"),
    providerId: Optional[str] = Query(None, description="Filter by provider"),
    store: DocumentStore = Depends(get_store),
):
    """Public service listing"""
    filters = []
    if category:
        filters.append(("category", "==", category))
    if providerId:
        filters.append(("providerId", "==", providerId))
    return store.find(SERVICES, filters)


@router.get("/{service_id}")
def get_service_details(service_id: str, store: DocumentStore = Depends(get_store)):
    service = store.get(SERVICES, service_id)
    if service is None:
        raise NotFound("Service not found")
    return service


@router.post("", status_code=201)
def create_service(
    payload: Any = Body(...),
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    if not isinstance(payload, dict) or payload.get("providerId") != current_uid:
        raise Forbidden("Forbidden: Cannot create service for another provider")

    req = parse_payload(CreateServiceRequest, payload)
    service_id = store.add(SERVICES, {
        **req.model_dump(mode="json", exclude_none=True),
        "createdAt": SERVER_TIMESTAMP,
        "updatedAt": SERVER_TIMESTAMP,
    })
    logger.info(f"Service {service_id} created by provider {current_uid}")

    return {"message": "Service created successfully", "serviceId": service_id}


@router.put("/{service_id}")
def update_service(
    service_id: str,
    payload: Any = Body(...),
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    get_owned_service(store, service_id, current_uid, "update")
    req = parse_payload(UpdateServiceRequest, payload)

    store.update(SERVICES, service_id, {
        **req.model_dump(mode="json", exclude_unset=True),
        "updatedAt": SERVER_TIMESTAMP,
    })
    return {"message": "Service updated successfully"}


@router.delete("/{service_id}")
def delete_service(
    service_id: str,
    store: DocumentStore = Depends(get_store),
    current_uid: str = Depends(get_current_uid),
):
    get_owned_service(store, service_id, current_uid, "delete")
    store.delete(SERVICES, service_id)
    logger.info(f"Service {service_id} deleted by provider {current_uid}")
    return {"message": "Service deleted successfully"}
