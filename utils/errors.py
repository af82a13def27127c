# utils/errors.py - Error taxonomy shared by every route
from typing import Any, Dict, List, Optional
from fastapi import status
from pydantic import ValidationError as PydanticValidationError
import logging

logger = logging.getLogger(__name__)


class ApiError(Exception):
    """Base error carrying the HTTP status and the client-facing message"""
    status_code = status.HTTP_500_INTERNAL_SERVER_ERROR
    default_message = "Internal server error"

    def __init__(self, message: Optional[str] = None, details: Optional[List[Dict[str, Any]]] = None):
        self.message = message or self.default_message
        self.details = details
        super().__init__(self.message)

    def to_dict(self) -> Dict[str, Any]:
        body = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class MissingParameter(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Missing required parameter"


class ValidationError(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid data provided"


class InvalidTransition(ApiError):
    status_code = status.HTTP_400_BAD_REQUEST
    default_message = "Invalid status transition"


class Unauthenticated(ApiError):
    status_code = status.HTTP_401_UNAUTHORIZED
    default_message = "Unauthorized: Invalid or expired token"


class Forbidden(ApiError):
    status_code = status.HTTP_403_FORBIDDEN
    default_message = "Forbidden"


class NotFound(ApiError):
    status_code = status.HTTP_404_NOT_FOUND
    default_message = "Not found"


class MethodNotAllowed(ApiError):
    status_code = status.HTTP_405_METHOD_NOT_ALLOWED
    default_message = "Method Not Allowed"


class Conflict(ApiError):
    status_code = status.HTTP_409_CONFLICT
    default_message = "Conflict"


class Internal(ApiError):
    pass


def format_issues(errors: List[Dict[str, Any]], strip_prefix: bool = False) -> List[Dict[str, Any]]:
    """Turn pydantic error entries into {path, message, code} issues.

    With strip_prefix the leading location segment ("body", "query") that
    FastAPI adds is dropped so the path points into the payload itself.
    """
    issues = []
    for err in errors:
        loc = list(err.get("loc", ()))
        if strip_prefix and loc and loc[0] in ("body", "query", "path", "header"):
            loc = loc[1:]
        issues.append({
            "path": loc,
            "message": err.get("msg", ""),
            "code": err.get("type", ""),
        })
    return issues


def parse_payload(model, payload: Any):
    """Validate a raw JSON body against a pydantic model or raise ValidationError"""
    if not isinstance(payload, dict):
        raise ValidationError(details=[{"path": [], "message": "Expected a JSON object", "code": "dict_type"}])
    try:
        return model.model_validate(payload)
    except PydanticValidationError as e:
        issues = format_issues(e.errors(include_url=False, include_context=False))
        logger.warning(f"Payload rejected for {model.__name__}: {issues}")
        raise ValidationError(details=issues)
