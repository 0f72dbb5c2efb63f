"""Error taxonomy and the JSON envelope shared by every endpoint."""

from typing import Any, Dict, Optional

from fastapi import status


class ApiError(Exception):
    """An error that is rendered as `{success: false, message, error}`."""

    def __init__(self, status_code: int, message: str, data: Any = None):
        super().__init__(message)
        self.status_code = status_code
        self.message = message
        self.data = data


def not_found(entity: str) -> ApiError:
    return ApiError(status.HTTP_404_NOT_FOUND, f"{entity} not found")


def bad_request(message: str, data: Any = None) -> ApiError:
    return ApiError(status.HTTP_400_BAD_REQUEST, message, data)


def db_unavailable() -> ApiError:
    return ApiError(status.HTTP_503_SERVICE_UNAVAILABLE, "Database not configured")


def envelope(data: Any = None, message: Optional[str] = None,
             pagination: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    if pagination is not None:
        body["pagination"] = pagination
    return body


def error_body(message: str, data: Any = None, errors: Any = None) -> Dict[str, Any]:
    body: Dict[str, Any] = {"success": False, "message": message, "error": message}
    if data is not None:
        body["data"] = data
    if errors is not None:
        body["errors"] = errors
    return body


def require_db(db):
    """Writes need a real store; reads fall back to static data instead."""
    if db is None:
        raise db_unavailable()
    return db
