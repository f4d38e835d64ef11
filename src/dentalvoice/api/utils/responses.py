from typing import Any, Optional
from fastapi import Request
from ..schemas.common import ApiResponse, ErrorResponse

def _request_id(request: Request) -> str:
    return getattr(request.state, "request_id", None) or ""

def ok(request: Request, data: Any = None, message: str = "") -> ApiResponse[Any]:
    return ApiResponse(success=True, message=message, request_id=_request_id(request), data=data)

def fail(request: Request, error: str, message: str, details: Optional[dict] = None) -> ErrorResponse:
    return ErrorResponse(error=error, message=message, request_id=_request_id(request), details=details or {})
