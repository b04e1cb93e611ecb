"""Error response helpers shared by the API routes and exception handlers."""

from typing import Any

from fastapi.responses import JSONResponse

from linkgraph.models.common import ErrorDetail, ErrorResponse


def error_response(
    status_code: int, code: str, message: str, details: dict[str, Any] | None = None
) -> JSONResponse:
    """Build a JSON error body in the ErrorResponse shape."""
    body = ErrorResponse(error=ErrorDetail(code=code, message=message, details=details))
    return JSONResponse(status_code=status_code, content=body.model_dump(mode="json"))
