"""
Response envelope shared by every endpoint: ``{success, message, data, errors}``.
"""

from typing import Any

from fastapi.responses import JSONResponse


def success_response(
    data: Any = None,
    message: str | None = None,
    **extra: Any,
) -> dict[str, Any]:
    """Body of a successful response; ``extra`` lands next to ``data``."""
    body: dict[str, Any] = {"success": True}
    if message is not None:
        body["message"] = message
    if data is not None:
        body["data"] = data
    body.update(extra)
    return body


def error_response(
    status_code: int,
    message: str,
    errors: list[dict[str, Any]] | None = None,
    error: str | None = None,
    headers: dict[str, str] | None = None,
) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "message": message}
    if errors is not None:
        content["errors"] = errors
    if error is not None:
        content["error"] = error
    return JSONResponse(status_code=status_code, content=content, headers=headers)
