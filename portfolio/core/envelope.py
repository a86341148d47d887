from typing import Any

from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse


def api_response(
    success: bool,
    data: Any = None,
    error: str | None = None,
    message: str | None = None,
) -> dict[str, Any]:
    body: dict[str, Any] = {"success": success, "data": data}
    if error is not None:
        body["error"] = error
    if message is not None:
        body["message"] = message
    return body


def envelope_response(
    success: bool,
    data: Any = None,
    error: str | None = None,
    message: str | None = None,
    status_code: int = 200,
) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content=jsonable_encoder(api_response(success, data, error, message)),
    )
