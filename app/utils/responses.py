from typing import Any
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse

def ok(data: Any = None, status_code: int = 200, **extra: Any) -> JSONResponse:
    body = {"success": True, "data": data}
    body.update(extra)
    return JSONResponse(status_code=status_code, content=jsonable_encoder(body))

def error_response(status_code: int, code: str, message: str) -> JSONResponse:
    return JSONResponse(
        status_code=status_code,
        content={"success": False, "error": {"code": code, "message": message}},
    )
