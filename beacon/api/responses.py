"""
beacon.api.responses — Shared request/response helpers
========================================================

Every route catches its own failures and answers with
``{"error": "<message>"}`` and a fixed status code.  Request bodies are
read raw and validated inside the handler so a schema rejection maps to
400 rather than FastAPI's automatic 422.
"""

from __future__ import annotations

from fastapi.responses import JSONResponse


def error_response(status_code: int, message: str) -> JSONResponse:
    return JSONResponse(status_code=status_code, content={"error": message})


def success_response() -> dict[str, bool]:
    return {"success": True}


def iso(value) -> str | None:
    return value.isoformat() if value else None
