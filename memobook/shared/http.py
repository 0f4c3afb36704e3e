from fastapi import HTTPException
from fastapi.responses import JSONResponse
from typing import Any, Optional

def ok(data: Any = None, **extra):
    return {"ok": True, "data": data, **extra}

def err(message: str, code: str = "bad_request", status: int = 400, details: Optional[Any] = None):
    # raising short-circuits the route
    raise HTTPException(status_code=status, detail={"ok": False, "error": {"code": code, "message": message, "details": details}})

def fail(message: str, status: int = 400) -> JSONResponse:
    # flat {"error": ...} payload for the summarize endpoint
    return JSONResponse(status_code=status, content={"error": message})
