from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.encoders import jsonable_encoder
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.constants import MSG_INTERNAL_ERROR
from app.api.controllers import contact_controller

import logging
import sys

logging.basicConfig(
    level=logging.INFO,
    format="%(asctime)s [%(levelname)s] %(name)s %(message)s",
    handlers=[logging.StreamHandler(sys.stdout)],
)

logging.getLogger("httpx").setLevel(logging.WARNING)
logging.getLogger("httpcore").setLevel(logging.WARNING)

logging.getLogger("httpx").propagate = False
logging.getLogger("httpcore").propagate = False


app = FastAPI(
    title="Contact Classifier API",
    version="1.0",
    debug=False,
)

ALLOWED_ORIGINS = [origin.strip() for origin in settings.allowed_origins.split(",") if origin.strip()]

app.add_middleware(
    CORSMiddleware,
    allow_origins=ALLOWED_ORIGINS,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["Content-Type", "Accept"],
)


@app.exception_handler(StarletteHTTPException)
async def http_ex_handler(_: Request, exc: StarletteHTTPException) -> JSONResponse:
    return JSONResponse(
        status_code=exc.status_code,
        content={"error": exc.detail},
        headers=getattr(exc, "headers", None),
    )


@app.exception_handler(RequestValidationError)
async def validation_ex_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    messages = []

    for e in errors:
        if isinstance(e, dict):
            msg = e.get("msg")
            if msg:
                messages.append(str(msg))

    if not messages:
        detail = "Validation error"
    else:
        detail = " | ".join(messages)

    return JSONResponse(
        status_code=422,
        content={
            "error": detail,
            "errors": jsonable_errors(errors),
        },
    )


def jsonable_errors(errors):
    # ctx may carry exception instances; input is raw bytes for non-JSON bodies
    cleaned = []
    for e in errors:
        if not isinstance(e, dict):
            cleaned.append(str(e))
            continue
        item = {k: v for k, v in e.items() if k != "ctx"}
        if isinstance(item.get("input"), (bytes, bytearray)):
            item.pop("input")
        cleaned.append(item)
    return jsonable_encoder(cleaned)


@app.exception_handler(Exception)
async def unhandled_ex_handler(_: Request, __: Exception) -> JSONResponse:
    return JSONResponse(status_code=500, content={"error": MSG_INTERNAL_ERROR})


app.include_router(contact_controller.router)


@app.get("/health")
def health() -> dict[str, bool]:
    return {"ok": True}
