import logging
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from memobook.shared.config import settings
from memobook.shared.db import Base, engine
from memobook.shared.log import setup_logging

# import models so they register with Base.metadata
from memobook.memos import models as memos_models  # noqa: F401

# Routers Import
from memobook.memos.api import router as memos_router
from memobook.summarize.api import router as summarize_router

logger = logging.getLogger(__name__)

TAGS_METADATA = [
    {"name": "Memos", "description": "Create, list, search, edit and delete memos"},
    {"name": "Summarize", "description": "AI bullet-point summaries of memo content"},
    {"name": "Health", "description": "Service health"},
]

app = FastAPI(
    title="Memobook",
    version="0.1.0",
    description="Personal memos with tags, categories and AI summaries.",
    openapi_tags=TAGS_METADATA,
)

# ---- DEV-ONLY error handler (surfaces real errors in Swagger) ----
if settings.ENV == "dev":
    @app.exception_handler(Exception)
    async def _dev_ex_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(status_code=500, content={"detail": str(exc)})

# ------------------------------------------------------------------


@app.on_event("startup")
def _init_db():
    setup_logging(settings.LOG_LEVEL)
    Base.metadata.create_all(bind=engine)
    logger.info("memobook started (env=%s)", settings.ENV)

@app.get("/healthz", tags=["Health"])
def healthz():
    return {"ok": True}

# Routers
app.include_router(memos_router)
app.include_router(summarize_router)
