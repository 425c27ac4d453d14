import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI, Request
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from interview_capture.core import config
from interview_capture.core.logging_config import setup_logging

# ✅ Import All API Routes
from interview_capture.api.routes import (
    auth,
    roles,
    processes,
    interview_sessions,
    interview_responses,
    interview_export,
    knowledge,
    health,
)

setup_logging(config.LOG_LEVEL, config.LOG_DIR)
logger = logging.getLogger(__name__)

if config.using_default_secret_key():
    if config.is_production():
        raise RuntimeError("SECRET_KEY must be set in production")
    logger.warning("SECRET_KEY not set - using the insecure development default")


@asynccontextmanager
async def lifespan(app: FastAPI):
    if config.RUN_MIGRATIONS:
        from interview_capture.db.migrate import run_migrations
        run_migrations()
    else:
        from interview_capture.db.init_db import init_db
        init_db()
    yield


# ============================================
# ✅ FASTAPI APP INIT
# ============================================

app = FastAPI(title="Interview Capture API", lifespan=lifespan)

app.add_middleware(
    CORSMiddleware,
    allow_origins=config.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PUT", "DELETE"],
    allow_headers=["Authorization", "Content-Type"],
)


# ============================================
# ✅ ERROR HANDLERS
# ============================================

@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError):
    """Missing or malformed fields are a 400, not FastAPI's default 422."""
    return JSONResponse(
        status_code=400,
        content={
            "detail": "Missing or invalid fields",
            "errors": jsonable_encoder(exc.errors(), custom_encoder={Exception: str}),
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(request: Request, exc: Exception):
    logger.exception(f"Unhandled exception on {request.method} {request.url.path}: {exc}")
    return JSONResponse(status_code=500, content={"detail": "Internal server error"})


# ============================================
# ✅ REGISTER ALL ROUTERS
# ============================================

app.include_router(auth.router)
app.include_router(roles.router)
app.include_router(processes.router)
app.include_router(interview_sessions.router)
app.include_router(interview_responses.router)
app.include_router(interview_export.router)
app.include_router(knowledge.router)
app.include_router(health.router)

# Screenshots are referenced as /uploads/screenshots/<file>
Path(config.UPLOAD_DIR).mkdir(parents=True, exist_ok=True)
app.mount(config.UPLOAD_URL_PREFIX, StaticFiles(directory=config.UPLOAD_DIR), name="uploads")


@app.get("/")
def root():
    return {"status": "Interview Capture API running"}
