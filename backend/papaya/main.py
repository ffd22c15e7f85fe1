import logging
import os

from dotenv import load_dotenv
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from papaya.database import init_db
from papaya.errors import (
    AlreadyRegistered,
    Forbidden,
    InsufficientPlayers,
    NotFound,
    PapayaError,
    StoreFailure,
    Unauthenticated,
    UnsupportedFormat,
    ValidationError,
)
from papaya.routes import auth, participants, schedule, tournaments

load_dotenv()

logging.basicConfig(
    level=os.getenv("LOG_LEVEL", "INFO").upper(),
    format="%(asctime)s %(levelname)s %(name)s: %(message)s",
)
logger = logging.getLogger(__name__)

APP_NAME = "Papaya Tournaments API"

app = FastAPI(title=APP_NAME)

_cors_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
]
_extra = os.getenv("CORS_ORIGINS", "")
if _extra:
    _cors_origins.extend(o.strip() for o in _extra.split(",") if o.strip())

app.add_middleware(
    CORSMiddleware,
    allow_origins=_cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

# Domain error -> HTTP status
ERROR_STATUS_CODES = {
    ValidationError: 422,
    Unauthenticated: 401,
    Forbidden: 403,
    NotFound: 404,
    UnsupportedFormat: 400,
    AlreadyRegistered: 409,
    InsufficientPlayers: 400,
    StoreFailure: 500,
}


@app.exception_handler(PapayaError)
async def papaya_error_handler(request: Request, exc: PapayaError):
    status_code = ERROR_STATUS_CODES.get(type(exc), 500)
    headers = {"WWW-Authenticate": "Bearer"} if isinstance(exc, Unauthenticated) else None
    if status_code >= 500:
        logger.error("%s %s failed: %s", request.method, request.url.path, exc.message)
    else:
        logger.warning("%s %s rejected (%s): %s", request.method, request.url.path, exc.code, exc.message)
    return JSONResponse(
        status_code=status_code,
        content={"detail": exc.message, "code": exc.code},
        headers=headers,
    )


# Include routers
app.include_router(auth.router, prefix="/api", tags=["auth"])
app.include_router(tournaments.router, prefix="/api", tags=["tournaments"])
app.include_router(participants.router, prefix="/api", tags=["participants"])
app.include_router(schedule.router, prefix="/api", tags=["schedule"])


@app.on_event("startup")
def on_startup():
    init_db()
    logger.info("%s started with %d routes", APP_NAME, len(app.routes))


@app.get("/api/health")
def health_check():
    return {"app_name": APP_NAME, "status": "healthy"}
