import logging

from fastapi import FastAPI, Request
from fastapi.exception_handlers import request_validation_exception_handler
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from voiceclone.errors import VoiceCloneError
from voiceclone.models import HealthResponse

from .auth import router as auth_router
from .functions import FUNCTION_PATHS, validation_error_message
from .functions import router as functions_router
from .middleware import LoggingMiddleware
from .projects import router as projects_router
from .settings import get_settings

settings = get_settings()

logging.basicConfig(
    level=settings.log_level,
    format="%(asctime)s - %(levelname)s - %(name)s - %(message)s",
)
logger = logging.getLogger(__name__)

app = FastAPI(title="Voiceclone API", version="0.1.0")
app.add_middleware(LoggingMiddleware)

# CORS middleware (any origin may call the function handlers)
app.add_middleware(
    CORSMiddleware,
    allow_origins=["*"],
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(VoiceCloneError)
async def voiceclone_error_handler(_request: Request, exc: VoiceCloneError) -> JSONResponse:
    """Errors raised while resolving dependencies (e.g. a missing API key)."""
    logger.error(f"{type(exc).__name__}: {exc.message}")
    return JSONResponse(status_code=400, content={"error": exc.message})


@app.exception_handler(RequestValidationError)
async def validation_error_handler(request: Request, exc: RequestValidationError) -> JSONResponse:
    """Function handlers answer malformed bodies with the same 400 error envelope."""
    if request.url.path in FUNCTION_PATHS:
        message = validation_error_message(exc)
        logger.warning(f"Rejected {request.method} {request.url.path}: {message}")
        return JSONResponse(status_code=400, content={"error": message})
    return await request_validation_exception_handler(request, exc)


app.include_router(auth_router)
app.include_router(projects_router)
app.include_router(functions_router)


@app.get("/api/health", tags=["Utility"], response_model=HealthResponse)
async def health() -> HealthResponse:
    """Return basic service health status."""
    return HealthResponse()
