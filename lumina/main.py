# lumina/main.py
import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse
from starlette.exceptions import HTTPException as StarletteHTTPException
from starlette.middleware.trustedhost import TrustedHostMiddleware

from lumina.api.routes import interpret_routes, root_routes
from lumina.core.config import configure_logging, settings
from lumina.core.exceptions import BadRequest
from lumina.core.startup import startup_event

configure_logging(settings.DEBUG)
logger = logging.getLogger(__name__)

app = FastAPI(title="Lumina Tarot")

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["POST", "OPTIONS"],
    allow_headers=["*"],
)

app.add_middleware(TrustedHostMiddleware, allowed_hosts=settings.allowed_hosts)

app.include_router(root_routes.router)
app.include_router(interpret_routes.router, prefix="/api/tarot", tags=["Tarot"])


@app.exception_handler(StarletteHTTPException)
async def http_exception_handler(request: Request, exc: StarletteHTTPException):
    return JSONResponse(status_code=exc.status_code, content={"error": str(exc.detail)}, headers=exc.headers)


@app.exception_handler(RequestValidationError)
async def validation_exception_handler(request: Request, exc: RequestValidationError):
    errors = exc.errors()
    if errors:
        first = errors[0]
        location = ".".join(str(part) for part in first.get("loc", ()) if part != "body")
        error = BadRequest(f"Invalid request: {location} {first.get('msg', '')}".strip())
    else:
        error = BadRequest("Invalid request")
    logger.info(f"Rejected interpretation request: {error.message}")
    return JSONResponse(status_code=error.status_code, content={"error": error.message})


@app.on_event("startup")
async def app_startup():
    await startup_event(app)
