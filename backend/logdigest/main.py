from contextlib import asynccontextmanager
import uvicorn
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from logdigest.api.routes import router
from logdigest.core.config import settings
from logdigest.core.cors import setup_cors
from logdigest.core.logging import setup_logging, get_logger
from logdigest.errors import LogDigestError

setup_logging()
logger = get_logger(__name__)

API_VERSION = "1.0.0"


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info(f"LogDigest API up (model: {settings.openai_model})")
    if not settings.has_llm_key:
        logger.warning("No LLM API key configured - digests will use fallback summaries")
    elif settings.has_remote_venue:
        logger.info(f"Remote interpretation via Lambda '{settings.lambda_function_name}'")

    yield

    logger.info("LogDigest API stopped")


async def domain_error_handler(request: Request, exc: LogDigestError) -> JSONResponse:
    """Anything that escapes a route as a domain error still gets its own status code."""
    logger.warning(f"{request.method} {request.url.path} -> {exc.error_code}: {exc.message}")
    return JSONResponse(
        status_code=exc.http_status,
        content={"detail": exc.message, "error_code": exc.error_code},
    )


def create_app() -> FastAPI:
    app = FastAPI(
        title="LogDigest API",
        description="Turns large CSV log exports into a small ranked digest of recurring patterns",
        version=API_VERSION,
        lifespan=lifespan,
    )
    setup_cors(app)
    app.add_exception_handler(LogDigestError, domain_error_handler)
    app.include_router(router)

    @app.get("/")
    async def root():
        return {
            "name": "LogDigest API",
            "version": API_VERSION,
            "docs": "/docs",
            "health": "/api/health",
        }

    return app


app = create_app()


def run() -> None:
    """Console entry point: serve the API with uvicorn."""
    uvicorn.run(
        "logdigest.main:app",
        host=settings.api_host,
        port=settings.api_port,
        log_level=settings.log_level.lower(),
    )
