from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from logdigest.core.config import settings


def setup_cors(app: FastAPI) -> None:
    """Allow the upload dashboard to call the API from the configured origins."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
