from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from loglens.core.config import settings


def setup_cors(app: FastAPI) -> None:
    """Allow the browser viewer to call the API from its own origin."""
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_origins_list,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
