from __future__ import annotations

from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from .. import __version__
from ..intake import IntakePipeline
from .deps import lifespan
from .routers import router


def create_app(pipeline: Optional[IntakePipeline] = None) -> FastAPI:
    app = FastAPI(
        title="Contact Form Intake",
        version=__version__,
        lifespan=lifespan,
    )
    app.state.pipeline = pipeline

    # The form is embedded on pages served from other origins.
    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["GET", "POST", "OPTIONS"],
        allow_headers=["*"],
    )

    app.include_router(router)
    return app


# ASGI entrypoint (uvicorn contactsheet.api.run:app)
app = create_app()
