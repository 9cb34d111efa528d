from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from recipe_form.api.v1.form import router as form_router
from recipe_form.config import Settings
from recipe_form.services.recipe_api import RecipeAPIClient
from recipe_form.services.sessions import FormSessionStore

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    logger.info("Recipe form using backend %s", app.state.settings.recipe_api_base_url)
    yield
    await app.state.recipe_client.aclose()


def create_app(
    settings: Optional[Settings] = None,
    recipe_client: Optional[RecipeAPIClient] = None,
) -> FastAPI:
    settings = settings or Settings()
    logging.basicConfig(level=settings.log_level.upper(), format=settings.log_format)

    app = FastAPI(title="Recipe Generator", version="1.0", lifespan=lifespan)
    app.state.settings = settings
    app.state.sessions = FormSessionStore(settings.max_sessions)
    app.state.recipe_client = recipe_client or RecipeAPIClient(settings)

    # CORS (narrow it down in .env via CORS_ALLOW_ORIGINS if you want)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_allow_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(form_router)

    @app.get("/healthz")
    def healthz():
        return {"status": "ok"}

    @app.get("/readyz")
    def readyz():
        return {"status": "ready"}

    return app

app = create_app()
