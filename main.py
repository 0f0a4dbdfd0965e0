import logging
from contextlib import asynccontextmanager
from typing import Optional

import uvicorn
from dotenv import load_dotenv
from fastapi import FastAPI, Request

from routes.analysis_route import router as analysis_router
from services.analysis.pipeline import AnalysisPipeline
from services.gateway.base import ModelGateway
from services.gateway.factory import build_gateway
from utils.settings import Settings

load_dotenv()  # Load environment variables from .env file if present

LOGGER = logging.getLogger(__name__)


def create_app(settings: Optional[Settings] = None, gateway: Optional[ModelGateway] = None) -> FastAPI:
    """
    Create and configure the FastAPI application instance.

    Args:
        settings: Explicit configuration; read from the environment when omitted.
        gateway: Prebuilt model gateway; built from `settings` at startup when omitted.
    """
    resolved_settings = settings or Settings.from_env()
    logging.basicConfig(
        level=resolved_settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """
        Build the model gateway once and attach it, the settings, and the
        analysis pipeline to `app.state`.
        """
        model_gateway = gateway or build_gateway(resolved_settings)
        app.state.settings = resolved_settings
        app.state.model_gateway = model_gateway
        app.state.analysis_pipeline = AnalysisPipeline(
            model_gateway, timeout_seconds=resolved_settings.gateway_timeout_seconds
        )

        try:
            yield
        finally:
            # Close the SDK client behind the gateway if it exposes aclose.
            aclose = getattr(model_gateway, "aclose", None)
            if aclose is not None:
                try:
                    await aclose()
                except Exception as exc:  # pylint: disable=broad-exception-caught
                    LOGGER.warning("Failed to close model gateway: %s", exc)

    app = FastAPI(title="Hairstyle Advisor API", lifespan=lifespan)

    @app.get("/health")
    async def health(request: Request):
        """
        Simple health check that reports the configured provider and gateway presence.
        """
        has_gateway = getattr(request.app.state, "model_gateway", None) is not None
        return {
            "ok": True,
            "provider": resolved_settings.model_provider,
            "gateway_available": has_gateway,
        }

    app.include_router(analysis_router)

    return app


app = create_app()


if __name__ == "__main__":
    uvicorn.run("main:app", host="0.0.0.0", port=8000, reload=False)
