"""Application lifespan and startup wiring.

build_selector_hooks() and build_content_registry() produce the app-wide,
read-only collaborators stored on app.state by create_app(). The lifespan
itself only starts telemetry and disposes the database engine.
"""

import logging
from contextlib import asynccontextmanager
from typing import AsyncIterator

from fastapi import FastAPI

from object_selector.application.services.hooks import SelectorHooks
from object_selector.core.config import Settings, get_settings
from object_selector.infrastructure.services.content_registry import ContentRegistry
from object_selector.infrastructure.services.preview import preview_post_settings

logger = logging.getLogger(__name__)


def build_selector_hooks() -> SelectorHooks:
    """Hook registry with the built-in post settings preview callback."""
    hooks = SelectorHooks()
    hooks.add_preview_callback(preview_post_settings)
    return hooks


def build_content_registry(settings: Settings) -> ContentRegistry:
    registry = ContentRegistry.from_settings(settings.custom_post_types)
    logger.info("Registered post types: %s", ", ".join(registry.post_type_names))
    return registry


@asynccontextmanager
async def create_lifespan(app: FastAPI) -> AsyncIterator[None]:
    """Run startup then yield; on exit run shutdown.

    Startup: telemetry (if enabled). Shutdown: telemetry flush, SQL engine dispose.
    """
    settings = get_settings()

    # ---- Startup ----
    if settings.telemetry_enabled:
        from object_selector.infrastructure.persistence.database import get_engine
        from object_selector.shared.telemetry.telemetry import TelemetryConfig, set_telemetry

        telemetry = TelemetryConfig(
            service_name=settings.app_name,
            service_version=settings.app_version,
            environment=settings.telemetry_environment,
        )
        telemetry.setup_telemetry(
            exporter_type=settings.telemetry_exporter,
            otlp_endpoint=settings.telemetry_otlp_endpoint,
            sample_rate=settings.telemetry_sample_rate,
        )
        set_telemetry(telemetry)
        telemetry.instrument_fastapi(app)
        telemetry.instrument_sqlalchemy(get_engine())
        logger.info("Telemetry initialized")

    yield

    # ---- Shutdown ----
    from object_selector.shared.telemetry.telemetry import get_telemetry, set_telemetry

    telemetry_instance = get_telemetry()
    if telemetry_instance is not None:
        telemetry_instance.shutdown()
        set_telemetry(None)

    from object_selector.infrastructure.persistence.database import dispose_engine

    await dispose_engine()
