import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from regional_blog.api import include_regional_router
from regional_blog.config import settings
from regional_blog.database import AsyncSessionLocal, Base, engine
from regional_blog.exception_handlers import register_exception_handlers
from regional_blog.i18n.registry import LocaleRegistry
from regional_blog.integrations.geoip import MaxMindGeoIP
from regional_blog.middleware.legacy_redirect import LegacyRedirectMiddleware
from regional_blog.middleware.logging import StructuredLoggingMiddleware
from regional_blog.middleware.region import RegionMiddleware
from regional_blog.routes import admin, ads, articles, authors, categories, regions, search, sitemap
from regional_blog.services.region_service import load_registry
from regional_blog.services.tracking import tracking_channel

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Tasks to run at application startup and shutdown."""
    logger.info("Starting up the application...")
    if settings.debug:
        async with engine.begin() as conn:
            await conn.run_sync(Base.metadata.create_all)
        logger.info("Database tables created (if not existing).")

    try:
        async with AsyncSessionLocal() as db:
            app.state.locale_registry = await load_registry(db)
    except Exception as e:
        # Serve with defaults only; an editor can reload the registry later.
        logger.error(f"Could not load the locale registry: {e}", exc_info=True)
        app.state.locale_registry = LocaleRegistry(())

    yield

    logger.info("Shutting down the application...")
    await tracking_channel.drain()
    geoip = getattr(app.state, "geoip", None)
    if geoip is not None:
        geoip.close()


def create_app() -> FastAPI:
    """Create the FastAPI application."""
    app = FastAPI(
        title=settings.app_name,
        description="Multilingual, region-aware publishing API",
        debug=settings.debug,
        version=settings.app_version,
        lifespan=lifespan,
    )
    app.state.locale_registry = LocaleRegistry(())
    app.state.geoip = MaxMindGeoIP(settings.maxmind_db_path) if settings.enable_ip_geolocation else None

    # Starlette runs the last-added middleware first:
    # logging → CORS → region detection → legacy redirects → routes
    app.add_middleware(LegacyRedirectMiddleware, session_factory=AsyncSessionLocal)
    app.add_middleware(RegionMiddleware, geoip=app.state.geoip)
    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
        expose_headers=["Content-Language", "X-Request-ID"],
    )
    app.add_middleware(StructuredLoggingMiddleware)

    register_exception_handlers(app)

    app.include_router(regions.router)
    app.include_router(admin.router)
    app.include_router(sitemap.router)
    for router in (search.router, articles.router, categories.router, authors.router, ads.router):
        include_regional_router(app, router)

    @app.get("/health", tags=["Root"])
    async def health():
        return {"status": "ok"}

    @app.get("/", tags=["Root"])
    async def root():
        return {"message": f"Welcome to the {settings.app_name}"}

    if settings.debug:
        logger.info(f"Running in {settings.environment} mode")
        logging.getLogger("sqlalchemy.engine").setLevel(logging.INFO)

    return app


app = create_app()
