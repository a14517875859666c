"""FastAPI application entry point. Builds the app with its collaborators and registers the routers."""

import logging
import time
from datetime import datetime, timezone
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.staticfiles import StaticFiles

import storyhub.models  # noqa: F401 - registers all models on the metadata
from storyhub import __version__
from storyhub.config import Settings, settings as default_settings
from storyhub.database import Base, build_engine, build_session_factory
from storyhub.errors import register_exception_handlers
from storyhub.logging_setup import configure_logging
from storyhub.routers import articles, documents, media, public, users
from storyhub.services.frame_extractor import FfmpegFrameExtractor, FrameExtractor
from storyhub.storage.base import BlobStore, build_blob_store
from storyhub.storage.local import LocalBlobStore

logger = logging.getLogger(__name__)


def create_app(
    settings: Optional[Settings] = None,
    blob_store: Optional[BlobStore] = None,
    frame_extractor: Optional[FrameExtractor] = None,
) -> FastAPI:
    if settings is None:
        settings = default_settings
    configure_logging(settings)

    app = FastAPI(
        title="Storyhub",
        description="Story documents, blog articles and media backend",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc",
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.ALLOWED_ORIGINS,
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )
    register_exception_handlers(app)

    engine = build_engine(settings.DATABASE_URL, echo=settings.DEBUG)
    app.state.settings = settings
    app.state.engine = engine
    app.state.session_factory = build_session_factory(engine)
    app.state.blob_store = blob_store if blob_store is not None else build_blob_store(settings)
    app.state.frame_extractor = frame_extractor if frame_extractor is not None else FfmpegFrameExtractor(settings.FFMPEG_BINARY)
    app.state.started_at = time.monotonic()

    app.include_router(documents.router)
    app.include_router(public.router)
    app.include_router(media.router)
    app.include_router(media.public_router)
    app.include_router(articles.router)
    app.include_router(users.router)

    @app.on_event("startup")
    def on_startup():
        # missing tables are created on boot; column changes need a migration
        Base.metadata.create_all(bind=engine)
        if isinstance(app.state.blob_store, LocalBlobStore):
            app.state.blob_store.ensure_root()
        logger.info("Storyhub %s started (storage: %s)", __version__, type(app.state.blob_store).__name__)

    @app.get("/", tags=["health"])
    def root(request: Request):
        uptime = time.monotonic() - request.app.state.started_at
        return {"status": "success", "version": __version__, "uptime": f"{uptime:.0f}s"}

    @app.get("/health", tags=["health"])
    def health_check():
        return {"status": "healthy", "time": datetime.now(timezone.utc).isoformat()}

    store = app.state.blob_store
    if isinstance(store, LocalBlobStore) and store.public_url.startswith("/"):
        app.mount(store.public_url, StaticFiles(directory=store.root, check_dir=False), name="uploads")

    return app


# served by `uvicorn storyhub.main:app`; nothing touches disk until startup
app = create_app()
