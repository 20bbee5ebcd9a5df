"""BannerDesk API — FastAPI application entry point.

Invariants:
    - Routes registered explicitly (no auto-discovery)
    - Global error handlers map BannerDeskError → structured JSON responses
    - CORS configured from settings (not hardcoded)
    - The EditorSession is created and loaded in the lifespan, stored on app.state

Design Decisions:
    - Lifespan over @app.on_event: FastAPI recommended pattern, cleaner cleanup
    - Storage backend chosen from settings; both backends satisfy TreeRepository
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from app.config import Settings, get_settings
from app.core.domain_types import StorageBackend
from app.core.repository_protocols import TreeRepository
from app.api.error_handlers import register_error_handlers
from app.api.routes import health, tree
from app.infrastructure import database
from app.infrastructure.json_file_repository import JsonFileTreeRepository
from app.infrastructure.observability import setup_logging
from app.infrastructure.sql_tree_repository import SqlTreeRepository
from app.services.editor_session import EditorSession

logger = logging.getLogger(__name__)


def build_repository(settings: Settings) -> TreeRepository:
    """Pick the persistence gateway configured for this process."""
    if settings.storage_backend == StorageBackend.DATABASE:
        manager = database.init_db(
            settings.database_url,
            pool_size=settings.database_pool_size,
            max_overflow=settings.database_max_overflow,
        )
        return SqlTreeRepository(manager, settings.document_name)
    return JsonFileTreeRepository(settings.data_file_path)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Startup/shutdown lifecycle."""
    settings = get_settings()
    setup_logging(settings.log_level, settings.log_format)
    editor = EditorSession(
        build_repository(settings), strict=settings.strict_mutations,
    )
    await editor.load(create_if_missing=settings.create_missing_document)
    app.state.editor_session = editor
    logger.info(
        f"BannerDesk API started ({settings.storage_backend.value} storage)",
    )
    yield
    logger.info("BannerDesk API shutting down")
    if database.db_manager is not None:
        await database.db_manager.dispose()


app = FastAPI(
    title="BannerDesk API", version="1.0.0", lifespan=lifespan,
)

settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.include_router(health.router)
app.include_router(tree.router)

register_error_handlers(app)
