import asyncio
import atexit
import logging
from typing import Any, Dict, cast

from dotenv import load_dotenv
from sqlalchemy.engine import make_url
from sqlalchemy.ext.asyncio import AsyncEngine, async_sessionmaker, create_async_engine
from sqlalchemy.pool import NullPool

from planner.config import get_settings

load_dotenv()
logger = logging.getLogger("planner.database")

# ---------------------------------------------------------------------------
# Configuration
# ---------------------------------------------------------------------------

_settings = get_settings()
_CURRENT_DB_URL: str | None = None


def _detect_driver(url: str) -> str:
    try:
        return make_url(url).drivername
    except Exception:
        return url.split(":", 1)[0]


def _normalize_url(url: str) -> str:
    # Sync drivers in DATABASE_URL are swapped for their async equivalents
    if url.startswith("sqlite://"):
        return url.replace("sqlite://", "sqlite+aiosqlite://", 1)
    if url.startswith("postgresql://"):
        return url.replace("postgresql://", "postgresql+asyncpg://", 1)
    if url.startswith("postgres://"):
        return url.replace("postgres://", "postgresql+asyncpg://", 1)
    return url


# ---------------------------------------------------------------------------
# Engine Setup
# ---------------------------------------------------------------------------

def _make_engine() -> AsyncEngine:
    url = _normalize_url(str(_settings.database_url or "").strip())
    if not url:
        raise RuntimeError("DATABASE_URL is required.")

    driver = _detect_driver(url)
    engine_kwargs: Dict[str, Any] = {
        "echo": False,
        "future": True,
        "pool_pre_ping": True,
    }
    if driver.startswith("postgresql+"):
        engine_kwargs["pool_size"] = 10
        engine_kwargs["max_overflow"] = 5
    else:
        # SQLite: no pooled connections, so sessions survive event loop changes
        engine_kwargs["poolclass"] = NullPool
        engine_kwargs["pool_pre_ping"] = False

    global _CURRENT_DB_URL
    _CURRENT_DB_URL = url

    return create_async_engine(url, **engine_kwargs)


try:
    async_engine: AsyncEngine = _make_engine()
except Exception as e:
    logger.critical("Failed to initialize async engine: %s", e)
    raise RuntimeError("Database engine initialization failed") from e

AsyncSessionLocal = async_sessionmaker(bind=async_engine, expire_on_commit=False)


# ---------------------------------------------------------------------------
# Utilities
# ---------------------------------------------------------------------------

def get_database_dsn(hide_password: bool = True) -> str:
    """Return the configured DB DSN string."""
    url_str = _CURRENT_DB_URL or ""
    try:
        url = make_url(cast(str, url_str))
        return url.render_as_string(hide_password=hide_password)
    except Exception:
        return url_str


async def init_db_async():
    """Create database tables on startup."""
    from planner.models import models

    try:
        async with async_engine.begin() as conn:
            await conn.run_sync(models.Base.metadata.create_all)
        logger.info("Database initialized successfully.")
    except Exception as e:
        logger.critical("Database initialization failed: %s", e)
        raise RuntimeError("Failed to initialize database") from e


async def drop_db_async():
    """Drop every table. Used to reset state between test sessions."""
    from planner.models import models

    async with async_engine.begin() as conn:
        await conn.run_sync(models.Base.metadata.drop_all)
    logger.info("Database tables dropped.")


async def shutdown_db_async():
    """Dispose the async engine cleanly."""
    try:
        await async_engine.dispose()
        logger.info("Database connection pool closed.")
    except Exception as e:
        logger.error("Error shutting down database engine: %s", e)
        raise


def _dispose_engine_at_exit():
    """Safety cleanup for interpreter shutdown."""
    try:
        loop = asyncio.new_event_loop()
        loop.run_until_complete(async_engine.dispose())
        loop.close()
    except Exception:
        pass  # swallow shutdown noise


atexit.register(_dispose_engine_at_exit)
