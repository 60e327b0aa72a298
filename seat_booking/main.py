# seat_booking/main.py
import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware

from seat_booking.core.config import settings
from seat_booking.core.exception_handlers import register_exception_handlers
from seat_booking.core.logging_config import configure_logging
from seat_booking.core.redis import close_redis, create_redis
from seat_booking.database.database import Base, SessionLocal, engine
from seat_booking.routers import health, public_routes
from seat_booking.services.kv_store import RedisKeyValueStore
from seat_booking.services.lock_service import SeatLock
from seat_booking.services.reservation_service import ReservationService
from seat_booking.services.seat_cache import SeatCache
from seat_booking.services.seat_store import SqlSeatStore

logger = logging.getLogger(__name__)


def build_services(app: FastAPI, redis, session_factory) -> None:
    """Wire adapters and services once and keep them on app.state."""
    kv_store = RedisKeyValueStore(redis)
    seat_store = SqlSeatStore(session_factory)
    seat_cache = SeatCache(kv_store, seat_store, ttl_seconds=settings.SEAT_CACHE_TTL_SECONDS)
    seat_lock = SeatLock(kv_store, ttl_ms=settings.SEAT_LOCK_TTL_MS)

    app.state.redis = redis
    app.state.seat_store = seat_store
    app.state.seat_cache = seat_cache
    app.state.reservation_service = ReservationService(
        seat_lock,
        seat_cache,
        seat_store,
        strict_release=settings.SEAT_LOCK_STRICT_RELEASE,
    )


# Lifespan events (startup/shutdown)
@asynccontextmanager
async def lifespan(app: FastAPI):
    Base.metadata.create_all(bind=engine)
    logger.info("Database tables created/verified")

    redis = await create_redis(settings.REDIS_URL)
    build_services(app, redis, SessionLocal)
    logger.info(
        f"Seat lock ttl={settings.SEAT_LOCK_TTL_MS}ms, cache ttl={settings.SEAT_CACHE_TTL_SECONDS}s, "
        f"strict release={settings.SEAT_LOCK_STRICT_RELEASE}"
    )

    yield

    try:
        await close_redis(redis)
    except Exception as e:
        logger.error(f"Error closing Redis: {e}")
    engine.dispose()
    logger.info("Shutdown complete")


def create_app() -> FastAPI:
    app = FastAPI(
        title=settings.PROJECT_NAME,
        description="Seat reservation API with Redis seat locks and cache-aside reads",
        version=settings.VERSION,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.cors_list(),
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.middleware("http")
    async def log_requests(request: Request, call_next):
        response = await call_next(request)
        logger.info(f"{request.method} {request.url.path} - Status: {response.status_code}")
        return response

    register_exception_handlers(app)

    app.include_router(health.router)
    # every public route lives under /api
    app.include_router(public_routes.router, prefix="/api")
    return app


configure_logging()
app = create_app()
