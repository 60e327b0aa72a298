"""
Application configuration and settings
"""
import os
from dotenv import load_dotenv

load_dotenv()


def _env_bool(name: str, default: str) -> bool:
    return os.getenv(name, default).strip().lower() in ("1", "true", "yes", "on")


def _database_url() -> str:
    url = os.getenv("DATABASE_URL")
    if url:
        return url
    if os.getenv("DB_HOST"):
        return (
            f"postgresql://{os.getenv('DB_USER')}:{os.getenv('DB_PASSWORD')}@"
            f"{os.getenv('DB_HOST')}:{os.getenv('DB_PORT', '5432')}/{os.getenv('DB_NAME')}"
        )
    return "sqlite:///./seat_booking.db"


# Database Configuration
DATABASE_URL = _database_url()

# Redis Configuration
REDIS_URL = os.getenv("REDIS_URL", "redis://localhost:6379/0")
REDIS_SOCKET_TIMEOUT = float(os.getenv("REDIS_SOCKET_TIMEOUT", "2.0"))
REDIS_SOCKET_CONNECT_TIMEOUT = float(os.getenv("REDIS_SOCKET_CONNECT_TIMEOUT", "5.0"))

# Seat locking / caching
SEAT_LOCK_TTL_MS = int(os.getenv("SEAT_LOCK_TTL_MS", "100000"))  # 100 seconds to finish a reservation
SEAT_CACHE_TTL_SECONDS = int(os.getenv("SEAT_CACHE_TTL_SECONDS", "300"))  # 5 minutes
SEAT_LOCK_STRICT_RELEASE = _env_bool("SEAT_LOCK_STRICT_RELEASE", "true")

CORS_ORIGINS = os.getenv("CORS_ORIGINS", "*")
LOG_LEVEL = os.getenv("LOG_LEVEL", "INFO")


class Settings:
    PROJECT_NAME: str = "Seat Booking API"
    VERSION: str = "1.0.0"
    DATABASE_URL = DATABASE_URL
    REDIS_URL = REDIS_URL
    REDIS_SOCKET_TIMEOUT = REDIS_SOCKET_TIMEOUT
    REDIS_SOCKET_CONNECT_TIMEOUT = REDIS_SOCKET_CONNECT_TIMEOUT
    SEAT_LOCK_TTL_MS = SEAT_LOCK_TTL_MS
    SEAT_CACHE_TTL_SECONDS = SEAT_CACHE_TTL_SECONDS
    SEAT_LOCK_STRICT_RELEASE = SEAT_LOCK_STRICT_RELEASE
    CORS_ORIGINS = CORS_ORIGINS
    LOG_LEVEL = LOG_LEVEL

    def cors_list(self) -> list:
        return [x.strip() for x in self.CORS_ORIGINS.split(",") if x.strip()]


settings = Settings()
