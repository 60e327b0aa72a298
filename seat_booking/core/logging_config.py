import logging
import sys

from seat_booking.core.config import LOG_LEVEL


def configure_logging(level: str = LOG_LEVEL) -> None:
    """Configure process-wide logging to stdout."""
    logging.basicConfig(
        level=getattr(logging, level.upper(), logging.INFO),
        format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
        handlers=[logging.StreamHandler(sys.stdout)],
    )

    # Keep third-party libraries quiet
    logging.getLogger("uvicorn").setLevel(logging.INFO)
    logging.getLogger("sqlalchemy").setLevel(logging.WARNING)
