# seat_booking/routers/health.py
from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse, PlainTextResponse

from seat_booking.core.redis import health_check_redis
from seat_booking.deps.services import get_redis

router = APIRouter(tags=["health"])


@router.get("/", response_class=PlainTextResponse)
def root():
    # path probed by the load balancer
    return "Hello Load Balancer!"


@router.get("/health")
def health():
    return {"status": "ok"}


@router.get("/health/redis")
async def redis_health(redis=Depends(get_redis)):
    result = await health_check_redis(redis)
    status_code = 200 if result["status"] == "healthy" else 503
    return JSONResponse(status_code=status_code, content=result)
