from fastapi import APIRouter, Depends, HTTPException

from quizboard.core.redis_client import get_redis
from quizboard.db.session import Database, get_database
from quizboard.schemas.health import HealthStatus

router = APIRouter(tags=["health"])


@router.get("/health", response_model=HealthStatus)
def health():
    return {"status": "ok"}


@router.get("/health/live", response_model=HealthStatus)
def live():
    return {"status": "live"}


@router.get("/health/ready", response_model=HealthStatus)
def ready(database: Database = Depends(get_database)):
    try:
        database.ping()
    except Exception as e:
        raise HTTPException(status_code=503, detail="db not ready") from e

    try:
        r = get_redis()
        r.ping()
    except Exception as e:
        raise HTTPException(status_code=503, detail="redis not ready") from e

    return {"status": "ready"}
