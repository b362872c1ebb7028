"""Health check API endpoints."""

from fastapi import APIRouter, Depends
from fastapi.responses import JSONResponse
from sqlalchemy.ext.asyncio import AsyncSession

from ..core.schemas.common import HealthCheckResponse
from ..core.services import HealthService
from ..database import get_db_session

router = APIRouter(prefix="/health", tags=["health"])


@router.get("", response_model=HealthCheckResponse)
async def health_check(session: AsyncSession = Depends(get_db_session)):
    """Overall status; 503 when the database is unreachable."""
    health_service = HealthService(session)
    health = await health_service.get_health_status()
    if health.status == "unhealthy":
        return JSONResponse(status_code=503, content=health.model_dump(mode="json"))
    return health
