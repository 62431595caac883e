from fastapi import APIRouter, Depends

from dashboard.deps import get_repository
from dashboard.schemas.common import ok, meta_now
from dashboard.services.repository import DemandRepository

router = APIRouter(prefix="/api/health", tags=["health"])

@router.get("")
def healthcheck(repo: DemandRepository = Depends(get_repository)):
    return ok(
        data={"status": "ok", "data_loaded": repo.loaded},
        meta=meta_now()
    )
