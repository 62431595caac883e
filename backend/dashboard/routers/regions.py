from fastapi import APIRouter, Depends

from dashboard.config import Settings
from dashboard.deps import get_app_settings
from dashboard.models import ENERGY_SOURCES, Region
from dashboard.schemas.common import ok, meta_now

router = APIRouter(prefix="/api/regions", tags=["regions"])


@router.get("")
def list_regions(settings: Settings = Depends(get_app_settings)):
    """Reference data for the filter bar: regions, their grid operators and the defaults."""
    regions = [{"value": r.value, "label": r.label, "sources": [r.source]} for r in Region]
    return ok(
        data={
            "regions": regions,
            "energySources": ENERGY_SOURCES,
            "defaults": {
                "state": settings.DEFAULT_REGION,
                "startDate": settings.DEFAULT_START_DATE,
                "endDate": settings.DEFAULT_END_DATE,
                "today": settings.REAL_TODAY,
            },
        },
        meta=meta_now(),
    )
