# dashboard/errors.py
from __future__ import annotations

from typing import Any, Dict, Optional

from fastapi import Request, status as http
from fastapi.responses import JSONResponse

from dashboard.schemas.common import fail, meta_now


class DashboardError(Exception):
    """Request-level failure rendered as an ok=False envelope."""

    code = "BAD_REQUEST"
    status_code = http.HTTP_400_BAD_REQUEST

    def __init__(self, message: str, *, details: Optional[Dict[str, Any]] = None) -> None:
        super().__init__(message)
        self.message = message
        self.details = details


class UnknownRegionError(DashboardError):
    code = "UNKNOWN_REGION"
    status_code = http.HTTP_404_NOT_FOUND


class UnknownEnergySourceError(DashboardError):
    code = "UNKNOWN_ENERGY_SOURCE"


class InvalidRangeError(DashboardError):
    code = "INVALID_RANGE"


class PointNotFoundError(DashboardError):
    code = "POINT_NOT_FOUND"
    status_code = http.HTTP_404_NOT_FOUND


def dashboard_error_handler(request: Request, exc: DashboardError) -> JSONResponse:
    params = dict(request.query_params) or {}
    return fail(
        code=exc.code,
        message=exc.message,
        status_code=exc.status_code,
        details=exc.details,
        meta=meta_now(**params),
    )
