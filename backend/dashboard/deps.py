# dashboard/deps.py
from __future__ import annotations

from fastapi import Request

from dashboard.config import Settings
from dashboard.services.repository import DemandRepository


def get_app_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_repository(request: Request) -> DemandRepository:
    """The repository is built once per app in create_app and shared by every request."""
    return request.app.state.repository
