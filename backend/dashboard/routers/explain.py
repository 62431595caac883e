# dashboard/routers/explain.py
from __future__ import annotations

import asyncio
import json
import random
from typing import AsyncIterator, List

import structlog
from fastapi import APIRouter, Depends
from fastapi.responses import StreamingResponse

from dashboard.config import Settings
from dashboard.deps import get_app_settings
from dashboard.schemas.explain import ExplainRequest
from dashboard.services.explainer import generate_explanation

router = APIRouter(prefix="/api", tags=["explain"])

logger = structlog.get_logger(__name__)


def _event(payload: dict) -> str:
    return f"data: {json.dumps(payload)}\n\n"


async def stream_chunks(chunks: List[str], delay_min_ms: int, delay_max_ms: int) -> AsyncIterator[str]:
    """Emit each chunk as an SSE event, pausing between them, then a final done event."""
    for chunk in chunks:
        yield _event({"text": chunk})
        if delay_max_ms > 0:
            await asyncio.sleep(random.uniform(delay_min_ms, delay_max_ms) / 1000)
    yield _event({"done": True})


@router.post("/explain")
async def explain(body: ExplainRequest, settings: Settings = Depends(get_app_settings)):
    params = body.to_params()
    chunks = generate_explanation(params)
    logger.info(
        "explain.start",
        state=params.state,
        date=params.date,
        comparison=params.is_comparison_point,
        chunks=len(chunks),
    )
    return StreamingResponse(
        stream_chunks(chunks, settings.EXPLAIN_DELAY_MIN_MS, settings.EXPLAIN_DELAY_MAX_MS),
        media_type="text/event-stream",
        headers={"Cache-Control": "no-cache", "Connection": "keep-alive"},
    )
