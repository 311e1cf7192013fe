"""Liveness, readiness and metrics endpoints."""

from __future__ import annotations

from fastapi import APIRouter, Depends, Response
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from srecconnect.domain.container import Container
from srecconnect.infra.auth import get_container

router = APIRouter(tags=["ops"])


@router.get("/health/live")
async def live() -> dict[str, str]:
	return {"status": "ok"}


@router.get("/health/ready")
async def ready(container: Container = Depends(get_container)) -> dict[str, object]:
	return {
		"status": "ok",
		"store": container.store.stats(),
		"live_connections": len(container.registry),
	}


@router.get("/metrics")
async def metrics() -> Response:
	return Response(content=generate_latest(), media_type=CONTENT_TYPE_LATEST)
