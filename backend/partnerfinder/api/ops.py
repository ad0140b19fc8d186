"""Operations endpoints providing health checks and metrics."""

from __future__ import annotations

import logging
from typing import Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Response, status
from fastapi.responses import JSONResponse
from prometheus_client import CONTENT_TYPE_LATEST, generate_latest

from partnerfinder.infra import postgres
from partnerfinder.infra.redis import redis_client
from partnerfinder.settings import settings

logger = logging.getLogger(__name__)

router = APIRouter(prefix="", tags=["ops"])


def _resolve_token(x_admin_token: Optional[str], authorization: Optional[str]) -> Optional[str]:
	if x_admin_token:
		return x_admin_token
	if authorization and authorization.lower().startswith("bearer "):
		return authorization.split(" ", 1)[1]
	return None


async def require_metrics_access(
	X_Admin_Token: Optional[str] = Header(default=None, alias="X-Admin-Token"),
	authorization: Optional[str] = Header(default=None, alias="Authorization"),
) -> None:
	if settings.obs_metrics_public:
		return
	token = settings.obs_admin_token
	if not token:
		raise HTTPException(status.HTTP_403_FORBIDDEN, detail="admin_token_not_configured")
	if _resolve_token(X_Admin_Token, authorization) != token:
		raise HTTPException(status.HTTP_403_FORBIDDEN, detail="forbidden")


@router.get("/health/live")
async def health_live() -> dict[str, str]:
	return {"status": "ok", "service": settings.service_name, "version": settings.git_commit}


@router.get("/health/ready")
async def health_ready() -> Response:
	checks: dict[str, str] = {}
	try:
		async with postgres.connection() as conn:
			await conn.execute("SELECT 1")
		checks["postgres"] = "ok"
	except Exception:
		logger.warning("postgres readiness check failed", exc_info=True)
		checks["postgres"] = "fail"
	try:
		await redis_client.ping()
		checks["redis"] = "ok"
	except Exception:
		logger.warning("redis readiness check failed", exc_info=True)
		checks["redis"] = "fail"
	ready = all(value == "ok" for value in checks.values())
	payload = {"status": "ok" if ready else "degraded", "checks": checks}
	return JSONResponse(content=payload, status_code=200 if ready else status.HTTP_503_SERVICE_UNAVAILABLE)


@router.get("/metrics")
async def prometheus_metrics(_: None = Depends(require_metrics_access)) -> Response:
	payload = generate_latest()
	return Response(content=payload, media_type=CONTENT_TYPE_LATEST)
