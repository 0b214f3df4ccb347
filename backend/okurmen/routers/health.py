from datetime import datetime, timezone

from fastapi import APIRouter
from fastapi.responses import JSONResponse

from .. import db

router = APIRouter(prefix="/health", tags=["health"])


@router.get("")
def health():
	return {"status": "ok", "timestamp": datetime.now(timezone.utc).isoformat()}


@router.get("/ready")
def ready():
	healthy = db.check_health()
	return JSONResponse(
		status_code=200 if healthy else 503,
		content={"status": "ready" if healthy else "not_ready", "checks": {"database": healthy}},
	)
