# backend/routes/health.py
from datetime import datetime, timezone
from fastapi import APIRouter

from database import check_connection

router = APIRouter(tags=["Health"])


# Liveness plus store connectivity; never fails because the database is down
@router.get("/health")
def health():
    connected = check_connection()
    return {
        "status": "ok" if connected else "degraded",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "database": "connected" if connected else "disconnected",
    }
