from __future__ import annotations
from fastapi import APIRouter, Depends, Request
from datetime import datetime, timezone
from app.config import Settings
from app.dependencies import get_settings

router = APIRouter(tags=["system"])

@router.get("/health")
async def health(request: Request):
    notifier = request.app.state.notifier
    return {
        "status": "Server is running",
        "timestamp": datetime.now(timezone.utc).isoformat(),
        "email_configured": notifier is not None,
        "email_service": "SendGrid",
    }

@router.get("/version")
async def version(cfg: Settings = Depends(get_settings)):
    return {
        "name": cfg.app_name,
        "version": cfg.app_version,
        "git_sha": cfg.git_sha,
    }
