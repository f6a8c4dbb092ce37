from __future__ import annotations
from fastapi import Request
from app.config import Settings
from app.services.notifier import Notifier


def get_settings(request: Request) -> Settings:
    return request.app.state.settings


def get_notifier(request: Request) -> Notifier | None:
    """The process-wide notifier built at startup; None when email is not configured."""
    return request.app.state.notifier
