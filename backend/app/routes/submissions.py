from __future__ import annotations
import json
from urllib.parse import parse_qsl
from typing import Any
from fastapi import APIRouter, Depends, Request
from fastapi.responses import JSONResponse
import structlog
from app.config import Settings
from app.dependencies import get_notifier, get_settings
from app.errors import EmailNotConfigured, PayloadTooLarge, public_message
from app.schemas.submission import SubmissionAccepted, SubmissionRejected
from app.services.formatting import build_submission
from app.services.notifier import Notifier
from app.services.rate_limit import limit_submissions
from app.services.validation import validate

router = APIRouter(tags=["submissions"])
log = structlog.get_logger()


async def read_body(request: Request, limit: int) -> bytes:
    """Read the request body, refusing anything over `limit` bytes."""
    declared = request.headers.get("content-length")
    if declared and declared.isdigit() and int(declared) > limit:
        raise PayloadTooLarge()
    chunks: list[bytes] = []
    size = 0
    async for chunk in request.stream():
        size += len(chunk)
        if size > limit:
            raise PayloadTooLarge()
        chunks.append(chunk)
    return b"".join(chunks)


def parse_form(body: str) -> dict[str, Any]:
    """
    Decode an urlencoded form. Repeated keys and `key[]` keys become lists,
    so `teamMembers[]=Ann&teamMembers[]=Bo` reads the same as the JSON array.
    """
    form: dict[str, Any] = {}
    for key, value in parse_qsl(body, keep_blank_values=True):
        if key.endswith("[]"):
            form.setdefault(key[:-2], []).append(value)
        elif key in form:
            if not isinstance(form[key], list):
                form[key] = [form[key]]
            form[key].append(value)
        else:
            form[key] = value
    return form


def decode_payload(body: bytes, content_type: str) -> Any:
    # An empty or unparsable body is validated like an empty form
    if not body.strip():
        return {}
    try:
        if content_type.startswith("application/x-www-form-urlencoded"):
            return parse_form(body.decode("utf-8"))
        return json.loads(body)
    except (UnicodeDecodeError, json.JSONDecodeError):
        log.warning("submission_body_unparsable", size=len(body))
        return {}


def failure_response(exc: Exception, cfg: Settings) -> JSONResponse:
    content: dict[str, Any] = {"success": False, "message": public_message(exc)}
    if not cfg.is_production and not isinstance(exc, EmailNotConfigured):
        content["error"] = str(exc)
    return JSONResponse(status_code=500, content=content)


@router.post("/submit-mvp", dependencies=[Depends(limit_submissions)])
async def submit_mvp(
    request: Request,
    notifier: Notifier | None = Depends(get_notifier),
    cfg: Settings = Depends(get_settings),
):
    log.info("submission_received")

    if notifier is None:
        log.error("email_not_configured")
        return failure_response(EmailNotConfigured(), cfg)

    try:
        body = await read_body(request, cfg.max_body_bytes)
    except PayloadTooLarge as e:
        log.warning("submission_body_too_large", limit=cfg.max_body_bytes)
        return JSONResponse(status_code=413, content={"success": False, "message": e.message})
    payload = decode_payload(body, request.headers.get("content-type", ""))
    try:
        result = validate(payload)
        if not result.ok:
            log.info("submission_invalid", errors=result.errors)
            return JSONResponse(status_code=400, content=SubmissionRejected(errors=result.errors).model_dump())

        req = result.request
        log.info("submission_processing", team=req.team_name)
        submission = build_submission(req, cfg=cfg)
        await notifier.notify(submission)
    except Exception as e:
        log.exception("submission_failed", error_type=type(e).__name__)
        return failure_response(e, cfg)

    log.info(
        "submission_accepted",
        team=req.team_name,
        project=req.project_title,
        submission_id=submission.submission_id,
    )
    accepted = SubmissionAccepted(
        submission_id=submission.submission_id,
        submission_date=submission.submission_date,
        team_name=req.team_name,
        project_title=req.project_title,
    )
    return accepted.model_dump(by_alias=True)
