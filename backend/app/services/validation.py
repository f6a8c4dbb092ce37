from __future__ import annotations
import re
from collections.abc import Mapping
from typing import Any
from app.schemas.submission import SubmissionRequest, ValidationResult

# Evaluation order is part of the contract: errors come back in this order.
REQUIRED_FIELDS: dict[str, str] = {
    "teamName": "Team Name",
    "teamEmail": "Team Email Address",
    "projectTitle": "Project Title",
    "projectBackground": "Project Background",
    "problemStatement": "Problem Statement",
    "youtubeLink": "YouTube Link",
    "githubRepo": "GitHub Repository",
}

EMAIL_RE = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
YOUTUBE_HOSTS = ("youtube.com", "youtu.be")
GITHUB_HOST = "github.com"

INVALID_EMAIL = "Team Email Address (must be a valid email format)"
MISSING_SDGS = "UN Sustainable Development Goals (select at least one)"
MISSING_MEMBERS = "Team Members (at least one member required)"
INVALID_YOUTUBE = "YouTube Link (must be a valid YouTube URL)"
INVALID_GITHUB = "GitHub Repository (must be a valid GitHub URL)"


def is_blank(value: Any) -> bool:
    return not isinstance(value, str) or not value.strip()


def clean_members(members: Any) -> list[str]:
    """Trimmed, non-blank member names in their original order."""
    if not isinstance(members, list):
        return []
    return [m.strip() for m in members if isinstance(m, str) and m.strip()]


def collect_errors(payload: Mapping[str, Any]) -> list[str]:
    """Run every rule against the payload and return all failures, in rule order."""
    errors: list[str] = []

    for field, display_name in REQUIRED_FIELDS.items():
        if is_blank(payload.get(field)):
            errors.append(display_name)

    email = payload.get("teamEmail")
    if not is_blank(email) and not EMAIL_RE.match(email.strip()):
        errors.append(INVALID_EMAIL)

    goals = payload.get("unsdgGoals")
    if not isinstance(goals, list) or not goals:
        errors.append(MISSING_SDGS)

    if not clean_members(payload.get("teamMembers")):
        errors.append(MISSING_MEMBERS)

    youtube = payload.get("youtubeLink")
    if not is_blank(youtube) and not any(h in youtube for h in YOUTUBE_HOSTS):
        errors.append(INVALID_YOUTUBE)

    github = payload.get("githubRepo")
    if not is_blank(github) and GITHUB_HOST not in github:
        errors.append(INVALID_GITHUB)

    return errors


def validate(payload: Any) -> ValidationResult:
    """
    Validate an untrusted submission payload.

    Anything that is not a JSON object is checked as an empty form, so the
    caller always gets the complete list of failures.
    """
    if not isinstance(payload, Mapping):
        payload = {}
    errors = collect_errors(payload)
    if errors:
        return ValidationResult(errors=errors)
    return ValidationResult(request=SubmissionRequest.model_validate(dict(payload)))
