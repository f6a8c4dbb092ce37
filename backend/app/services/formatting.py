from __future__ import annotations
import secrets, string, time
from datetime import datetime, timezone as dt_tz
from typing import Any, Iterable
from zoneinfo import ZoneInfo
from app.config import Settings, settings as default_settings
from app.schemas.submission import Submission, SubmissionRequest
from app.services.validation import clean_members

ALPHABET = string.ascii_lowercase + string.digits
RULE = "═══════════════════════════════════════"

ADMIN_TEMPLATE = """\
{event_upper} - MVP SUBMISSION
Organized by {organizer}
{university}

{rule}

📋 SUBMISSION DETAILS:
Submission ID: {submission_id}
Submitted: {submission_date} (EAT)

👥 TEAM INFORMATION:
Team Name: {team_name}
Team Email: {team_email}
Project Title: {project_title}

📖 PROJECT BACKGROUND:
{project_background}

❗ PROBLEM STATEMENT:
{problem_statement}

🎯 UN SUSTAINABLE DEVELOPMENT GOALS:
{sdgs}

👨‍💻 TEAM MEMBERS:
{members}

🔗 PROJECT LINKS:
🎥 YouTube Demo: {youtube_link}
💻 GitHub Repository: {github_repo}

{rule}

📧 Reply to team at: {team_email}
📞 This submission was automatically processed by the MVP Submission System.

{organizer}
{university}
Contact: {admin_email}"""

PARTICIPANT_TEMPLATE = """\
Dear {team_name} Team,

✅ Your MVP submission has been successfully received!

{rule}

📋 SUBMISSION CONFIRMATION:
Project: {project_title}
Submission ID: {submission_id}
Submitted: {submission_date} (EAT)

Your submission includes:
✓ Project background and problem statement
✓ {goal_count} UN SDG goal(s) selected
✓ {member_count} team member(s)
✓ YouTube demonstration video
✓ GitHub repository link

{rule}
📧 NEED HELP?
For any questions or concerns, please contact us at:
{admin_email}

Thank you for participating in the {event_name}!

Best regards,
{organizer}
{university}

{rule}
This is an automated confirmation. Please do not reply to this email."""


def _base36(n: int) -> str:
    out = ""
    while True:
        n, r = divmod(n, 36)
        out = ALPHABET[r] + out
        if not n:
            return out


def new_submission_id(suffix_length: int = 10) -> str:
    """Millisecond timestamp in base 36 plus a random suffix; a display/trace token only."""
    prefix = _base36(time.time_ns() // 1_000_000)
    return prefix + "".join(secrets.choice(ALPHABET) for _ in range(suffix_length))


def format_submission_date(instant: datetime, tz_name: str) -> str:
    """
    Render an instant as e.g. "October 18, 2026 at 04:43 PM" in `tz_name`.

    Naive datetimes are taken to be UTC.
    """
    if instant.tzinfo is None:
        instant = instant.replace(tzinfo=dt_tz.utc)
    local = instant.astimezone(ZoneInfo(tz_name))
    return f"{local:%B} {local.day}, {local.year} at {local:%I:%M %p}"


def numbered(items: Iterable[Any]) -> str:
    return "\n".join(f"{i}. {item}" for i, item in enumerate(items, start=1))


def build_submission(
    request: SubmissionRequest,
    now: datetime | None = None,
    cfg: Settings | None = None,
) -> Submission:
    cfg = cfg or default_settings
    now = now or datetime.now(dt_tz.utc)
    members = clean_members(request.team_members)
    submission_id = new_submission_id()
    submission_date = format_submission_date(now, cfg.submission_timezone)

    context = dict(
        rule=RULE,
        event_name=cfg.event_name,
        event_upper=cfg.event_name.upper(),
        organizer=cfg.organizer_name,
        university=cfg.university_name,
        admin_email=cfg.admin_email,
        submission_id=submission_id,
        submission_date=submission_date,
        team_name=request.team_name,
        team_email=request.team_email,
        project_title=request.project_title,
        project_background=request.project_background,
        problem_statement=request.problem_statement,
        youtube_link=request.youtube_link,
        github_repo=request.github_repo,
        sdgs=numbered(request.unsdg_goals),
        members=numbered(members),
        goal_count=len(request.unsdg_goals),
        member_count=len(members),
    )
    return Submission(
        request=request,
        submission_id=submission_id,
        submission_date=submission_date,
        members=members,
        admin_body=ADMIN_TEMPLATE.format(**context).strip(),
        participant_body=PARTICIPANT_TEMPLATE.format(**context).strip(),
    )
