from __future__ import annotations
from typing import Any
from pydantic import BaseModel, ConfigDict, Field


class SubmissionRequest(BaseModel):
    """A submission form that passed validation. Field aliases match the JSON form."""
    model_config = ConfigDict(populate_by_name=True)

    team_name: str = Field(alias="teamName")
    team_email: str = Field(alias="teamEmail")
    project_title: str = Field(alias="projectTitle")
    project_background: str = Field(alias="projectBackground")
    problem_statement: str = Field(alias="problemStatement")
    # goals come from a fixed selection UI and are rendered as-is
    unsdg_goals: list[Any] = Field(alias="unsdgGoals")
    team_members: list[Any] = Field(alias="teamMembers")
    youtube_link: str = Field(alias="youtubeLink")
    github_repo: str = Field(alias="githubRepo")


class ValidationResult(BaseModel):
    errors: list[str] = Field(default_factory=list)
    request: SubmissionRequest | None = None

    @property
    def ok(self) -> bool:
        return not self.errors


class Submission(BaseModel):
    """One formatted entry; lives only for the duration of a request."""
    request: SubmissionRequest
    submission_id: str
    submission_date: str
    members: list[str]
    admin_body: str
    participant_body: str


class SubmissionAccepted(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    success: bool = True
    message: str = "MVP submission received successfully!"
    submission_id: str = Field(serialization_alias="submissionId")
    submission_date: str = Field(serialization_alias="submissionDate")
    team_name: str = Field(serialization_alias="teamName")
    project_title: str = Field(serialization_alias="projectTitle")


class SubmissionRejected(BaseModel):
    success: bool = False
    message: str = "Validation failed"
    errors: list[str]
