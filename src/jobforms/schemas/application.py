"\"\"\"Payload schemas for posting a completed application.\"\"\""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict, Field


class ApplicationAnswer(BaseModel):
    """Answer to a job-specific form field."""

    job_form_field_id: str
    answer_text: str

    model_config = ConfigDict(extra="forbid")


class ProfileUpdate(BaseModel):
    """Profile attributes collected through the application form."""

    first_name: str | None = None
    last_name: str | None = None
    phone: str | None = None
    bio: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    portfolio_url: str | None = None

    model_config = ConfigDict(extra="forbid")

    def is_empty(self) -> bool:
        return not self.model_dump(exclude_none=True)


class ApplicationSubmission(BaseModel):
    """Body sent to the applications API."""

    job_id: str | None = None
    answers: list[ApplicationAnswer] = Field(default_factory=list)
    profile_update: ProfileUpdate = Field(default_factory=ProfileUpdate)

    model_config = ConfigDict(extra="forbid")
