"\"\"\"Candidate profile schema consumed for prefill.\"\"\""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class CandidateProfile(BaseModel):
    """Read-only candidate profile supplying prefill values."""

    first_name: str | None = None
    last_name: str | None = None
    email: str | None = None
    phone: str | None = None
    bio: str | None = None
    linkedin_url: str | None = None
    github_url: str | None = None
    portfolio_url: str | None = None

    model_config = ConfigDict(extra="ignore", frozen=True)
