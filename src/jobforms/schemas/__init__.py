"\"\"\"Pydantic schema definitions for forms, profiles and submissions.\"\"\""

from __future__ import annotations

from .application import ApplicationAnswer, ApplicationSubmission, ProfileUpdate
from .candidate import CandidateProfile
from .form import (
    OPTION_KINDS,
    AnswerValue,
    FieldDescriptor,
    FieldOption,
    FormDefinition,
    InputKind,
    coerce_answer,
    empty_value,
    order_fields,
)

__all__ = [
    "AnswerValue",
    "ApplicationAnswer",
    "ApplicationSubmission",
    "CandidateProfile",
    "FieldDescriptor",
    "FieldOption",
    "FormDefinition",
    "InputKind",
    "OPTION_KINDS",
    "ProfileUpdate",
    "coerce_answer",
    "empty_value",
    "order_fields",
]
