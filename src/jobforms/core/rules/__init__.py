"\"\"\"Field rule implementations for the form validator.\"\"\""

from .required import RequiredRule
from .email import EmailRule
from .phone import PhoneRule

__all__ = [
    "RequiredRule",
    "EmailRule",
    "PhoneRule",
]
