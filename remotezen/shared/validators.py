"""Shared validation utilities"""

import re
from typing import Optional

EMAIL_PATTERN = r"^[a-zA-Z0-9._%+-]+@[a-zA-Z0-9.-]+\.[a-zA-Z]{2,}$"


def validate_email(email: Optional[str]) -> Optional[str]:
    """
    Validate email format.

    Args:
        email: Email address string

    Returns:
        Lowercase email address

    Raises:
        ValueError: If email format is invalid
    """
    if not email:
        return email

    email = email.strip().lower()

    if not re.match(EMAIL_PATTERN, email):
        raise ValueError("Invalid email format")

    return email


def validate_required_text(value: Optional[str], field_name: str) -> str:
    """Strip a required text field and reject blank values"""
    if value is None or not value.strip():
        raise ValueError(f"{field_name} is required")
    return value.strip()


def clean_optional_text(value: Optional[str]) -> Optional[str]:
    """Strip optional text, turning blank strings into None"""
    if value is None:
        return None
    value = value.strip()
    return value or None
