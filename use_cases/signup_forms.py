"""Field validation for the login and sign-up forms."""

import re
from dataclasses import dataclass, field
from typing import Dict, Optional

_EMAIL_RE = re.compile(r"^[^@\s]+@[^@\s]+\.[^@\s]+$")

MIN_PASSWORD_LENGTH = 6
MIN_NAME_LENGTH = 2
MIN_PHONE_LENGTH = 10


@dataclass(frozen=True)
class FormValidation:
    errors: Dict[str, str] = field(default_factory=dict)

    @property
    def is_valid(self) -> bool:
        return not self.errors


def _check_email(email: str, errors: Dict[str, str]) -> None:
    if not _EMAIL_RE.match((email or "").strip()):
        errors["email"] = "Please enter a valid email"


def _check_password(password: str, errors: Dict[str, str]) -> None:
    if len(password or "") < MIN_PASSWORD_LENGTH:
        errors["password"] = f"Password must be at least {MIN_PASSWORD_LENGTH} characters"


def _check_profile(name: str, phone_number: str, errors: Dict[str, str]) -> None:
    if len((name or "").strip()) < MIN_NAME_LENGTH:
        errors["name"] = f"Name must be at least {MIN_NAME_LENGTH} characters"
    if len((phone_number or "").strip()) < MIN_PHONE_LENGTH:
        errors["phone_number"] = "Please enter a valid phone number"


def validate_login(email: str, password: str) -> FormValidation:
    errors: Dict[str, str] = {}
    _check_email(email, errors)
    _check_password(password, errors)
    return FormValidation(errors)


def validate_profile(name: str, phone_number: str) -> FormValidation:
    """Rules for the fields an agent may edit on their own profile."""
    errors: Dict[str, str] = {}
    _check_profile(name, phone_number, errors)
    return FormValidation(errors)


def validate_signup(
    name: str,
    email: str,
    phone_number: str,
    password: str,
    career: Optional[str] = None,
    payment_receipt_url: Optional[str] = None,
) -> FormValidation:
    errors: Dict[str, str] = {}
    _check_profile(name, phone_number, errors)
    _check_email(email, errors)
    _check_password(password, errors)
    if not (payment_receipt_url or "").strip():
        errors["payment_receipt_url"] = "Please upload your payment receipt"
    return FormValidation(errors)
