"""
Contact validation and normalization.

Emails are trimmed and lowercased; phone numbers must already be in
E.164 form (``+`` followed by up to 15 digits) and are only trimmed.
"""

import re
from typing import Union

from .exceptions import InvalidContactError
from .models import ContactKind, ContactSource

EMAIL_REGEX = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
E164_PHONE_REGEX = re.compile(r"^\+[1-9]\d{1,14}$")


def validate_email(email: str) -> bool:
    """Check an email address against the accepted format."""
    return bool(email) and EMAIL_REGEX.match(email) is not None


def validate_phone(phone: str) -> bool:
    """Check a phone number is in E.164 format (+1234567890)."""
    return bool(phone) and E164_PHONE_REGEX.match(phone) is not None


def normalize_contact(kind: ContactKind, value: str) -> str:
    if kind == ContactKind.EMAIL:
        return value.strip().lower()
    return value.strip()


def validate_contact_input(
    kind: Union[ContactKind, str, None],
    value: str | None,
    source: Union[ContactSource, str, None],
) -> tuple[ContactKind, str, ContactSource]:
    """
    Validate raw contact input and return it normalized.

    Every problem is reported at once so a form can show them together.

    Returns:
        Tuple of (kind, normalized value, source)

    Raises:
        InvalidContactError: With all messages in ``details["errors"]``
    """
    errors: list[str] = []

    parsed_kind: ContactKind | None = None
    if not kind:
        errors.append("Contact kind is required")
    else:
        try:
            parsed_kind = ContactKind(kind)
        except ValueError:
            errors.append('Contact kind must be "email" or "phone"')

    normalized = normalize_contact(parsed_kind, value) if (value and parsed_kind) else (value or "")
    if not normalized.strip():
        errors.append("Contact value is required")
    elif parsed_kind == ContactKind.EMAIL and not validate_email(normalized):
        errors.append("Invalid email format")
    elif parsed_kind == ContactKind.PHONE and not validate_phone(normalized):
        errors.append("Invalid phone format (must be E.164 format like +1234567890)")

    parsed_source: ContactSource | None = None
    if not source:
        errors.append("Contact source is required")
    else:
        try:
            parsed_source = ContactSource(source)
        except ValueError:
            allowed = ", ".join(s.value for s in ContactSource)
            errors.append(f"Contact source must be one of: {allowed}")

    if errors:
        raise InvalidContactError(errors)

    return parsed_kind, normalized, parsed_source
