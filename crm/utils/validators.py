"""Validation utilities."""

import re

from email_validator import EmailNotValidError
from email_validator import validate_email as _validate_email

from crm.config.settings import settings

from .exceptions import ValidationError


def validate_email(email: str) -> str:
    """Validate and normalize email address."""
    try:
        validated_email = _validate_email(email, check_deliverability=False)
        return validated_email.normalized
    except EmailNotValidError as e:
        raise ValidationError(f"Invalid email address: {e}")


def validate_password(password: str) -> None:
    """Validate password length against the configured policy."""
    if len(password) < settings.PASSWORD_MIN_LENGTH:
        raise ValidationError(
            f"Password must be at least {settings.PASSWORD_MIN_LENGTH} characters"
        )

    if len(password) > 128:
        raise ValidationError("Password must be less than 128 characters")


def validate_phone_number(phone: str) -> None:
    """Validate phone number format."""
    if not phone:
        return  # Phone is optional

    # Remove all non-digit characters
    digits_only = re.sub(r"\D", "", phone)

    # Check length (7-15 digits is standard for international numbers)
    if len(digits_only) < 7 or len(digits_only) > 15:
        raise ValidationError("Phone number must be between 7 and 15 digits")


def validate_currency(currency: str) -> str:
    """Validate an ISO 4217 style currency code."""
    if not re.match(r"^[A-Za-z]{3}$", currency):
        raise ValidationError("Currency must be a 3-letter code (e.g. USD)")
    return currency.upper()


def validate_url(url: str) -> None:
    """Validate URL format."""
    if not url:
        return  # URL is optional

    url_pattern = re.compile(
        r"^https?://"  # http:// or https://
        r"(?:(?:[A-Z0-9](?:[A-Z0-9-]{0,61}[A-Z0-9])?\.)+[A-Z]{2,6}\.?|"  # domain...
        r"localhost|"  # localhost...
        r"\d{1,3}\.\d{1,3}\.\d{1,3}\.\d{1,3})"  # ...or ip
        r"(?::\d+)?"  # optional port
        r"(?:/?|[/?]\S+)$",
        re.IGNORECASE,
    )

    if not url_pattern.match(url):
        raise ValidationError("Invalid URL format")
