import re

from django.core.exceptions import ValidationError

SSN_DIGITS = 11
PHONE_DIGITS = 11
INTERNATIONAL_PHONE_DIGITS = 13


def to_digits_only(value):
    return re.sub(r"\D", "", value or "")


def validate_ssn(value):
    if len(to_digits_only(value)) != SSN_DIGITS:
        raise ValidationError(f"SSN must have exactly {SSN_DIGITS} digits.")


def validate_phone(value):
    if len(to_digits_only(value)) != PHONE_DIGITS:
        raise ValidationError(f"Phone must have exactly {PHONE_DIGITS} digits.")


def validate_international_phone(value):
    if len(to_digits_only(value)) != INTERNATIONAL_PHONE_DIGITS:
        raise ValidationError("Driver phone must have 13 digits in the format +00 (00) 00000-0000.")


def format_ssn(value):
    """Render up to 11 digits as 000.000.000-00, partially for short input."""
    digits = to_digits_only(value)[:SSN_DIGITS]
    if len(digits) <= 3:
        return digits
    if len(digits) <= 6:
        return f"{digits[:3]}.{digits[3:]}"
    if len(digits) <= 9:
        return f"{digits[:3]}.{digits[3:6]}.{digits[6:]}"
    return f"{digits[:3]}.{digits[3:6]}.{digits[6:9]}-{digits[9:]}"


def format_phone(value):
    digits = to_digits_only(value)[:PHONE_DIGITS]
    if len(digits) <= 2:
        return f"({digits}" if digits else ""
    if len(digits) <= 7:
        return f"({digits[:2]}) {digits[2:]}"
    return f"({digits[:2]}) {digits[2:7]}-{digits[7:]}"


def format_international_phone(value):
    digits = to_digits_only(value)[:INTERNATIONAL_PHONE_DIGITS]
    if not digits:
        return ""
    if len(digits) <= 2:
        return f"+{digits}"
    if len(digits) <= 4:
        return f"+{digits[:2]} ({digits[2:]}"
    if len(digits) <= 9:
        return f"+{digits[:2]} ({digits[2:4]}) {digits[4:]}"
    return f"+{digits[:2]} ({digits[2:4]}) {digits[4:9]}-{digits[9:]}"
