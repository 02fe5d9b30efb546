"""Validation of user-supplied text."""

from chemwiki.domain.error import ValidationError
from chemwiki.util.text import escape_markup


def clean_text(value: str | None, *, field: str, max_length: int) -> str:
    """Validate, trim and escape a piece of user text.

    Length limits apply to the trimmed input, before escaping.

    Args:
        value: Raw text from the caller
        field: Human-readable field name for error messages
        max_length: Maximum number of characters after trimming

    Returns:
        Trimmed and escaped text, ready to store

    Raises:
        ValidationError: If the text is missing, blank or too long
    """
    if value is None or not isinstance(value, str):
        raise ValidationError(f"{field} is required")

    trimmed = value.strip()
    if not trimmed:
        raise ValidationError(f"{field} cannot be empty")
    if len(trimmed) > max_length:
        raise ValidationError(f"{field} cannot be more than {max_length} characters")

    return escape_markup(trimmed)
