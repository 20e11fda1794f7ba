"""
Input validation for command arguments.

Validators run before any network call and raise InvalidInputError with a
message that can be shown to the user as-is. Sanitizers strip control
characters and surrounding whitespace from free text.
"""

import re
from typing import Any, Iterable, Optional

from linear_cli.errors import InvalidInputError

# Issue identifiers such as ENG-123
ISSUE_ID_REGEX = re.compile(r"[A-Za-z]+-\d+")

EMAIL_REGEX = re.compile(r"[\w+\-.]+@[a-z\d\-.]+\.[a-z]+", re.IGNORECASE)

CONTROL_CHARS_REGEX = re.compile(r"[\x00-\x1F\x7F]")

VALID_PRIORITIES = range(0, 5)

MAX_LIMIT = 100


def validate_issue_id(issue_id: str) -> str:
    """
    Validate issue identifier format.

    Args:
        issue_id: Issue identifier, e.g. "ENG-123"

    Returns:
        The identifier, unchanged

    Raises:
        InvalidInputError: If the identifier is not letters-hyphen-digits
    """
    if not isinstance(issue_id, str) or not ISSUE_ID_REGEX.fullmatch(issue_id):
        raise InvalidInputError(
            f"Invalid issue ID format: '{issue_id}'. Expected format like 'ABC-123'."
        )
    return issue_id


def validate_priority(priority: Any) -> int:
    """
    Validate priority value.

    Accepts integers and numeric strings in 0-4 (0=None, 1=Urgent, 2=High,
    3=Medium, 4=Low).

    Returns:
        Priority as int

    Raises:
        InvalidInputError: If the value is not an integer in 0-4
    """
    if isinstance(priority, bool):
        raise InvalidInputError(f"Invalid priority value: {priority}. Expected a number between 0-4.")

    try:
        value = int(str(priority).strip())
    except (TypeError, ValueError):
        raise InvalidInputError(
            f"Invalid priority value: {priority}. Expected a number between 0-4."
        ) from None

    if value not in VALID_PRIORITIES:
        raise InvalidInputError(f"Invalid priority value: {value}. Expected a number between 0-4.")
    return value


def sanitize_string(value: Optional[str]) -> Optional[str]:
    """Remove control characters and trim whitespace."""
    if value is None:
        return None
    return CONTROL_CHARS_REGEX.sub("", str(value)).strip()


def _require_text(value: Optional[str], message: str) -> str:
    sanitized = sanitize_string(value)
    if not sanitized:
        raise InvalidInputError(message)
    return sanitized


def validate_team_name(team_name: Optional[str]) -> str:
    return _require_text(team_name, "Team name cannot be blank.")


def validate_title(title: Optional[str]) -> str:
    return _require_text(title, "Title cannot be blank.")


def validate_comment_body(body: Optional[str]) -> str:
    return _require_text(body, "Comment body cannot be blank.")


def validate_description(description: Optional[str]) -> Optional[str]:
    if description is None:
        return None
    return sanitize_string(description)


def is_email(value: str) -> bool:
    return bool(EMAIL_REGEX.fullmatch(value or ""))


def validate_email(email: str) -> str:
    if not is_email(email):
        raise InvalidInputError(f"Invalid email format: '{email}'.")
    return email


def validate_limit(limit: Any, maximum: int = MAX_LIMIT) -> int:
    """
    Validate a --limit value.

    Args:
        limit: Requested number of items
        maximum: Upper bound the value is clamped to

    Returns:
        min(limit, maximum)

    Raises:
        InvalidInputError: If limit is not a positive integer
    """
    try:
        value = int(limit)
    except (TypeError, ValueError):
        raise InvalidInputError(f"Limit must be a positive number, got: {limit}") from None

    if value <= 0:
        raise InvalidInputError(f"Limit must be a positive number, got: {value}")

    return min(value, maximum)


def validate_choice(value: Optional[str], choices: Iterable[str], name: str) -> str:
    """Normalize value to lower case and check it is one of choices."""
    choices = list(choices)
    normalized = (value or "").strip().lower()
    if normalized not in choices:
        quoted = ", ".join(f"'{c}'" for c in choices)
        raise InvalidInputError(f"Invalid {name}: {value}. Must be one of {quoted}.")
    return normalized
