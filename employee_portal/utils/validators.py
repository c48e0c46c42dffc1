"""
Field Validators
Stateless syntax checks applied to every operator-supplied value before it is
stored or used in a filter.
"""
import re
from datetime import date
from typing import List

from employee_portal.models.errors import InvalidFormat

# Characters with special meaning to query operators, shells or terminals
UNSAFE_CHARS = frozenset("<>'\";\\`{}():%$!^=+~")

SKIP_MARKER = "-"

# Largest value a stored integer (BSON int64) can hold
MAX_INT64 = 2 ** 63 - 1

_EMAIL_RE = re.compile(
    r"^(?![.-])(?!.*\.\.)([a-zA-Z0-9_.-]+)(?<![.])"
    r"@(?!-)(?:[a-zA-Z0-9-]+\.)+[a-zA-Z]{2,}(?<!-)$"
)
_DATE_RE = re.compile(r"^[0-9]{4}-[0-9]{2}-[0-9]{2}$")
_INTEGER_RE = re.compile(r"^(?:[0-9]{1,3}(?:,[0-9]{3})+|[0-9]+)$")


def is_unsafe(text: str) -> bool:
    """True if the text contains any character from UNSAFE_CHARS."""
    return any(ch in UNSAFE_CHARS for ch in text)


def is_valid_email(text: str) -> bool:
    return bool(_EMAIL_RE.match(text))


def parse_date(text: str) -> date:
    """
    Parse a strict ISO-8601 calendar date (YYYY-MM-DD).

    Raises:
        InvalidFormat: if the text is not exactly YYYY-MM-DD or not a real date
    """
    if not _DATE_RE.match(text):
        raise InvalidFormat(f"Invalid date '{text}'. Expected format: YYYY-MM-DD.")
    try:
        return date.fromisoformat(text)
    except ValueError:
        raise InvalidFormat(f"'{text}' is not a valid calendar date.")


def is_valid_date(text: str) -> bool:
    try:
        parse_date(text)
    except InvalidFormat:
        return False
    return True


def parse_non_negative_int(text: str) -> int:
    """
    Parse digits with optional thousands separators ("1,250,000").
    Signs are not accepted, so the result is always >= 0.

    Raises:
        InvalidFormat: if the text is not a grouped or plain digit string,
            or the number does not fit in MAX_INT64
    """
    if not _INTEGER_RE.match(text):
        raise InvalidFormat(f"'{text}' is not a valid non-negative number.")
    value = int(text.replace(",", ""))
    if value > MAX_INT64:
        raise InvalidFormat(f"'{text}' is too large. Please enter a smaller number.")
    return value


def is_numeric_or_skip(text: str) -> bool:
    """Acceptance rule for numeric prompts: a number, or the skip marker."""
    return text == SKIP_MARKER or bool(_INTEGER_RE.match(text))


def split_skills(text: str) -> List[str]:
    # No dedup and no dropping of empty tokens: the list is kept as typed
    return [token.strip() for token in text.split(",")]
