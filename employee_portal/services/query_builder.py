"""
Query Builder
Builds MongoDB filter documents from already-validated values.
No builder places operator-typed text anywhere but a literal value position.
"""
import re
from datetime import date
from typing import Any, Dict, List, Tuple

from bson import ObjectId
from pymongo import ASCENDING

from employee_portal.models.employee_schema import (
    DEPARTMENT,
    EMAIL,
    INTERNAL_ID,
    JOIN_DATE,
    NAME,
    SKILLS,
)
from employee_portal.models.errors import InvalidFormat, UnsafeInput
from employee_portal.utils.validators import MAX_INT64, is_unsafe

Filter = Dict[str, Any]

# Group key for department statistics
DEPARTMENT_GROUP_FIELD = DEPARTMENT

# Menu choice -> sort field for paginated listing
SORT_CHOICES = {
    "1": NAME,
    "2": JOIN_DATE,
}


def _checked(value: Any) -> Any:
    """
    Raises:
        UnsafeInput: if a text value contains unsafe characters
    """
    if isinstance(value, str) and is_unsafe(value):
        raise UnsafeInput()
    return value


def equals(field: str, value: Any) -> Filter:
    return {field: {"$eq": _checked(value)}}


def by_email(email: str) -> Filter:
    return equals(EMAIL, email)


def by_department(department: str) -> Filter:
    return equals(DEPARTMENT, department)


def by_internal_id(text: str) -> Filter:
    """
    Raises:
        InvalidFormat: if the text is not a 24-character hex ObjectId
    """
    if not ObjectId.is_valid(text):
        raise InvalidFormat("Invalid ID. Expected a 24-character hexadecimal identifier.")
    return {INTERNAL_ID: ObjectId(text)}


def name_contains(fragment: str) -> Filter:
    """Case-insensitive substring match; the fragment is matched literally."""
    return {NAME: {"$regex": re.escape(_checked(fragment)), "$options": "i"}}


def has_skill(skill: str) -> Filter:
    # Equality against an array field matches any single element exactly
    return equals(SKILLS, skill)


def joined_between(start: date, end: date) -> Filter:
    """
    Inclusive join-date range. Canonical ISO-8601 strings sort the same way
    as the dates they represent, so a string comparison is exact.

    Raises:
        InvalidFormat: if start is after end
    """
    if start > end:
        raise InvalidFormat("'From' date must not be after 'To' date.")
    return {JOIN_DATE: {"$gte": start.isoformat(), "$lte": end.isoformat()}}


def sort_spec(choice: str) -> List[Tuple[str, int]]:
    """
    Raises:
        InvalidFormat: for anything but '1' (name) or '2' (join date)
    """
    if choice not in SORT_CHOICES:
        raise InvalidFormat("Invalid input. Expected: '1' / '2'")
    return [(SORT_CHOICES[choice], ASCENDING)]


def page_window(page: int, limit: int) -> Tuple[int, int]:
    """
    Convert a 1-based page number and page size into (skip, limit).

    Raises:
        InvalidFormat: if page or limit is below 1, or the window lies beyond
            what the store can skip
    """
    if page < 1 or limit < 1:
        raise InvalidFormat("Page number and results per page must be at least 1.")
    skip = (page - 1) * limit
    if skip > MAX_INT64 or limit > MAX_INT64:
        raise InvalidFormat("Page number or results per page is too large.")
    return skip, limit
