"""
Employee Data Schema Definition
Single source of truth for the employee record and its stored attribute names.
Used by the repository (serialization) and the query builder (filters).
"""
import uuid
from datetime import date
from typing import Any, Dict, List, NoReturn, Optional

from pydantic import BaseModel, ConfigDict, Field, ValidationError, field_validator

from employee_portal.models.errors import InvalidFormat, UnsafeInput
from employee_portal.utils.validators import MAX_INT64, is_unsafe, is_valid_email

# Stored attribute names. These are the on-disk tokens of the `emp` collection
# and must not change without migrating existing documents.
INTERNAL_ID = "_id"
EXTERNAL_ID = "EMP_ID"
NAME = "EMP_Name"
DEPARTMENT = "EMP_Dept"
EMAIL = "EMP_Email"
SALARY = "EMP_Salary"
SKILLS = "EMP_Skills"
JOIN_DATE = "EMP_JoinDate"

# Record field -> stored attribute, for the fields an update may change
UPDATABLE_FIELDS: Dict[str, str] = {
    "name": NAME,
    "department": DEPARTMENT,
    "email": EMAIL,
    "salary": SALARY,
    "skills": SKILLS,
    "join_date": JOIN_DATE,
}


def _new_external_id() -> str:
    return str(uuid.uuid4())


class UnsafeValue(ValueError):
    """Field value contains characters from UNSAFE_CHARS."""


def _require_safe(value: str) -> str:
    if is_unsafe(value):
        raise UnsafeValue("contains unsafe characters")
    return value


def _require_email(value: str) -> str:
    if not is_valid_email(value):
        raise ValueError("is not a valid email address")
    return value


def _require_safe_skills(value: List[str]) -> List[str]:
    # Empty tokens are kept as typed
    for skill in value:
        _require_safe(skill)
    return value


class EmployeeRecord(BaseModel):
    """One employee, as seen by the service layer."""
    name: str = Field(min_length=1)
    department: str = Field(min_length=1)
    email: str
    salary: int = Field(0, ge=0, le=MAX_INT64)
    skills: List[str] = []
    join_date: Optional[date] = None
    external_id: str = Field(default_factory=_new_external_id)
    # Store-assigned identifier; never rendered to the operator
    internal_id: Optional[str] = Field(default=None, repr=False)

    @field_validator("name", "department")
    @classmethod
    def check_text(cls, value: str) -> str:
        return _require_safe(value)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _require_email(value)

    @field_validator("skills")
    @classmethod
    def check_skills(cls, value: List[str]) -> List[str]:
        return _require_safe_skills(value)

    def to_document(self) -> Dict[str, Any]:
        """Serialize to the stored document shape (without `_id`)."""
        return {
            EXTERNAL_ID: self.external_id,
            NAME: self.name,
            DEPARTMENT: self.department,
            EMAIL: self.email,
            SALARY: self.salary,
            SKILLS: list(self.skills),
            JOIN_DATE: self.join_date.isoformat() if self.join_date else None,
        }

    @classmethod
    def from_document(cls, doc: Dict[str, Any]) -> "EmployeeRecord":
        """
        Build a record from a stored document.

        Stored data is taken as-is (no field validation), so documents written
        by older tools stay readable. A missing or mixed-type skills value
        reads back as an empty skill list.
        """
        raw_skills = doc.get(SKILLS)
        skills: List[str] = []
        if isinstance(raw_skills, list) and all(isinstance(s, str) for s in raw_skills):
            skills = raw_skills

        raw_date = doc.get(JOIN_DATE)
        join_date = date.fromisoformat(raw_date) if raw_date else None

        internal_id = doc.get(INTERNAL_ID)
        return cls.model_construct(
            name=doc.get(NAME) or "",
            department=doc.get(DEPARTMENT) or "",
            email=doc.get(EMAIL) or "",
            salary=doc.get(SALARY) or 0,
            skills=skills,
            join_date=join_date,
            external_id=doc.get(EXTERNAL_ID) or "",
            internal_id=str(internal_id) if internal_id is not None else None,
        )


class EmployeeChanges(BaseModel):
    """Fields an update may set; unset fields are left alone."""
    model_config = ConfigDict(extra="forbid")

    name: str = Field(None, min_length=1)
    department: str = Field(None, min_length=1)
    email: str = None
    salary: int = Field(None, ge=0, le=MAX_INT64)
    skills: List[str] = None
    join_date: date = None

    @field_validator("name", "department")
    @classmethod
    def check_text(cls, value: str) -> str:
        return _require_safe(value)

    @field_validator("email")
    @classmethod
    def check_email(cls, value: str) -> str:
        return _require_email(value)

    @field_validator("skills")
    @classmethod
    def check_skills(cls, value: List[str]) -> List[str]:
        return _require_safe_skills(value)


def _raise_for(exc: ValidationError) -> NoReturn:
    error = exc.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or "record"
    cause = (error.get("ctx") or {}).get("error")
    if isinstance(cause, UnsafeValue) or "unsafe characters" in error["msg"]:
        raise UnsafeInput(f"Invalid {field}: suspicious characters detected.") from exc
    message = error["msg"].replace("Value error, ", "")
    raise InvalidFormat(f"Invalid {field}: {message}.") from exc


def validated_record(record: EmployeeRecord) -> EmployeeRecord:
    """
    Re-check a record against the field rules (records built with
    `model_construct` skip them).

    Raises:
        UnsafeInput: if a text field carries unsafe characters
        InvalidFormat: for any other rule violation
    """
    try:
        return EmployeeRecord.model_validate(record.model_dump())
    except ValidationError as e:
        _raise_for(e)


def validated_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    """
    Check an update's record-field -> value mapping against the field rules.

    Raises:
        UnsafeInput: if a text field carries unsafe characters
        InvalidFormat: for an unknown field or any other rule violation
    """
    try:
        return EmployeeChanges.model_validate(changes).model_dump(exclude_unset=True)
    except ValidationError as e:
        _raise_for(e)


def to_stored_changes(changes: Dict[str, Any]) -> Dict[str, Any]:
    """
    Translate a record-field -> value mapping into stored attribute names.
    Dates are stored as their ISO-8601 text.
    """
    stored = {}
    for field, value in changes.items():
        if field not in UPDATABLE_FIELDS:
            raise KeyError(f"Field cannot be updated: {field}")
        if isinstance(value, date):
            value = value.isoformat()
        stored[UPDATABLE_FIELDS[field]] = value
    return stored
