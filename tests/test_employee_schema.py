from datetime import date

import pytest
from pydantic import ValidationError

from employee_portal.models.employee_schema import (
    EmployeeRecord,
    to_stored_changes,
    validated_changes,
    validated_record,
)
from employee_portal.models.errors import InvalidFormat, UnsafeInput


@pytest.mark.parametrize("fields", [
    {"name": ""},
    {"department": ""},
    {"department": "$where"},
    {"email": "not-an-email"},
    {"salary": -1},
    {"salary": 2 ** 63},
    {"skills": ["ok", "<b>"]},
])
def test_record_rejects_invalid_fields(record_factory, fields):
    with pytest.raises(ValidationError):
        record_factory(**fields)


def test_validated_record_maps_errors_to_portal_errors():
    with pytest.raises(UnsafeInput) as exc_info:
        validated_record(EmployeeRecord.model_construct(
            name="Alice", department="Eng;drop", email="a@b.com", salary=1,
        ))
    assert exc_info.value.message == "Invalid department: suspicious characters detected."

    with pytest.raises(InvalidFormat) as exc_info:
        validated_record(EmployeeRecord.model_construct(
            name="Alice", department="Eng", email="a@@b.com", salary=1,
        ))
    assert exc_info.value.message == "Invalid email: is not a valid email address."


def test_validated_record_keeps_identifiers(record_factory):
    record = record_factory()

    checked = validated_record(record)

    assert checked.external_id == record.external_id
    assert checked.join_date == date(2024, 1, 15)


def test_validated_changes_returns_only_supplied_fields():
    changes = validated_changes({"salary": 10, "join_date": date(2022, 3, 4)})

    assert changes == {"salary": 10, "join_date": date(2022, 3, 4)}
    assert to_stored_changes(changes) == {"EMP_Salary": 10, "EMP_JoinDate": "2022-03-04"}


def test_validated_changes_rejects_unknown_fields():
    with pytest.raises(InvalidFormat):
        validated_changes({"external_id": "x"})


def test_from_document_reads_legacy_documents_as_stored():
    record = EmployeeRecord.from_document({
        "_id": "abc",
        "EMP_Name": "",
        "EMP_Dept": "R&D (old)",
        "EMP_Email": "legacy",
        "EMP_Skills": ["SQL", 3],
    })

    assert record.name == ""
    assert record.department == "R&D (old)"
    assert record.email == "legacy"
    assert record.skills == []
    assert record.join_date is None
    assert record.internal_id == "abc"
