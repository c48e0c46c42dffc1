from datetime import date

import mongomock
import pytest

from employee_portal.models.employee_schema import EmployeeRecord
from employee_portal.repositories.employee_repository import EmployeeRepository
from employee_portal.services.employee_service import EmployeeCommandService
from employee_portal.utils.secure_input import SecureInputReader


class ScriptedInput:
    """Stands in for `input`: returns queued lines, then behaves like Ctrl-D."""

    def __init__(self, lines):
        self.lines = list(lines)
        self.prompts = []

    def __call__(self, prompt):
        self.prompts.append(prompt)
        if not self.lines:
            raise EOFError
        return self.lines.pop(0)


def make_record(name="Alice Smith", department="Eng", email="alice@example.com",
                salary=50000, skills=None, join_date=date(2024, 1, 15)):
    return EmployeeRecord(
        name=name,
        department=department,
        email=email,
        salary=salary,
        skills=skills if skills is not None else ["Python", "SQL"],
        join_date=join_date,
    )


@pytest.fixture
def collection():
    return mongomock.MongoClient().employees.emp


@pytest.fixture
def store(collection):
    return EmployeeRepository(collection)


@pytest.fixture
def output():
    return []


@pytest.fixture
def make_reader(output):
    def _make(*lines):
        return SecureInputReader(ScriptedInput(lines), output.append)
    return _make


@pytest.fixture
def make_service(store, output, make_reader):
    def _make(*lines):
        return EmployeeCommandService(store, make_reader(*lines), output.append, page_size=10)
    return _make


@pytest.fixture
def record_factory():
    return make_record
