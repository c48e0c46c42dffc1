"""
Employee Command Service
One method per menu command. Each interactive method reads its fields through
the SecureInputReader, talks to the repository through filters from the query
builder, and prints results with the display formatter.

Failures are raised as EmployeeError subclasses; the menu controller reports
them and returns to the menu.
"""
import logging
from datetime import date
from typing import Any, Callable, Dict, Iterator, List, Optional, Tuple

from employee_portal.config.settings import DEFAULT_PAGE_SIZE
from employee_portal.models.employee_schema import (
    EmployeeRecord,
    validated_changes,
    validated_record,
)
from employee_portal.models.errors import DuplicateEmail, InvalidFormat, NotFound
from employee_portal.repositories.employee_repository import EmployeeRepository
from employee_portal.services import query_builder
from employee_portal.services.display_formatter import render_department_stats, render_list
from employee_portal.utils.secure_input import FieldKind, SecureInputReader
from employee_portal.utils.validators import (
    SKIP_MARKER,
    is_valid_email,
    parse_date,
    split_skills,
)

logger = logging.getLogger(__name__)

INVALID_EMAIL_MESSAGE = "Email is not valid. Please enter valid Email ID :)"


class EmployeeCommandService:
    """
    Args:
        store: Repository over the employee collection (owned by the caller)
        reader: Source of validated operator input
        output_func: Where results and confirmations are printed
        page_size: Results per page when the operator skips that prompt
    """

    def __init__(
        self,
        store: EmployeeRepository,
        reader: SecureInputReader,
        output_func: Callable[[str], None] = print,
        page_size: int = DEFAULT_PAGE_SIZE,
    ):
        self.store = store
        self.reader = reader
        self._output = output_func
        self.page_size = page_size

    # -------------------------------------------------------------------------
    # Typed operations
    # -------------------------------------------------------------------------
    def email_exists(self, email: str) -> bool:
        return self.store.find_one(query_builder.by_email(email)) is not None

    def create(self, record: EmployeeRecord) -> str:
        """
        Insert a new record after checking its fields and that its email is unused.
        The check and the insert are not atomic; the portal has one operator.

        Raises:
            InvalidFormat, UnsafeInput: if a field breaks the record rules
            DuplicateEmail: if another record already uses the email
        """
        record = validated_record(record)
        if self.email_exists(record.email):
            logger.info("Insert skipped: email already registered")
            raise DuplicateEmail()
        return self.store.insert_one(record)

    def apply_update(self, email: str, changes: Dict[str, Any]) -> int:
        """
        Set the given fields on the record registered under `email`.

        Raises:
            InvalidFormat, UnsafeInput: if a new value breaks the record rules
            DuplicateEmail: if the new email belongs to another record
            NotFound: if no record uses `email`
        """
        changes = validated_changes(changes)
        new_email = changes.get("email")
        if new_email and new_email != email and self.email_exists(new_email):
            raise DuplicateEmail()
        matched = self.store.update_one(query_builder.by_email(email), changes)
        if not matched:
            raise NotFound()
        return matched

    def remove(self, filter: Dict[str, Any]) -> None:
        """
        Raises:
            NotFound: if nothing matched
        """
        if not self.store.delete_one(filter):
            raise NotFound("No record deleted.")

    def search(self, filter: Dict[str, Any]) -> Iterator[EmployeeRecord]:
        return self.store.find_many(filter)

    def list_page(self, page: int, limit: int, sort_choice: str) -> Iterator[EmployeeRecord]:
        """
        One page of all records in ascending order of the chosen field.

        Raises:
            InvalidFormat: for a bad sort choice or a page/limit below 1
        """
        sort = query_builder.sort_spec(sort_choice)
        skip, limit = query_builder.page_window(page, limit)
        return self.store.find_many({}, sort=sort, skip=skip, limit=limit)

    def department_counts(self) -> List[Tuple[Optional[str], int]]:
        return self.store.aggregate_group_count(query_builder.DEPARTMENT_GROUP_FIELD)

    # -------------------------------------------------------------------------
    # Input helpers
    # -------------------------------------------------------------------------
    def _read_required_int(self, prompt: str) -> int:
        while True:
            value = self.reader.read_int(prompt)
            if value is not None:
                return value
            self._output("A value is required here. Please try again.")

    def _read_required_date(self, prompt: str) -> date:
        while True:
            value = self.reader.read(prompt, FieldKind.DATE)
            if value != SKIP_MARKER:
                return parse_date(value)
            self._output("A value is required here. Please try again.")

    def _read_email(self, prompt: str) -> str:
        email = self.reader.read(prompt)
        if not is_valid_email(email):
            raise InvalidFormat(INVALID_EMAIL_MESSAGE)
        return email

    # -------------------------------------------------------------------------
    # Menu commands
    # -------------------------------------------------------------------------
    def add_employee(self) -> None:
        email = self._read_email("Enter Email")
        if self.email_exists(email):
            raise DuplicateEmail()

        record = EmployeeRecord(
            email=email,
            name=self.reader.read("Name"),
            department=self.reader.read("Department"),
            salary=self._read_required_int("Salary"),
            skills=split_skills(self.reader.read("Skills (comma-separated)")),
            join_date=self._read_required_date("Join Date (YYYY-MM-DD)"),
        )
        self.create(record)
        self._output("Employee added.")

    def update_employee(self) -> None:
        email = self.reader.read("Employee Email (for update)")
        if self.store.find_one(query_builder.by_email(email)) is None:
            raise NotFound()

        changes: Dict[str, Any] = {}

        value = self.reader.read("New Name (or '-' to skip)")
        if value != SKIP_MARKER:
            changes["name"] = value

        value = self.reader.read("New Department (or '-')")
        if value != SKIP_MARKER:
            changes["department"] = value

        value = self.reader.read("New Email (or '-' to skip)")
        if value != SKIP_MARKER:
            if is_valid_email(value):
                changes["email"] = value
            else:
                logger.warning("Rejected invalid replacement email during update")
                self._output(INVALID_EMAIL_MESSAGE + " Email left unchanged.")

        salary = self.reader.read_int("New Salary (or '-')")
        if salary is not None:
            changes["salary"] = salary

        value = self.reader.read("New Skills (comma-separated or '-')")
        if value != SKIP_MARKER:
            changes["skills"] = split_skills(value)

        value = self.reader.read("New Join Date (YYYY-MM-DD or '-')", FieldKind.DATE)
        if value != SKIP_MARKER:
            changes["join_date"] = parse_date(value)

        if not changes:
            self._output("No changes supplied.")
            return

        self.apply_update(email, changes)
        self._output("Employee updated.")

    def delete_employee(self) -> None:
        choice = self.reader.read("Delete by (1) Email or (2) ID?")
        if choice == "1":
            filter = query_builder.by_email(self.reader.read("Enter Email"))
        elif choice == "2":
            filter = query_builder.by_internal_id(self.reader.read("Enter ID"))
        else:
            raise InvalidFormat("Invalid option.")

        self.remove(filter)
        self._output("Deleted successfully.")

    def search_employees(self) -> None:
        self._output("Search by: (1) Name, (2) Department, (3) Skill, (4) Joining Date Range")
        choice = self.reader.read("Choose")

        if choice == "1":
            filter = query_builder.name_contains(self.reader.read("Enter part of name"))
        elif choice == "2":
            filter = query_builder.by_department(self.reader.read("Department"))
        elif choice == "3":
            filter = query_builder.has_skill(self.reader.read("Skill"))
        elif choice == "4":
            start = self._read_required_date("From Date (YYYY-MM-DD)")
            end = self._read_required_date("To Date (YYYY-MM-DD)")
            filter = query_builder.joined_between(start, end)
        else:
            raise InvalidFormat("Invalid option.")

        self._output(render_list(self.search(filter), heading="Search Results"))

    def list_with_pagination(self) -> None:
        page = self.reader.read_int("Page number (or '-' for 1)")
        limit = self.reader.read_int(f"Results per page (or '-' for {self.page_size})")
        sort_choice = self.reader.read("Sort by (1) Name / (2) Join Date")

        records = self.list_page(
            page if page is not None else 1,
            limit if limit is not None else self.page_size,
            sort_choice,
        )
        self._output(render_list(records))

    def department_statistics(self) -> None:
        groups = self.department_counts()
        self._output(render_department_stats(groups, total=self.store.count()))
