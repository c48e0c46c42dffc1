"""
Menu Controller
Text menu for the employee portal. Dispatches each choice to the command
service and reports failures without leaving the loop.
"""
import logging
from typing import Callable

from employee_portal.models.errors import EmployeeError, InputCancelled
from employee_portal.services.employee_service import EmployeeCommandService
from employee_portal.utils.secure_input import SecureInputReader

logger = logging.getLogger(__name__)

EXIT_CHOICE = "7"

MENU_TEXT = """
--- EMPLOYEE MANAGEMENT PORTAL ---
1. Add Employee
2. Update Employee
3. Delete Employee
4. Search Employees
5. List Employees with Pagination
6. Department Statistics
7. Exit"""


def _commands(service: EmployeeCommandService) -> dict:
    return {
        "1": service.add_employee,
        "2": service.update_employee,
        "3": service.delete_employee,
        "4": service.search_employees,
        "5": service.list_with_pagination,
        "6": service.department_statistics,
    }


def run_command(command: Callable[[], None], output_func: Callable[[str], None] = print) -> None:
    """Run one menu command; any failure is reported and control returns to the menu."""
    try:
        command()
    except EmployeeError as e:
        output_func(e.message)
    except InputCancelled:
        output_func("Cancelled.")
    except Exception:
        logger.exception("Unexpected error in menu command")
        output_func("An unexpected error occurred. The command was not completed.")


def run_menu(
    service: EmployeeCommandService,
    reader: SecureInputReader,
    output_func: Callable[[str], None] = print,
) -> None:
    """
    Show the menu until the operator picks Exit or input ends.
    """
    commands = _commands(service)
    while True:
        output_func(MENU_TEXT)
        try:
            choice = reader.prompt_line("Choose")
        except InputCancelled:
            break

        if choice == EXIT_CHOICE:
            break

        command = commands.get(choice)
        if command is None:
            output_func("Invalid option.")
            continue
        run_command(command, output_func)

    output_func("Shutting down MongoDB client...")
