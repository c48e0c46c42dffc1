"""
Main Console Application
Entry point for the Employee Management Portal.
"""
import sys

from employee_portal.config.settings import LOG_LEVEL
from employee_portal.controllers.menu_controller import run_menu
from employee_portal.models.errors import WriteFailure
from employee_portal.repositories.employee_repository import open_employee_store
from employee_portal.services.employee_service import EmployeeCommandService
from employee_portal.utils.log_buffer import buffered_logging
from employee_portal.utils.secure_input import SecureInputReader


def main() -> int:
    """
    Run one interactive session.
    The store is closed before the buffered log is flushed, so shutdown
    messages from the driver are included in the flushed output.
    """
    with buffered_logging(LOG_LEVEL):
        try:
            with open_employee_store() as store:
                reader = SecureInputReader()
                run_menu(EmployeeCommandService(store, reader), reader)
        except WriteFailure as e:
            print(e.message)
            return 1
    return 0


if __name__ == "__main__":
    sys.exit(main())
