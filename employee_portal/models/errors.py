"""
Error Taxonomy
Exceptions raised by the validators, the repository and the command service.
The menu controller is the only place that turns them into operator messages.
"""
from typing import Optional


class EmployeeError(Exception):
    """Base class for every failure that aborts the current menu command."""

    default_message = "The operation could not be completed."

    def __init__(self, message: Optional[str] = None):
        self.message = message or self.default_message
        super().__init__(self.message)


class InvalidFormat(EmployeeError):
    default_message = "Input is not in the expected format."


class UnsafeInput(EmployeeError):
    """Raised when a filter value or record field carries unsafe characters."""

    default_message = "Suspicious characters detected. Please enter valid input."


class NotFound(EmployeeError):
    default_message = "No employee found."


class DuplicateEmail(EmployeeError):
    default_message = "Error: Email already exists."


class WriteFailure(EmployeeError):
    default_message = "The employee database could not be reached. Please try again."


class InputCancelled(Exception):
    """Raised when the operator ends input (Ctrl-D / Ctrl-C) at a prompt."""
