"""
Secure Input Reader
The single funnel through which operator-typed field values enter the system.
"""
import logging
from enum import Enum
from typing import Callable, Optional

from employee_portal.models.errors import InputCancelled, InvalidFormat
from employee_portal.utils.validators import (
    SKIP_MARKER,
    is_numeric_or_skip,
    is_unsafe,
    is_valid_date,
    parse_non_negative_int,
)

logger = logging.getLogger(__name__)


class FieldKind(Enum):
    """Semantic role of a prompt, chosen by the caller."""
    TEXT = "text"
    NUMERIC = "numeric"
    DATE = "date"


class SecureInputReader:
    """
    Reads one line per prompt and re-prompts until it passes validation.

    Args:
        input_func: Callable taking the prompt text and returning the raw line (defaults to `input`)
        output_func: Callable used to show messages (defaults to `print`)
    """

    def __init__(
        self,
        input_func: Callable[[str], str] = input,
        output_func: Callable[[str], None] = print,
    ):
        self._input = input_func
        self._output = output_func

    def prompt_line(self, prompt: str) -> str:
        """Read one raw, trimmed line without validation (used for menu choices)."""
        try:
            return self._input(f"{prompt}: ").strip()
        except (EOFError, KeyboardInterrupt):
            raise InputCancelled()

    def read(self, prompt: str, kind: FieldKind = FieldKind.TEXT) -> str:
        """
        Read a validated, non-empty value.

        Loops with no retry limit until the line is acceptable:
        - not empty
        - free of unsafe characters
        - NUMERIC: grouped or plain digits, or '-'
        - DATE: a valid YYYY-MM-DD date, or '-'

        Raises:
            InputCancelled: if input ends or the operator interrupts
        """
        while True:
            value = self.prompt_line(prompt)

            if not value:
                self._output("Input cannot be empty. Please try again.")
                continue

            if is_unsafe(value):
                logger.warning("Rejected unsafe input at prompt %r", prompt)
                self._output("Suspicious characters detected. Please enter valid input.")
                continue

            if kind is FieldKind.NUMERIC and not is_numeric_or_skip(value):
                self._output("Only numeric input allowed here. Please try again.")
                continue

            if kind is FieldKind.DATE and value != SKIP_MARKER and not is_valid_date(value):
                self._output("Invalid date. Please use the format YYYY-MM-DD.")
                continue

            return value

    def read_int(self, prompt: str) -> Optional[int]:
        """
        Read a non-negative number; returns None for the skip marker.
        Numbers too large to store are refused and the prompt is repeated.
        """
        while True:
            value = self.read(prompt, FieldKind.NUMERIC)
            if value == SKIP_MARKER:
                return None
            try:
                return parse_non_negative_int(value)
            except InvalidFormat as e:
                self._output(e.message)
