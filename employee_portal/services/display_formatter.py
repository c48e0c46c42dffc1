"""
Display Formatter
Renders employee records as a fixed-width table and department statistics as
console text.
Store identifiers (internal and external id) are never part of the output.
"""
from typing import Iterable, Optional, Sequence, Tuple

from employee_portal.config.settings import CURRENCY_SYMBOL
from employee_portal.models.employee_schema import EmployeeRecord

NO_RECORDS_MESSAGE = "No employee records found."
UNASSIGNED_DEPARTMENT = "(Unassigned)"

LIST_WIDTH = 120
STATS_WIDTH = 50

LIST_COLUMNS = ("#", "Name", "Department", "Email", "Salary", "Skills", "Join Date")
# Columns aligned to the right; the rest are left-aligned
RIGHT_ALIGNED = frozenset({"#", "Salary"})
COLUMN_SEPARATOR = " | "


def format_salary(amount: int, currency: str = CURRENCY_SYMBOL) -> str:
    """1250000 -> '$1,250,000'"""
    return f"{currency}{amount:,}"


def _cells(number: int, record: EmployeeRecord) -> Tuple[str, ...]:
    return (
        str(number),
        record.name,
        record.department,
        record.email,
        format_salary(record.salary),
        ", ".join(record.skills),
        record.join_date.isoformat() if record.join_date else "",
    )


def _table_line(cells: Sequence[str], widths: Sequence[int]) -> str:
    padded = []
    for column, cell, width in zip(LIST_COLUMNS, cells, widths):
        padded.append(f"{cell:>{width}}" if column in RIGHT_ALIGNED else f"{cell:<{width}}")
    return COLUMN_SEPARATOR.join(padded).rstrip()


def render_list(records: Iterable[EmployeeRecord], heading: Optional[str] = None) -> str:
    """
    Render records as a fixed-width table, one numbered row per record
    (1-based, restarting on every call). Column widths fit the widest cell,
    so values are never truncated.

    Args:
        records: Any iterable of records, including a single-use cursor
        heading: Optional title line printed above the table

    Returns:
        The formatted table, or NO_RECORDS_MESSAGE when there is nothing to show
    """
    rows = [_cells(number, record) for number, record in enumerate(records, start=1)]
    if not rows:
        return NO_RECORDS_MESSAGE

    widths = [
        max(len(column), *(len(row[i]) for row in rows))
        for i, column in enumerate(LIST_COLUMNS)
    ]
    rule_width = max(LIST_WIDTH, sum(widths) + len(COLUMN_SEPARATOR) * (len(widths) - 1))

    lines = [""]
    if heading:
        lines.append(heading)
    lines.append("=" * rule_width)
    lines.append(_table_line(LIST_COLUMNS, widths))
    lines.append("-" * rule_width)
    lines.extend(_table_line(row, widths) for row in rows)
    lines.append("=" * rule_width)
    return "\n".join(lines)


def render_department_stats(
    groups: Sequence[Tuple[Optional[str], int]],
    total: Optional[int] = None,
) -> str:
    """
    Render (department, count) pairs as a two-column table.
    Documents without a department show up under UNASSIGNED_DEPARTMENT.
    """
    if not groups:
        return NO_RECORDS_MESSAGE

    lines = [
        "",
        "Department-wise Summary of Employees:",
        "=" * STATS_WIDTH,
        f"{'Department':<25} | {'Number of Employees':<20}",
        "-" * STATS_WIDTH,
    ]
    for department, count in groups:
        label = department if department else UNASSIGNED_DEPARTMENT
        lines.append(f"{str(label):<25} | {count:<20d}")
    lines.append("=" * STATS_WIDTH)

    summary = f"{len(groups)} department(s) listed"
    if total is not None:
        summary += f", covering {total} employee(s) in total"
    lines.append(summary + ".")
    return "\n".join(lines)
