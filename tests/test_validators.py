from datetime import date

import pytest

from employee_portal.models.errors import InvalidFormat
from employee_portal.utils.validators import (
    MAX_INT64,
    UNSAFE_CHARS,
    is_numeric_or_skip,
    is_unsafe,
    is_valid_date,
    is_valid_email,
    parse_date,
    parse_non_negative_int,
    split_skills,
)


@pytest.mark.parametrize("ch", sorted(UNSAFE_CHARS))
def test_every_forbidden_character_is_unsafe(ch):
    assert is_unsafe(f"abc{ch}def")
    assert is_unsafe(ch)


def test_forbidden_set_is_the_documented_one():
    assert UNSAFE_CHARS == set("<>'\";\\`{}():%$!^=+~")


@pytest.mark.parametrize("text", [
    "John Doe",
    "alice.smith@example.com",
    "Python, SQL, Go",
    "R_and-D 2024",
    "-",
])
def test_plain_text_is_safe(text):
    assert not is_unsafe(text)


@pytest.mark.parametrize("email", [
    "a@b.com",
    "john.doe@example.co.uk",
    "first_last-99@sub.domain.org",
    "x@my-company.io",
])
def test_valid_emails(email):
    assert is_valid_email(email)


@pytest.mark.parametrize("email", [
    "a..b@x.com",
    "-x@domain.com",
    "user@d",
    ".user@example.com",
    "user.@example.com",
    "user@-example.com",
    "user@example.c",
    "userexample.com",
    "",
])
def test_invalid_emails(email):
    assert not is_valid_email(email)


@pytest.mark.parametrize("text", ["2024-01-15", "2000-02-29", "1999-12-31"])
def test_valid_dates_round_trip(text):
    assert parse_date(text).isoformat() == text
    assert is_valid_date(text)


@pytest.mark.parametrize("text", [
    "2023-02-29",
    "2024-13-01",
    "2024-1-5",
    "15/01/2024",
    "20240115",
    "2024-01-15T10:00",
    "-",
])
def test_invalid_dates(text):
    with pytest.raises(InvalidFormat):
        parse_date(text)
    assert not is_valid_date(text)


def test_parse_date_returns_date():
    assert parse_date("2024-03-01") == date(2024, 3, 1)


@pytest.mark.parametrize("text,expected", [
    ("0", 0),
    ("42", 42),
    ("1,000", 1000),
    ("1,250,000", 1250000),
    ("1000000", 1000000),
])
def test_parse_non_negative_int(text, expected):
    assert parse_non_negative_int(text) == expected


@pytest.mark.parametrize("text", ["-5", "1,00", "12,3456", "abc", "1.5", "", "+3"])
def test_parse_non_negative_int_rejects(text):
    with pytest.raises(InvalidFormat):
        parse_non_negative_int(text)


def test_numeric_or_skip():
    assert is_numeric_or_skip("-")
    assert is_numeric_or_skip("12,000")
    assert not is_numeric_or_skip("ten")
    assert not is_numeric_or_skip("--")


def test_split_skills_trims_and_keeps_duplicates_and_empties():
    assert split_skills(" Python , SQL,Python,, Go ") == ["Python", "SQL", "Python", "", "Go"]


def test_parse_non_negative_int_upper_bound():
    assert parse_non_negative_int("9223372036854775807") == MAX_INT64
    assert parse_non_negative_int("9,223,372,036,854,775,807") == MAX_INT64
    with pytest.raises(InvalidFormat) as exc_info:
        parse_non_negative_int("99999999999999999999")
    assert "too large" in exc_info.value.message
    with pytest.raises(InvalidFormat):
        parse_non_negative_int("9223372036854775808")
