from __future__ import annotations

import re

import pytest

from utils.helpers import generate_participant_id, validate_email, validate_phone


@pytest.mark.parametrize("phone, expected", [
    ("9876543210", True),
    ("9876543210\n", False),
    ("98765432100", False),
    ("98765-43210", False),
    ("", False),
])
def test_validate_phone_needs_exactly_ten_digits(phone, expected):
    assert validate_phone(phone) is expected


@pytest.mark.parametrize("email, expected", [
    ("priya@example.com", True),
    ("priya@example.com\n", False),
    ("priya example@example.com", False),
    ("priya@example", False),
])
def test_validate_email(email, expected):
    assert validate_email(email) is expected


def test_participant_id_shape():
    assert re.fullmatch(r"S1D25\d{3}", generate_participant_id("dance"))
    with pytest.raises(ValueError):
        generate_participant_id("karaoke")
