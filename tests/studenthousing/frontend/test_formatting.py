"""
Tests for display formatting helpers
"""
from src.studenthousing.frontend.utils.formatting import (
    format_contact,
    format_count,
    format_currency,
    format_distance,
    format_rent,
    format_square_feet,
)


def test_format_currency():
    assert format_currency(1200) == "$1,200"
    assert format_currency(None) == "N/A"


def test_format_rent():
    assert format_rent(1200.0) == "$1,200/mo"


def test_format_distance():
    assert format_distance(0.5) == "0.5 mi"
    assert format_distance(None) == "N/A"


def test_format_count():
    assert format_count(2.0) == "2"
    assert format_count(1.5) == "1.5"


def test_format_square_feet():
    assert format_square_feet(1250) == "1,250 sq ft"


def test_format_contact():
    assert format_contact({"email": "a@example.com", "preferredContact": "email"}) == "a@example.com"
    assert format_contact({"email": "a@example.com", "phone": "555-0100", "preferredContact": "phone"}) == "555-0100"
    assert format_contact({"email": "a@example.com", "preferredContact": "phone"}) == "a@example.com"
    assert format_contact(None) == "N/A"
