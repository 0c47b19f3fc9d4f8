"""
Formatting Utilities for Streamlit Frontend

Helper functions for formatting listing data for display.
"""
from typing import Optional


def format_currency(amount: Optional[float]) -> str:
    """
    Format number as whole US dollars.

    Args:
        amount: Dollar amount

    Returns:
        Formatted currency string (e.g., "$1,200")
    """
    if amount is None:
        return "N/A"
    return f"${amount:,.0f}"


def format_rent(amount: Optional[float]) -> str:
    """
    Format monthly rent (e.g., "$1,200/mo").
    """
    if amount is None:
        return "N/A"
    return f"{format_currency(amount)}/mo"


def format_distance(miles: Optional[float]) -> str:
    """
    Format distance from the university.

    Args:
        miles: Distance in miles

    Returns:
        Formatted distance (e.g., "0.5 mi")
    """
    if miles is None:
        return "N/A"
    return f"{miles:.1f} mi"


def format_count(value: Optional[float]) -> str:
    """
    Format a room or bathroom count, dropping a trailing ".0".

    Args:
        value: Count (bathrooms may be fractional)

    Returns:
        Formatted count (e.g., "2", "1.5")
    """
    if value is None:
        return "N/A"
    if float(value).is_integer():
        return str(int(value))
    return f"{value:g}"


def format_square_feet(value: Optional[float]) -> str:
    """
    Format square footage (e.g., "800 sq ft").
    """
    if value is None:
        return "N/A"
    return f"{value:,.0f} sq ft"


def format_contact(contact_info: Optional[dict]) -> str:
    """
    Format a lister's preferred contact.

    Args:
        contact_info: contactInfo block from the API

    Returns:
        The preferred contact value, falling back to email
    """
    if not contact_info:
        return "N/A"
    if contact_info.get("preferredContact") == "phone" and contact_info.get("phone"):
        return contact_info["phone"]
    return contact_info.get("email") or "N/A"
