"""
Frontend Utilities

Helper modules for API client, persisted storage and formatting.
"""
from src.studenthousing.frontend.utils.api_client import APIClient, APIError
from src.studenthousing.frontend.utils.token_store import TokenStore
from src.studenthousing.frontend.utils.formatting import (
    format_currency,
    format_rent,
    format_distance,
    format_count,
    format_square_feet,
    format_contact,
)

__all__ = [
    "APIClient",
    "APIError",
    "TokenStore",
    "format_currency",
    "format_rent",
    "format_distance",
    "format_count",
    "format_square_feet",
    "format_contact",
]
