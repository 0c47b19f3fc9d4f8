"""
External service clients.
"""
from src.studenthousing.services.geocoding import GeocodingClient, GeocodingError, Suggestion

__all__ = ["GeocodingClient", "GeocodingError", "Suggestion"]
