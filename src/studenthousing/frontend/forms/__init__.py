"""
Client-side form state.
"""
from src.studenthousing.frontend.forms.create_listing import (
    CreateListingForm,
    FormValidationError,
    ListingFormData,
    build_listing_payload,
)

__all__ = [
    "CreateListingForm",
    "FormValidationError",
    "ListingFormData",
    "build_listing_payload",
]
