"""
Table Components

Tabular display of listings.
"""
import streamlit as st
import pandas as pd
from typing import List, Dict, Any

from src.studenthousing.frontend.utils.formatting import (
    format_count,
    format_distance,
    format_rent,
    format_square_feet,
)


def render_listings_table(listings: List[Dict[str, Any]], show_owner: bool = True) -> None:
    """
    Render listings as a table.

    Args:
        listings: Listing dictionaries from the API (camelCase keys)
        show_owner: Include the lister column (overview pages)
    """
    if not listings:
        st.info("No listings found.")
        return

    rows = []
    for listing in listings:
        row = {
            "Address": listing.get("address", "N/A"),
            "Rent": format_rent(listing.get("rent")),
            "Bedrooms": format_count(listing.get("numberOfRooms")),
            "Bathrooms": format_count(listing.get("numberOfBathrooms")),
            "Size": format_square_feet(listing.get("squareFoot")),
            "Distance": format_distance(listing.get("distanceFromUniv")),
            "Description": listing.get("description") or "",
        }
        if show_owner:
            row["Lister"] = listing.get("listerUsername", "N/A")
        rows.append(row)

    df = pd.DataFrame(rows)
    st.dataframe(df, use_container_width=True, hide_index=True)
