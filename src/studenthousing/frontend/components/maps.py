"""
Map Components

Listing locations on a pydeck map.
"""
from typing import Any, Dict, List

import pandas as pd
import pydeck as pdk
import streamlit as st

from src.studenthousing.frontend.utils.formatting import format_rent


def render_listings_map(listings: List[Dict[str, Any]]) -> None:
    """
    Plot listings with coordinates as a scatter layer.

    Args:
        listings: Listing dictionaries from the API (camelCase keys)
    """
    points = [
        {
            "latitude": listing["latitude"],
            "longitude": listing["longitude"],
            "address": listing.get("address", "N/A"),
            "rent": format_rent(listing.get("rent")),
            "lister": listing.get("listerUsername", ""),
        }
        for listing in listings
        if listing.get("latitude") is not None and listing.get("longitude") is not None
    ]

    if not points:
        st.warning("No listings with coordinates to show on the map.")
        return

    df = pd.DataFrame(points)

    layer = pdk.Layer(
        "ScatterplotLayer",
        data=df,
        get_position=["longitude", "latitude"],
        get_color=[31, 119, 180, 200],
        get_radius=60,
        pickable=True,
        radius_min_pixels=5,
        radius_max_pixels=25,
    )

    tooltip = {
        "html": "<b>{address}</b><br/>{rent}<br/>{lister}",
        "style": {"backgroundColor": "steelblue", "color": "white"},
    }

    view_state = pdk.ViewState(
        latitude=df["latitude"].mean(),
        longitude=df["longitude"].mean(),
        zoom=12,
        pitch=0,
    )

    st.pydeck_chart(pdk.Deck(layers=[layer], initial_view_state=view_state, tooltip=tooltip))
