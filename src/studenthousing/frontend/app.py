"""
Student Housing Marketplace

Main Streamlit application: API status, sign-in and lister registration.
"""
import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent.parent.parent))

import streamlit as st

from config.settings import settings
from src.studenthousing.frontend.components.session import (
    current_user,
    init_session,
    sign_in,
    sign_out,
)
from src.studenthousing.frontend.utils import APIError, format_contact

# Page configuration
st.set_page_config(
    page_title="Student Housing Marketplace",
    page_icon="🏠",
    layout="wide",
    initial_sidebar_state="expanded",
)

init_session()
api_client = st.session_state.api_client

st.title("Student Housing Marketplace")

st.markdown("""
Publish and browse housing close to campus:
- Create listings with address search and map coordinates
- Browse every listing by rent, size and distance
- Manage your own listings
""")

# Health check
try:
    health = api_client.health_check()
    if health["status"] == "healthy":
        st.success(f"API Connected - Version {health['version']}")
    else:
        st.warning(f"API Status: {health['status']}")
except Exception as e:
    st.error(f"Failed to connect to API: {str(e)}")
    st.info(f"Make sure the FastAPI server is running on {settings.api_base_url}")
    st.code("python -m src.studenthousing.api.main")

user = current_user()

if user:
    st.header(f"Welcome, {user['name']}")
    st.markdown(f"**Username:** {user['username']}  \n**Contact:** {format_contact(user.get('contactInfo'))}")
    st.metric("Your listings", len(user.get("listings", [])))

    col1, col2 = st.columns(2)
    with col1:
        if st.button("Create a listing", type="primary"):
            st.switch_page("pages/1__Create_Listing.py")
    with col2:
        if st.button("Sign out"):
            sign_out()
            st.rerun()
else:
    tab_sign_in, tab_register = st.tabs(["Sign in", "Register"])

    with tab_sign_in:
        with st.form("sign_in_form"):
            username = st.text_input("Username")
            password = st.text_input("Password", type="password")
            submitted = st.form_submit_button("Sign in")
        if submitted:
            try:
                sign_in(username, password)
                st.rerun()
            except APIError as e:
                st.error(e.message)

    with tab_register:
        with st.form("register_form"):
            new_username = st.text_input("Username", key="register_username")
            new_password = st.text_input("Password", type="password", key="register_password")
            name = st.text_input("Full name")
            email = st.text_input("Email")
            phone = st.text_input("Phone (optional)")
            preferred = st.radio("Preferred contact", ["email", "phone"], horizontal=True)
            registered = st.form_submit_button("Register")
        if registered:
            try:
                api_client.register_lister({
                    "username": new_username,
                    "password": new_password or None,
                    "name": name,
                    "contactInfo": {
                        "email": email,
                        "phone": phone or None,
                        "preferredContact": preferred,
                    },
                })
                if new_password:
                    sign_in(new_username, new_password)
                st.rerun()
            except APIError as e:
                st.error(e.message)
