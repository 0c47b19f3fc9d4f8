"""
Session Components

Shared client objects and the signed-in user, kept in Streamlit session state.
"""
from typing import Any, Dict, Optional

import streamlit as st
from streamlit.runtime.scriptrunner import get_script_run_ctx

from src.studenthousing.frontend.utils import APIClient, APIError, TokenStore
from src.studenthousing.utils.logger import get_logger, setup_logging

logger = get_logger(__name__)


def init_session() -> None:
    """
    Create the API client and token store once per browser session, and
    restore the signed-in user from the token this session persisted.

    The token store is namespaced by the Streamlit session id, so sessions
    never see each other's tokens.
    """
    setup_logging()

    if "api_client" not in st.session_state:
        st.session_state.api_client = APIClient()
    if "token_store" not in st.session_state:
        st.session_state.token_store = TokenStore(namespace=_browser_session_id())
    if "user" not in st.session_state:
        st.session_state.user = _restore_user()


def _browser_session_id() -> Optional[str]:
    ctx = get_script_run_ctx()
    return ctx.session_id if ctx else None


def _restore_user() -> Optional[Dict[str, Any]]:
    token = st.session_state.token_store.get()
    if not token:
        return None
    try:
        return st.session_state.api_client.get_current_user(token)
    except APIError as e:
        logger.info("stored_token_rejected", status_code=e.status_code)
        st.session_state.token_store.remove()
        return None


def current_user() -> Optional[Dict[str, Any]]:
    """Signed-in lister profile, or None."""
    return st.session_state.get("user")


def sign_in(username: str, password: str) -> Dict[str, Any]:
    """
    Sign in, persist the token and load the user.

    Raises:
        APIError: If the credentials are rejected
    """
    api_client: APIClient = st.session_state.api_client
    token = api_client.login(username, password)
    st.session_state.token_store.set(token)
    st.session_state.user = api_client.get_current_user(token)
    logger.info("signed_in", username=st.session_state.user.get("username"))
    return st.session_state.user


def sign_out() -> None:
    """Forget the token and the user."""
    st.session_state.token_store.remove()
    st.session_state.user = None
