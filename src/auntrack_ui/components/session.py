"""
Per-browser-session wiring of the client services.

Streamlit reruns the script on every interaction, so the services are
built once and kept in ``st.session_state``.
"""
import streamlit as st

from auntrack_ui.config.settings import config
from auntrack_ui.app_lib.api.client import APIClient
from auntrack_ui.services import (
    AuthService,
    BrowserSessionStorage,
    CalendarStore,
    ExportService,
    UserService,
)
from auntrack_ui.services.session_storage import browser_id_from

NOTICES_KEY = "notices"


def notify(message: str) -> None:
    """Queue a message; shown by ``render_notices`` on the next render."""
    st.session_state.setdefault(NOTICES_KEY, []).append(message)


def render_notices() -> None:
    for message in st.session_state.pop(NOTICES_KEY, []):
        st.error(message)


def get_services():
    """(auth, store, users, exporter), created on first use."""
    if "auth_service" not in st.session_state:
        client = APIClient()
        storage = BrowserSessionStorage(config.session_dir, browser_id_from(st.query_params))
        auth = AuthService(client, storage)
        auth.restore()
        st.session_state.api_client = client
        st.session_state.auth_service = auth
        st.session_state.calendar_store = CalendarStore(
            client, auth, notify=notify, tz=config.display_timezone
        )
        st.session_state.user_service = UserService(client, auth, notify=notify)
        st.session_state.export_service = ExportService(client, notify=notify)
        st.session_state.calendar_loaded = False

    return (
        st.session_state.auth_service,
        st.session_state.calendar_store,
        st.session_state.user_service,
        st.session_state.export_service,
    )


def ensure_calendar_loaded(store: CalendarStore) -> None:
    if not st.session_state.get("calendar_loaded"):
        st.session_state.calendar_loaded = store.refresh()
