import logging

import streamlit as st

from auntrack_ui.config.env import env
from auntrack_ui.components.session import ensure_calendar_loaded, get_services, render_notices
from auntrack_ui.components.healthcheck_sidebar import Healthcheck_Sidebar
from auntrack_ui.components.login_form import render_login
from auntrack_ui.components.calendar_view import render_calendar
from auntrack_ui.components.event_forms import render_add_event, render_edit_event
from auntrack_ui.components.category_forms import render_category_manager
from auntrack_ui.components.export_panel import render_export_panel


# Configure logging to suppress benign WebSocket errors
# These errors occur when users refresh/close the page during a rerun
class WebSocketErrorFilter(logging.Filter):
    def filter(self, record):
        if 'WebSocketClosedError' in str(record.msg) or 'StreamClosedError' in str(record.msg):
            return False
        if 'tornado.websocket' in record.name and 'exception' in str(record.msg).lower():
            return False
        return True


for logger_name in ['', 'streamlit', 'tornado.application']:
    logging.getLogger(logger_name).addFilter(WebSocketErrorFilter())
logging.basicConfig(level=env.log_level.upper())

# THIS MUST BE THE VERY FIRST STREAMLIT COMMAND
st.set_page_config(page_title="AunTrack Calendar", layout="wide", page_icon="📅")

st.title("AunTrack Calendar")

auth, store, users, exporter = get_services()

if not auth.is_authenticated:
    render_notices()
    render_login(auth)
    st.stop()

# ----------------------------------------------------------------------
# SIDEBAR - USER & SYSTEM STATUS
# ----------------------------------------------------------------------
Healthcheck_Sidebar(auth)
with st.sidebar:
    if st.button("Refresh calendar"):
        st.session_state.calendar_loaded = store.refresh()

ensure_calendar_loaded(store)
render_notices()

# ----------------------------------------------------------------------
# MAIN INTERFACE
# ----------------------------------------------------------------------
render_calendar(store, auth)

events_tab, categories_tab, export_tab = st.tabs(["Events", "Categories", "Export"])
with events_tab:
    render_add_event(store, auth)
    render_edit_event(store, auth)
with categories_tab:
    render_category_manager(store, auth)
with export_tab:
    render_export_panel(exporter)

# a failed call may have ended the session
if not auth.is_authenticated:
    st.rerun()
