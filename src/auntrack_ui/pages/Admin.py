import streamlit as st

from auntrack_ui.components.session import get_services, render_notices
from auntrack_ui.components.healthcheck_sidebar import Healthcheck_Sidebar
from auntrack_ui.components.user_management import render_user_management

# Page configuration (must be first Streamlit command)
st.set_page_config(page_title="Admin", layout="wide", page_icon="A")

auth, store, users, exporter = get_services()

if not auth.is_authenticated:
    st.warning("Please sign in on the Home page")
    st.stop()

# SIDEBAR - USER & SYSTEM STATUS
Healthcheck_Sidebar(auth)

st.title("Admin")
st.caption("Create accounts, assign roles and grant add/edit capabilities.")

render_user_management(users, auth)
render_notices()
