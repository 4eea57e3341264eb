import streamlit as st
from auntrack_ui.config.settings import config
from auntrack_ui.app_lib.api.errors import APIError


def Healthcheck_Sidebar(auth):
    """Render the sidebar with the signed-in user, logout and a health check"""

    if "health_status" not in st.session_state:
        st.session_state.health_status = None

    with st.sidebar:
        user = auth.current_user
        if user is not None:
            st.markdown(f"**{user.name or user.username}**")
            st.caption(f"{user.email} | {user.role.value}")
            if st.button("Log out"):
                auth.logout()
                st.session_state.calendar_loaded = False
                st.rerun()

        st.title("System Health")
        st.caption(f"{config.fastapi_url} ({config.env.environment})")
        if st.button("Check Health"):
            try:
                with st.spinner("Checking health..."):
                    response = st.session_state.api_client.get(config.endpoints.health, timeout=10)
                    st.session_state.health_status = response
                    st.success("Online")
            except APIError as e:
                st.error(f"Cannot connect to API: {e.message}")

        if st.session_state.health_status:
            with st.expander("System Details"):
                st.json(st.session_state.health_status)
