import streamlit as st


def render_login(auth) -> None:
    """Login form; reruns the app once the session is established."""
    st.subheader("Sign in")
    with st.form("login_form"):
        username_or_email = st.text_input("Username or email")
        password = st.text_input("Password", type="password")
        submitted = st.form_submit_button("Sign in")

    if submitted:
        if auth.login(username_or_email, password):
            st.session_state.calendar_loaded = False
            st.rerun()
        else:
            st.error(auth.last_error or "Login failed")
