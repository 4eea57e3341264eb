import pandas as pd
import streamlit as st
from pydantic import ValidationError as ModelValidationError

from auntrack_common.permissions import Action, Role, is_protected_account
from auntrack_ui.models.models import UserDraft

ROLE_OPTIONS = [Role.USER, Role.ADMIN, Role.SUPER_ADMIN]


def _user_frame(users) -> pd.DataFrame:
    return pd.DataFrame([
        {
            "Username": user.username,
            "Name": user.name,
            "Email": user.email,
            "Role": user.role.value,
            "Can add": user.can_add,
            "Can edit": user.can_edit,
            "Created": user.created_at,
        }
        for user in users
    ])


def _draft_form(form_key: str, user=None):
    """Render account fields; returns a UserDraft on submit, else None."""
    with st.form(form_key, clear_on_submit=user is None):
        username = st.text_input("Username", value=user.username if user else "")
        email = st.text_input("Email", value=user.email if user else "")
        name = st.text_input("Name", value=user.name if user else "")
        password = st.text_input(
            "Password" if user is None else "New password (leave blank to keep)", type="password"
        )
        role = st.selectbox(
            "Role",
            options=ROLE_OPTIONS,
            index=ROLE_OPTIONS.index(user.role) if user else 0,
            format_func=lambda r: r.value,
        )
        can_add = st.checkbox("Can add events", value=user.can_add if user else False)
        can_edit = st.checkbox("Can edit events", value=user.can_edit if user else False)
        submitted = st.form_submit_button("Create user" if user is None else "Save user")

    if not submitted:
        return None
    try:
        return UserDraft(
            username=username.strip(), email=email.strip(), name=name.strip(),
            password=password or None, role=role, can_add=can_add, can_edit=can_edit,
        )
    except ModelValidationError:
        st.error("Username, email, password, and name are required")
        return None


def render_user_management(users_service, auth) -> None:
    if not auth.can(Action.MANAGE_USERS):
        st.warning("Only the super admin can manage users")
        return

    if st.button("Reload users") or "users_loaded" not in st.session_state:
        users_service.load()
        st.session_state.users_loaded = True

    users = users_service.users
    if users:
        st.dataframe(_user_frame(users), use_container_width=True, hide_index=True)

    create_tab, edit_tab = st.tabs(["Create user", "Edit user"])
    with create_tab:
        draft = _draft_form("create_user_form")
        if draft is not None and users_service.create_user(draft) is not None:
            st.success(f"Created user '{draft.username}'")

    with edit_tab:
        if not users:
            st.info("No users loaded")
            return
        user = st.selectbox("User", options=users, format_func=lambda u: f"{u.username} ({u.role.value})")
        if user is None:
            return
        draft = _draft_form(f"edit_user_form_{user.id}", user)
        if draft is not None and users_service.update_user(user.id, draft) is not None:
            st.success(f"Saved user '{draft.username}'")

        if not is_protected_account(user) and st.button("Delete user", key=f"delete_user_{user.id}"):
            if users_service.delete_user(user):
                st.success("User deleted")
                st.rerun()
