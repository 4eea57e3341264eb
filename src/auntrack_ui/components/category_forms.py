import streamlit as st

from auntrack_common.permissions import Action


def render_category_manager(store, auth) -> None:
    """Add, rename/recolor and delete categories (admins only)."""
    if not auth.can(Action.MANAGE_CATEGORIES):
        return

    st.subheader("Categories")
    with st.form("add_category_form", clear_on_submit=True):
        name = st.text_input("Category name")
        color = st.color_picker("Color", value="#3b82f6")
        if st.form_submit_button("Add category"):
            created = store.add_category(name, color)
            if created is not None:
                st.success(f"Added category '{created.name}'")

    if not store.categories:
        return

    category = st.selectbox(
        "Edit category", options=store.categories, format_func=lambda c: c.name, key="edit_category_select"
    )
    if category is None:
        return

    with st.form(f"edit_category_form_{category.id}"):
        new_name = st.text_input("Name", value=category.name)
        new_color = st.color_picker("Color", value=category.color)
        if st.form_submit_button("Save category"):
            updated = store.update_category(
                category.id,
                name=new_name if new_name != category.name else None,
                color=new_color if new_color != category.color else None,
            )
            if updated is not None:
                st.success(f"Saved category '{updated.name}'")

    event_count = len(store.events_for_category(category.id))
    confirm = st.checkbox(
        f"Also delete its {event_count} event(s)", key=f"confirm_delete_category_{category.id}"
    )
    if st.button("Delete category", key=f"delete_category_{category.id}", disabled=not confirm):
        if store.delete_category(category.id):
            st.success("Category deleted")
            st.rerun()
