from datetime import datetime, time

import streamlit as st

from auntrack_common.calendar_grid import to_local
from auntrack_common.permissions import Action
from auntrack_ui.app_lib.utils.formatters import format_range


def _datetime_inputs(label: str, key: str, default: datetime):
    day_col, time_col = st.columns(2)
    with day_col:
        day = st.date_input(f"{label} date", value=default.date(), key=f"{key}_date")
    with time_col:
        at = st.time_input(f"{label} time", value=default.time().replace(microsecond=0), key=f"{key}_time")
    return datetime.combine(day, at)


def render_add_event(store, auth) -> None:
    if not auth.can(Action.ADD_EVENT):
        return
    if not store.categories:
        st.info("Create a category before adding events")
        return

    first_day = store.current_days[0]
    with st.form("add_event_form", clear_on_submit=True):
        st.subheader("Add event")
        title = st.text_input("Event title")
        category = st.selectbox("Category", options=store.categories, format_func=lambda c: c.name)
        start = _datetime_inputs("Start", "add_start", datetime.combine(first_day, time(9, 0)))
        end = _datetime_inputs("End", "add_end", datetime.combine(first_day, time(17, 0)))
        custom_color = st.checkbox("Use a custom color")
        color = st.color_picker("Color", value=category.color if category else "#3b82f6")
        description = st.text_area("Description")
        submitted = st.form_submit_button("Add event")

    if submitted and category is not None:
        created = store.add_event(
            title=title,
            category_id=category.id,
            start_date=start,
            end_date=end,
            color=color if custom_color else None,
            description=description,
        )
        if created is not None:
            st.success(f"Added '{created.title}'")


def render_edit_event(store, auth) -> None:
    can_edit, can_delete = auth.can(Action.EDIT_EVENT), auth.can(Action.DELETE_EVENT)
    if not (can_edit or can_delete) or not store.events:
        return

    st.subheader("Edit event")
    event = st.selectbox(
        "Event",
        options=store.events,
        format_func=lambda e: f"{e.title} ({format_range(e.start_date, e.end_date, store.tz)})",
        key="edit_event_select",
    )
    if event is None:
        return

    if can_edit:
        category_ids = [category.id for category in store.categories]
        with st.form(f"edit_event_form_{event.id}"):
            title = st.text_input("Event title", value=event.title)
            category = st.selectbox(
                "Category",
                options=store.categories,
                index=category_ids.index(event.category_id) if event.category_id in category_ids else 0,
                format_func=lambda c: c.name,
            )
            start = _datetime_inputs("Start", f"edit_start_{event.id}", to_local(event.start_date, store.tz))
            end = _datetime_inputs("End", f"edit_end_{event.id}", to_local(event.end_date, store.tz))
            color = st.color_picker("Color", value=event.color)
            description = st.text_area("Description", value=event.description or "")
            submitted = st.form_submit_button("Save changes")

        if submitted:
            updated = store.update_event(event.id, {
                "title": title,
                "category_id": category.id,
                "start_date": start,
                "end_date": end,
                "color": color,
                "description": description or None,
            })
            if updated is not None:
                st.success(f"Saved '{updated.title}'")

    if can_delete and st.button("Delete event", key=f"delete_event_{event.id}"):
        if store.delete_event(event.id):
            st.success("Event deleted")
            st.rerun()
