"""
Month grid: one row per category, one column per day. Each event is drawn
once, on its start day, stretched over the days it covers.
"""
import calendar
import html
from datetime import date

import streamlit as st

from auntrack_common.permissions import Action
from auntrack_ui.app_lib.utils.formatters import format_range, month_label, text_color_for

LABEL_WIDTH = "160px"
DAY_WIDTH = "minmax(34px, 1fr)"

GRID_CSS = """
<style>
.auntrack-grid { display: grid; gap: 2px; font-size: 0.8rem; overflow-x: auto; }
.auntrack-head { font-weight: 600; text-align: center; padding: 4px 0; }
.auntrack-weekend { color: #9ca3af; }
.auntrack-label { font-weight: 600; padding: 6px; border-radius: 4px; }
.auntrack-bar { border-radius: 4px; padding: 3px 6px; white-space: nowrap;
                overflow: hidden; text-overflow: ellipsis; }
</style>
"""


def render_month_navigation(store) -> None:
    prev_col, month_col, year_col, next_col = st.columns([1, 3, 2, 1])
    with prev_col:
        if st.button("<", key="month_prev"):
            store.shift_month(-1)
            st.rerun()
    with month_col:
        month = st.selectbox(
            "Month",
            options=list(range(1, 13)),
            index=store.month - 1,
            format_func=lambda m: calendar.month_name[m],
            key=f"month_select_{store.year}_{store.month}",
        )
        if month != store.month:
            store.set_month(month)
            st.rerun()
    with year_col:
        year = st.number_input(
            "Year", min_value=1970, max_value=2100, value=store.year, step=1,
            key=f"year_input_{store.year}_{store.month}",
        )
        if int(year) != store.year:
            store.set_year(int(year))
            st.rerun()
    with next_col:
        if st.button(">", key="month_next"):
            store.shift_month(1)
            st.rerun()


def build_grid_html(store) -> str:
    days = store.current_days
    parts = [
        GRID_CSS,
        f'<div class="auntrack-grid" style="grid-template-columns: {LABEL_WIDTH} repeat({len(days)}, {DAY_WIDTH});">',
        '<div class="auntrack-head" style="grid-row: 1; grid-column: 1;">Category</div>',
    ]
    for index, day in enumerate(days):
        weekend = " auntrack-weekend" if day.weekday() >= 5 else ""
        parts.append(
            f'<div class="auntrack-head{weekend}" style="grid-row: 1; grid-column: {index + 2};">'
            f'{day.day}<br>{calendar.day_abbr[day.weekday()][:2]}</div>'
        )

    row = 2
    for category, placements in store.grid():
        height = max(1, len(placements))
        parts.append(
            f'<div class="auntrack-label" style="grid-row: {row} / span {height}; grid-column: 1; '
            f'background: {html.escape(category.color)}; color: {text_color_for(category.color)};">'
            f'{html.escape(category.name)}</div>'
        )
        # one sub-row per bar, so overlapping events stay readable
        for offset, placement in enumerate(placements):
            event = placement.event
            tooltip = html.escape(f"{event.title}: {format_range(event.start_date, event.end_date, store.tz)}")
            parts.append(
                f'<div class="auntrack-bar" title="{tooltip}" style="grid-row: {row + offset}; '
                f'grid-column: {placement.column + 2} / span {placement.span}; '
                f'background: {html.escape(event.color)}; color: {text_color_for(event.color)};">'
                f'{html.escape(event.title)}</div>'
            )
        row += height

    parts.append("</div>")
    return "".join(parts)


def render_move_form(store, auth) -> None:
    """Drop an event on another day: the payload is the event id, as a drag would carry."""
    if not auth.can(Action.EDIT_EVENT) or not store.events:
        return

    with st.expander("Move event to another day"):
        with st.form("move_event_form"):
            event = st.selectbox(
                "Event",
                options=store.events,
                format_func=lambda e: f"{e.title} ({format_range(e.start_date, e.end_date, store.tz)})",
            )
            target_day = st.selectbox(
                "Target day",
                options=store.current_days,
                format_func=lambda d: d.strftime("%a %d %b %Y"),
            )
            submitted = st.form_submit_button("Move")

        if submitted and event is not None:
            moved = store.move_event(str(event.id), target_day)
            if moved is not None:
                st.success(f"Moved '{moved.title}' to {format_range(moved.start_date, moved.end_date, store.tz)}")
                st.rerun()


def render_day_details(store) -> None:
    with st.expander("Events on a day"):
        day = st.date_input("Day", value=store.current_days[0], key="day_details")
        if isinstance(day, date):
            events = store.events_for_date(day)
            if not events:
                st.info("No events on this day")
            for event in events:
                st.markdown(
                    f"**{event.title}** ({event.category_name or 'Uncategorized'}) "
                    f"{format_range(event.start_date, event.end_date, store.tz)}"
                )
                if event.description:
                    st.caption(event.description)


def render_calendar(store, auth) -> None:
    st.header(month_label(store.year, store.month))
    render_month_navigation(store)

    if not store.categories:
        st.info("No categories yet")
    else:
        st.markdown(build_grid_html(store), unsafe_allow_html=True)

    render_move_form(store, auth)
    render_day_details(store)
