import streamlit as st

from auntrack_ui.services.export_service import EXPORT_FORMATS


def render_export_panel(exporter) -> None:
    """Fetch an export from the backend and offer it for download."""
    st.subheader("Export events")
    label = st.selectbox("Format", options=list(EXPORT_FORMATS), key="export_format")
    if st.button("Prepare export"):
        exported = exporter.fetch(EXPORT_FORMATS[label])
        if exported is not None:
            st.session_state.export_file = exported

    exported = st.session_state.get("export_file")
    if exported is not None:
        st.download_button(
            f"Download {exported.name}",
            data=exported.getvalue(),
            file_name=exported.name,
        )
