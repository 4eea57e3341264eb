"""
auntrack_ui package

Streamlit client of the AunTrack category calendar.
"""
