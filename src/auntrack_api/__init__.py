"""
auntrack_api package

FastAPI backend of the AunTrack category calendar: authentication,
categories, events, user accounts and exports.
"""
