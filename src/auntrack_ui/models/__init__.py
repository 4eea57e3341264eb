from .models import Category, Event, SessionUser, UserAccount, UserDraft

__all__ = ['Category', 'Event', 'SessionUser', 'UserAccount', 'UserDraft']
