"""
Core module for application configuration, database setup and security.

This module contains the foundational infrastructure for the FastAPI application:
- Configuration management
- Database connection and session management
- Token and password handling
- Custom exceptions
"""
