"""
FastAPI RESTful API for the Book Review Catalog.

This module provides a REST API for:
- Book catalog browsing and search
- User registration and session-based login
- Adding, modifying and deleting per-user book reviews
"""
