"""
FastAPI REST API for the Book Library mock server.

This module provides a small REST API for:
- Browsing the book catalog
- Creating, updating and deleting books
- Admin login issuing signed JWT session tokens
"""
