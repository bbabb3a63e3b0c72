"""
Catalog package for the Book Library API.

This package contains:
- Book record model and the seeded catalog
- In-memory book repository
- ISBN and published-year validators
"""

__version__ = "1.0.0"
