"""
Catalog domain package.

This package contains:
- Book and user models
- In-memory catalog store with per-user reviews
- Credential registry
- Error taxonomy shared with the API layer
"""

__version__ = "1.0.0"
