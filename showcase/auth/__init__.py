"""
Authorization for admin operations.
"""

from showcase.auth.admin import authorize, require_admin

__all__ = [
    "authorize",
    "require_admin",
]
