"""
SQLAlchemy ORM models for the showcase registry.
"""

from showcase.models.asset import Asset, COUNTER_COLUMNS, INFO_SLOTS

__all__ = [
    "Asset",
    "COUNTER_COLUMNS",
    "INFO_SLOTS",
]
