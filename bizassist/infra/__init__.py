"""
Infrastructure layer - Database
"""

from bizassist.infra.database import Database

__all__ = [
    "Database",
]
