"""
devmarks: user accounts and bookmarked projects over PostgreSQL.
"""

__version__ = "0.1.0"
