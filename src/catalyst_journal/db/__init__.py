"""Database module for Catalyst Journal."""

from .database import JournalDatabase, utc_now

__all__ = ["JournalDatabase", "utc_now"]
