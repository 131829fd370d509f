"""
Database models for the link shortener.

Two tables: links and clicks, related by clicks.link_id -> links.id.
"""

from .link import Link
from .click import Click, UNKNOWN_IP

__all__ = ["Link", "Click", "UNKNOWN_IP"]
