"""
Storage module for links and clicks.

LinkStore is the only component that issues queries; services depend on it
rather than on the session directly.
"""

from .link_store import LinkStore

__all__ = ["LinkStore"]
