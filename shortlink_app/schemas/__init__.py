from .link import (
    LinkAnalytics,
    LinkCreate,
    LinkCreated,
    LinkInfo,
    LinkSummary,
    build_short_url,
)

__all__ = [
    "LinkAnalytics",
    "LinkCreate",
    "LinkCreated",
    "LinkInfo",
    "LinkSummary",
    "build_short_url",
]
