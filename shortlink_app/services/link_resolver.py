from typing import Optional

from shortlink_app.exceptions import NotFoundError
from shortlink_app.models import Link
from shortlink_app.storage import LinkStore


class LinkResolver:
    """
    Maps a key to its link.

    A key may be a short_id or an alias; both namespaces are searched
    together. Redirect, info, analytics and delete all go through here so
    the lookup rule is the same everywhere.
    """

    def __init__(self, store: LinkStore):
        self.store = store

    async def find(self, key: str) -> Optional[Link]:
        return await self.store.find_by_unique_key(key)

    async def resolve(self, key: str) -> Link:
        """Return the link for key, or raise NotFoundError"""
        link = await self.find(key)
        if link is None:
            raise NotFoundError("Link not found")
        return link
