import logging
from typing import List, Optional

from shortlink_app.config import settings
from shortlink_app.exceptions import ConflictError, ExpiredError
from shortlink_app.models import Link, UNKNOWN_IP
from shortlink_app.schemas.link import (
    LinkAnalytics,
    LinkCreate,
    LinkInfo,
    LinkSummary,
)
from shortlink_app.services.key_generator import KeyGenerator
from shortlink_app.services.link_resolver import LinkResolver
from shortlink_app.storage import LinkStore

logger = logging.getLogger(__name__)


class LinkService:
    """
    Link service with dependency injection for storage and key generation.

    - LinkStore is injected (one per request, bound to that request's session)
    - KeyGenerator is injected or built from the configured strategy
    - Every key lookup goes through LinkResolver (short_id OR alias)
    """

    def __init__(
        self,
        store: LinkStore,
        key_generator: Optional[KeyGenerator] = None,
        max_retries: Optional[int] = None,
        recent_clicks_limit: Optional[int] = None
    ):
        """
        Initialize link service with dependencies.

        Args:
            store: Link store bound to a database session
            key_generator: Short id generator (defaults to configured strategy)
            max_retries: Attempts for a generated short id before giving up
            recent_clicks_limit: Number of IPs reported by analytics/listing
        """
        self.store = store
        self.resolver = LinkResolver(store)
        self.key_generator = key_generator or KeyGenerator()
        self.max_retries = settings.max_retries if max_retries is None else max_retries
        self.recent_clicks_limit = (
            settings.recent_clicks_limit if recent_clicks_limit is None else recent_clicks_limit
        )

    async def create_link(self, payload: LinkCreate) -> Link:
        """Create a new short link

        With an alias, the alias becomes the link's short_id as well, so
        both lookup keys are the same string. Without one, a short id is
        generated and retried on the (rare) unique-constraint collision.

        Raises:
            ValidationError: alias violates length/charset/reserved rules
            ConflictError: alias already used as a short_id or alias, or
                every generated short id collided
        """
        if payload.alias:
            alias = self.key_generator.validate_alias(payload.alias)
            if await self.resolver.find(alias) is not None:
                raise ConflictError("Alias already in use")

            link = await self.store.insert_link(
                original_url=payload.original_url,
                short_id=alias,
                alias=alias,
                expires_at=payload.expires_at,
            )
            logger.info("Created link %s (alias) -> %s", link.short_id, link.original_url)
            return link

        for attempt in range(1, self.max_retries + 1):
            short_id = self.key_generator.generate()
            try:
                link = await self.store.insert_link(
                    original_url=payload.original_url,
                    short_id=short_id,
                    expires_at=payload.expires_at,
                )
            except ConflictError:
                logger.warning(
                    "Generated short id %s collided (attempt %d/%d)",
                    short_id, attempt, self.max_retries
                )
                continue
            logger.info("Created link %s -> %s", link.short_id, link.original_url)
            return link

        raise ConflictError(
            f"Could not generate unique short id after {self.max_retries} attempts"
        )

    async def redirect(self, key: str, ip_address: Optional[str] = None) -> str:
        """
        Resolve key, enforce expiration, record the click, return the target.

        Flow:
        1. Resolve (NotFoundError if absent)
        2. Expired? -> ExpiredError, nothing recorded
        3. Increment click_count + insert Click in one transaction
        4. Return original_url for the 301 redirect
        """
        link = await self.resolver.resolve(key)

        if link.is_expired():
            logger.info("Redirect refused, link %s expired at %s", link.short_id, link.expires_at)
            raise ExpiredError("Link expired")

        # Read before commit expires the instance
        target = link.original_url
        await self.store.record_click(link.id, ip_address or UNKNOWN_IP)
        return target

    async def get_info(self, key: str) -> LinkInfo:
        """Info is available for expired links too"""
        link = await self.resolver.resolve(key)
        return LinkInfo(
            original_url=link.original_url,
            created_at=link.created_at,
            click_count=link.click_count,
        )

    async def get_analytics(self, key: str) -> LinkAnalytics:
        link = await self.resolver.resolve(key)
        clicks = await self.store.recent_clicks(link.id, limit=self.recent_clicks_limit)
        return LinkAnalytics(
            click_count=link.click_count,
            last_five_ips=[click.ip_address for click in clicks],
        )

    async def list_links(self) -> List[LinkSummary]:
        rows = await self.store.list_links_with_recent_clicks(limit=self.recent_clicks_limit)
        return [
            LinkSummary(
                id=link.id,
                original_url=link.original_url,
                short_id=link.short_id,
                created_at=link.created_at,
                click_count=link.click_count,
                last_five_ips=[click.ip_address for click in clicks],
            )
            for link, clicks in rows
        ]

    async def delete_link(self, key: str) -> None:
        """Hard delete; the link's clicks are removed with it"""
        link = await self.resolver.resolve(key)
        short_id = link.short_id
        await self.store.delete_link(link)
        logger.info("Deleted link %s", short_id)
