"""
Persistence contract for links and clicks.

LinkStore wraps one SQLAlchemy Session. Methods are async so services can
await them uniformly; the session underneath is synchronous (SQLite and
indexed lookups are fast enough to run inline).

Every SQLAlchemyError is rolled back and surfaced as StorageError, except
unique-constraint violations on insert, which become ConflictError.
"""

import logging
from collections import defaultdict
from datetime import datetime
from typing import Dict, List, Optional, Tuple

from sqlalchemy import func, or_, select, update
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session

from shortlink_app.exceptions import ConflictError, NotFoundError, StorageError
from shortlink_app.models import Click, Link
from shortlink_app.utils.timeutils import utcnow

logger = logging.getLogger(__name__)


class LinkStore:

    def __init__(self, db: Session):
        self.db = db

    def _fail(self, action: str) -> StorageError:
        self.db.rollback()
        logger.exception("Storage failure while %s", action)
        return StorageError(f"Storage failure while {action}")

    async def find_by_unique_key(self, key: str) -> Optional[Link]:
        """Return the link whose short_id OR alias equals key"""
        try:
            return self.db.execute(
                select(Link).where(or_(Link.short_id == key, Link.alias == key)).limit(1)
            ).scalar_one_or_none()
        except SQLAlchemyError as e:
            raise self._fail("looking up a link") from e

    async def insert_link(
        self,
        original_url: str,
        short_id: str,
        alias: Optional[str] = None,
        expires_at: Optional[datetime] = None,
    ) -> Link:
        """
        Insert a new link and commit.

        Raises:
            ConflictError: short_id or alias already exists (nothing is written)
        """
        link = Link(
            original_url=original_url,
            short_id=short_id,
            alias=alias,
            expires_at=expires_at,
            created_at=utcnow(),
            click_count=0,
        )
        try:
            self.db.add(link)
            self.db.commit()
            self.db.refresh(link)
        except IntegrityError as e:
            self.db.rollback()
            raise ConflictError(f"Key '{alias or short_id}' is already in use") from e
        except SQLAlchemyError as e:
            raise self._fail("creating a link") from e

        return link

    async def increment_click_count(self, link_id: str) -> None:
        """
        Add 1 to click_count with a single UPDATE (no read-modify-write).
        Does not commit; see record_click.
        """
        result = self.db.execute(
            update(Link)
            .where(Link.id == link_id)
            .values(click_count=Link.click_count + 1)
            .execution_options(synchronize_session=False)
        )
        if result.rowcount == 0:
            raise NotFoundError("Link not found")

    async def insert_click(self, link_id: str, ip_address: str) -> Click:
        """Append a click row. Does not commit; see record_click."""
        click = Click(link_id=link_id, ip_address=ip_address, created_at=utcnow())
        self.db.add(click)
        self.db.flush()
        return click

    async def record_click(self, link_id: str, ip_address: str) -> Click:
        """
        Increment the counter and insert the click in ONE transaction.

        Either both writes are committed or neither is, so click_count
        always equals the number of click rows.
        """
        try:
            await self.increment_click_count(link_id)
            click = await self.insert_click(link_id, ip_address)
            self.db.commit()
        except NotFoundError:
            self.db.rollback()
            raise
        except SQLAlchemyError as e:
            raise self._fail("recording a click") from e
        return click

    async def delete_link(self, link: Link) -> None:
        """Delete the link; its clicks go with it"""
        try:
            self.db.delete(link)
            self.db.commit()
        except SQLAlchemyError as e:
            raise self._fail("deleting a link") from e

    async def recent_clicks(self, link_id: str, limit: int = 5) -> List[Click]:
        """Most recent clicks of one link, newest first"""
        try:
            return list(
                self.db.execute(
                    select(Click)
                    .where(Click.link_id == link_id)
                    .order_by(Click.created_at.desc(), Click.id.desc())
                    .limit(limit)
                ).scalars()
            )
        except SQLAlchemyError as e:
            raise self._fail("reading recent clicks") from e

    async def list_links_with_recent_clicks(
        self, limit: int = 5
    ) -> List[Tuple[Link, List[Click]]]:
        """
        Every link plus its `limit` most recent clicks (newest first).

        Uses one windowed query for the clicks instead of one query per link:
            ROW_NUMBER() OVER (PARTITION BY link_id ORDER BY created_at DESC)
        """
        ranked = (
            select(
                Click.id.label("click_id"),
                func.row_number()
                .over(
                    partition_by=Click.link_id,
                    order_by=[Click.created_at.desc(), Click.id.desc()],
                )
                .label("row_rank"),
            )
            .subquery()
        )
        try:
            links = list(self.db.execute(select(Link).order_by(Link.created_at)).scalars())
            clicks = list(self.db.execute(
                select(Click)
                .join(ranked, ranked.c.click_id == Click.id)
                .where(ranked.c.row_rank <= limit)
                .order_by(Click.link_id, ranked.c.row_rank)
            ).scalars())
        except SQLAlchemyError as e:
            raise self._fail("listing links") from e

        clicks_by_link: Dict[str, List[Click]] = defaultdict(list)
        for click in clicks:
            clicks_by_link[click.link_id].append(click)

        return [(link, clicks_by_link.get(link.id, [])) for link in links]
