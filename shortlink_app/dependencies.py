"""
FastAPI dependencies for dependency injection.

Pattern: Dependency Injection
- The Database handle lives on app.state (created by the lifespan in main.py)
- Each request gets its own Session -> LinkStore -> LinkService chain
- Tests override get_db to point everything at a test database
"""

from functools import lru_cache

from fastapi import Depends
from sqlalchemy.orm import Session

from shortlink_app.database.connection import get_db
from shortlink_app.services.key_generator import KeyGenerator
from shortlink_app.services.link_service import LinkService
from shortlink_app.storage import LinkStore


@lru_cache()
def get_key_generator() -> KeyGenerator:
    """
    Get key generator instance (singleton).

    Strategy comes from settings via ShortCodeFactory.
    """
    return KeyGenerator()


def get_link_store(db: Session = Depends(get_db)) -> LinkStore:
    return LinkStore(db)


def get_link_service(
    store: LinkStore = Depends(get_link_store),
    key_generator: KeyGenerator = Depends(get_key_generator)
) -> LinkService:
    """
    Get LinkService with all dependencies injected.

    Controllers depend on the service only; the service depends on
    storage and key generation.
    """
    return LinkService(store=store, key_generator=key_generator)
