import re
from typing import Optional

from shortlink_app.config import settings
from shortlink_app.exceptions import ValidationError
from shortlink_app.services.short_code_factory import ShortCodeFactory
from shortlink_app.services.short_code_strategies import ShortCodeStrategy

ALIAS_PATTERN = re.compile(r"^[A-Za-z0-9_-]+$")

# Top-level routes that an alias would shadow
RESERVED_KEYS = frozenset({
    "all-links", "analytics", "delete", "docs", "health", "info", "redoc", "shorten",
})


class KeyGenerator:
    """
    Produces the short key of a new link.

    Callers either validate a caller-supplied alias or ask for a generated
    id. Neither path checks uniqueness: that is the resolver's job (alias)
    or the unique constraint's (generated id).
    """

    def __init__(
        self,
        strategy: Optional[ShortCodeStrategy] = None,
        alias_max_length: Optional[int] = None
    ):
        self.strategy = strategy or ShortCodeFactory.create_strategy()
        if alias_max_length is None:
            alias_max_length = settings.alias_max_length
        self.alias_max_length = alias_max_length

    def validate_alias(self, alias: str) -> str:
        """
        Check alias constraints and return it unchanged.

        Raises:
            ValidationError: too long, not URL-safe, or a reserved route name
        """
        if len(alias) > self.alias_max_length:
            raise ValidationError(
                f"Alias max length is {self.alias_max_length} characters"
            )
        if not ALIAS_PATTERN.match(alias):
            raise ValidationError(
                "Alias may only contain letters, digits, '-' and '_'"
            )
        # Route matching is case-sensitive, so only exact route names collide
        if alias in RESERVED_KEYS:
            raise ValidationError(f"Alias '{alias}' is reserved")
        return alias

    def generate(self) -> str:
        return self.strategy.generate()
