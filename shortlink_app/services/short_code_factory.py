"""
Factory for creating short id generation strategies.
Uses caching to avoid creating multiple instances.
"""

from enum import Enum
from typing import Dict, Optional

from shortlink_app.services.short_code_strategies import (
    ShortCodeStrategy,
    NanoIdShortCodeStrategy,
    Base62ShortCodeStrategy
)
from shortlink_app.config import settings


class ShortCodeStrategyType(Enum):
    """Available short id generation strategies"""
    NANOID = "nanoid"
    BASE62 = "base62"


class ShortCodeFactory:
    """Factory for creating short id generation strategies with caching"""

    _instances: Dict[ShortCodeStrategyType, ShortCodeStrategy] = {}

    @classmethod
    def create_strategy(
        cls,
        strategy_type: Optional[ShortCodeStrategyType] = None
    ) -> ShortCodeStrategy:
        """
        Create or return cached short id generation strategy.

        Args:
            strategy_type: Type of strategy to create.
                          If None, uses value from settings.

        Returns:
            A cached instance of a ShortCodeStrategy

        Raises:
            ValueError: If strategy_type is unknown
        """
        if strategy_type is None:
            strategy_type = ShortCodeStrategyType(settings.short_id_strategy)

        if strategy_type in cls._instances:
            return cls._instances[strategy_type]

        if strategy_type == ShortCodeStrategyType.NANOID:
            instance = NanoIdShortCodeStrategy(length=settings.short_id_length)
        elif strategy_type == ShortCodeStrategyType.BASE62:
            instance = Base62ShortCodeStrategy(length=settings.short_id_length)
        else:
            raise ValueError(f"Unknown strategy type: {strategy_type}")

        cls._instances[strategy_type] = instance
        return instance
