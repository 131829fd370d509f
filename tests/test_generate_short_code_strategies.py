"""
Tests for short id generation strategies and alias validation.
"""
import string

import pytest

from shortlink_app.exceptions import ValidationError
from shortlink_app.services.key_generator import KeyGenerator
from shortlink_app.services.short_code_strategies import (
    Base62ShortCodeStrategy,
    NanoIdShortCodeStrategy,
    RandomShortCodeStrategy,
)
from shortlink_app.services.short_code_factory import (
    ShortCodeFactory,
    ShortCodeStrategyType
)

URL_SAFE = set(string.ascii_letters + string.digits + "_-")


class TestNanoIdStrategy:
    """Test nanoid-style strategy"""

    def test_generates_eight_characters_by_default(self):
        strategy = NanoIdShortCodeStrategy()

        assert len(strategy.generate()) == 8

    def test_uses_url_safe_alphabet(self):
        strategy = NanoIdShortCodeStrategy(length=8)

        for _ in range(200):
            assert set(strategy.generate()) <= URL_SAFE

    def test_codes_do_not_repeat(self):
        """1000 draws from 64^8 should never collide"""
        strategy = NanoIdShortCodeStrategy(length=8)

        codes = {strategy.generate() for _ in range(1000)}

        assert len(codes) == 1000

    def test_custom_length(self):
        strategy = NanoIdShortCodeStrategy(length=12)

        assert len(strategy.generate()) == 12

    def test_rejects_non_positive_length(self):
        with pytest.raises(ValueError):
            NanoIdShortCodeStrategy(length=0)


class TestBase62Strategy:
    """Test alphanumeric strategy"""

    def test_generates_alphanumeric_codes(self):
        strategy = Base62ShortCodeStrategy(length=8)

        for _ in range(200):
            code = strategy.generate()
            assert len(code) == 8
            assert code.isalnum()


class TestShortCodeFactory:
    """Test strategy factory"""

    def test_creates_nanoid_strategy(self):
        strategy = ShortCodeFactory.create_strategy(ShortCodeStrategyType.NANOID)
        assert isinstance(strategy, NanoIdShortCodeStrategy)

    def test_creates_base62_strategy(self):
        strategy = ShortCodeFactory.create_strategy(ShortCodeStrategyType.BASE62)
        assert isinstance(strategy, Base62ShortCodeStrategy)

    def test_creates_default_from_settings(self):
        """Test factory uses settings when no type specified"""
        strategy = ShortCodeFactory.create_strategy()
        # nanoid by default
        assert isinstance(strategy, NanoIdShortCodeStrategy)

    def test_returns_cached_instance(self):
        first = ShortCodeFactory.create_strategy(ShortCodeStrategyType.BASE62)
        second = ShortCodeFactory.create_strategy(ShortCodeStrategyType.BASE62)
        assert first is second

    def test_unknown_type_from_string(self):
        with pytest.raises(ValueError):
            ShortCodeStrategyType("sequential")


class TestKeyGenerator:
    """Test alias validation and delegation to the strategy"""

    def test_generate_delegates_to_strategy(self):
        class FixedStrategy(RandomShortCodeStrategy):
            def generate(self):
                return "fixed123"

        generator = KeyGenerator(strategy=FixedStrategy())

        assert generator.generate() == "fixed123"

    def test_alias_at_max_length_is_accepted(self):
        generator = KeyGenerator()

        assert generator.validate_alias("a" * 20) == "a" * 20

    def test_alias_over_max_length_is_rejected(self):
        generator = KeyGenerator()

        with pytest.raises(ValidationError):
            generator.validate_alias("a" * 21)

    @pytest.mark.parametrize("alias", ["has space", "slash/alias", "query?x", "émoji"])
    def test_alias_must_be_url_safe(self, alias):
        with pytest.raises(ValidationError):
            KeyGenerator().validate_alias(alias)

    @pytest.mark.parametrize("alias", ["all-links", "health", "info"])
    def test_reserved_route_names_are_rejected(self, alias):
        with pytest.raises(ValidationError):
            KeyGenerator().validate_alias(alias)

    @pytest.mark.parametrize("alias", ["Health", "INFO", "Docs"])
    def test_route_name_in_other_case_is_accepted(self, alias):
        # Routes match case-sensitively, so "/Health" never reaches the health check
        assert KeyGenerator().validate_alias(alias) == alias

    def test_zero_max_length_rejects_every_alias(self):
        with pytest.raises(ValidationError):
            KeyGenerator(alias_max_length=0).validate_alias("a")
