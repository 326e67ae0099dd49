"""Tests for structured cache keys."""

from src.bm_cache.domain import keys
from src.bm_cache.domain.keys import QueryKey


class TestQueryKey:
    def test_parameterized_keys_differ(self) -> None:
        assert keys.profit_loss(3, 2025) != keys.profit_loss(4, 2025)
        assert keys.profit_loss(3, 2025) == keys.profit_loss(3, 2025)

    def test_hashable(self) -> None:
        assert len({keys.products(), keys.products(), keys.customers()}) == 2

    def test_pattern_matches_all_params(self) -> None:
        pattern = QueryKey.all(keys.PROFIT_LOSS)
        assert pattern.is_pattern
        assert pattern.matches(keys.profit_loss(1, 2024))
        assert not pattern.matches(keys.expenses_by_month(1, 2024))

    def test_concrete_matches_only_itself(self) -> None:
        assert keys.product(1).matches(keys.product(1))
        assert not keys.product(1).matches(keys.product(2))

    def test_str(self) -> None:
        assert str(keys.products()) == "products"
        assert str(keys.profit_loss(3, 2025)) == "profit_loss(3, 2025)"
        assert str(QueryKey.all(keys.PROFIT_LOSS)) == "profit_loss(*)"
