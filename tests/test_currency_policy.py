"""
Tests for bet limits and currency restrictions.
"""

import logging

import pytest

from sweeps_engine.domain.enums import Currency, GameCategory
from sweeps_engine.domain.exceptions import BetOutOfRange, UnsupportedCurrency
from sweeps_engine.domain.policies.currency_policy import CurrencyPolicy


class TestCurrencyPolicy:
    """Test minimum/maximum lookups and validation order."""

    def test_original_limits(self, policy: CurrencyPolicy):
        assert policy.minimum_bet(GameCategory.SLOTS, Currency.GC) == 10
        assert policy.maximum_bet(GameCategory.SLOTS, Currency.SC) == 100
        assert policy.minimum_bet(GameCategory.TABLE, Currency.GC) == 25
        assert policy.maximum_bet(GameCategory.LIVE, Currency.GC) == 50000
        assert policy.minimum_bet(GameCategory.BINGO, Currency.SC) == 0.05
        assert policy.maximum_bet(GameCategory.SPORTSBOOK, Currency.SC) == 1000

    def test_minimum_never_exceeds_maximum(self, policy: CurrencyPolicy):
        for category in GameCategory:
            for currency in Currency:
                if policy.is_currency_allowed(category, currency):
                    assert policy.minimum_bet(category, currency) <= policy.maximum_bet(category, currency)

    def test_sportsbook_rejects_gc(self, policy: CurrencyPolicy):
        assert not policy.is_currency_allowed(GameCategory.SPORTSBOOK, Currency.GC)
        with pytest.raises(UnsupportedCurrency):
            policy.minimum_bet(GameCategory.SPORTSBOOK, Currency.GC)
        with pytest.raises(UnsupportedCurrency):
            policy.validate(GameCategory.SPORTSBOOK, Currency.GC, 5)

    def test_bounds_are_inclusive(self, policy: CurrencyPolicy):
        policy.validate(GameCategory.SLOTS, Currency.GC, 10)
        policy.validate(GameCategory.SLOTS, Currency.GC, 10000)

    def test_below_minimum(self, policy: CurrencyPolicy):
        with pytest.raises(BetOutOfRange) as exc:
            policy.validate(GameCategory.SLOTS, Currency.GC, 5)
        assert exc.value.bound == "minimum"
        assert exc.value.limit == 10

    def test_above_maximum(self, policy: CurrencyPolicy):
        with pytest.raises(BetOutOfRange) as exc:
            policy.validate(GameCategory.TABLE, Currency.SC, 300)
        assert exc.value.bound == "maximum"
        assert exc.value.limit == 250

    def test_nan_amount_rejected(self, policy: CurrencyPolicy):
        with pytest.raises(BetOutOfRange):
            policy.validate(GameCategory.SLOTS, Currency.GC, float("nan"))

    def test_unknown_pair_falls_back_with_warning(self, caplog):
        policy = CurrencyPolicy(minimums={}, maximums={})
        with caplog.at_level(logging.WARNING):
            assert policy.minimum_bet(GameCategory.SLOTS, Currency.GC) == 1
            assert policy.maximum_bet(GameCategory.SLOTS, Currency.GC) == 1000
        assert "No minimum bet configured" in caplog.text


class TestCurrencyPreferences:
    """Test per-user currency selection."""

    def test_defaults(self, preferences):
        assert preferences.get_user_currency("u1", GameCategory.SLOTS) == Currency.GC
        assert preferences.get_user_currency("u1", GameCategory.SPORTSBOOK) == Currency.SC

    def test_selection_is_remembered(self, preferences):
        preferences.set_user_currency("u1", GameCategory.SLOTS, Currency.SC)
        assert preferences.get_user_currency("u1", GameCategory.SLOTS) == Currency.SC
        assert preferences.get_user_currency("u2", GameCategory.SLOTS) == Currency.GC
        assert preferences.resolve("u1", GameCategory.SLOTS, Currency.GC) == Currency.GC

    def test_sportsbook_gc_rejected(self, preferences):
        with pytest.raises(UnsupportedCurrency):
            preferences.set_user_currency("u1", GameCategory.SPORTSBOOK, Currency.GC)
