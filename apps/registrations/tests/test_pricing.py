from decimal import Decimal

import pytest

from apps.registrations.pricing import (
    PRICE_TABLE,
    ParticipantCategory,
    categorize_age,
    price,
)

ADULT = ParticipantCategory.ADULT
TEEN = ParticipantCategory.TEEN
EXEMPT = ParticipantCategory.EXEMPT


class TestPrice:
    """Tests for the event price table."""

    @pytest.mark.parametrize('category, days, expected', [
        (ADULT, 1, '150.00'),
        (ADULT, 2, '300.00'),
        (ADULT, 3, '370.00'),
        (ADULT, 4, '400.00'),
        (TEEN, 1, '75.00'),
        (TEEN, 2, '150.00'),
        (TEEN, 3, '185.00'),
        (TEEN, 4, '200.00'),
    ])
    def test_table(self, category, days, expected):
        assert price(category, days) == Decimal(expected)

    @pytest.mark.parametrize('days', [-1, 0, 5, 7, 100, None, '4'])
    def test_days_outside_table_price_at_zero(self, days):
        assert price(TEEN, days) == 0
        assert price(ADULT, days) == 0

    @pytest.mark.parametrize('days', [-1, 0, 1, 2, 3, 4, 5])
    def test_exempt_is_free(self, days):
        assert price(EXEMPT, days) == 0

    def test_unknown_category_prices_at_zero(self):
        assert price('child', 4) == 0

    def test_plain_string_category(self):
        assert price('adult', 4) == Decimal('400.00')

    def test_prices_are_decimals(self):
        for row in PRICE_TABLE.values():
            assert all(isinstance(amount, Decimal) for amount in row.values())


class TestCategorizeAge:
    """Tests for age reclassification."""

    @pytest.mark.parametrize('age, expected', [
        (0, EXEMPT),
        (9, EXEMPT),
        (10, TEEN),
        (17, TEEN),
        (18, ADULT),
        (70, ADULT),
    ])
    def test_boundaries(self, age, expected):
        assert categorize_age(age) == expected
