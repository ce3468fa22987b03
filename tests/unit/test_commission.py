"""
Тесты для модуля Commission

Проверяет:
1. Выбор ступени по накопленному объёму ДО продажи (граница включительно)
2. Раздельные сетки DEED/TRUST
3. Монотонность и диапазон [0, 100]
4. Нормализацию невалидного ввода
5. Сумму комиссии и идемпотентность пересчёта
"""

import logging

import pytest

from sale_economics.core.domain.sale import SaleType
from sale_economics.core.domain.schedule import CommissionSchedule
from sale_economics.core.math.commission import (
    commission_amount,
    resolve_tier_rate,
    total_commission_rate,
)
from sale_economics.core.math.numerical_safeguards import normalize_money, round_money


# =============================================================================
# FIXTURES
# =============================================================================


@pytest.fixture
def offset_schedules() -> dict[SaleType, CommissionSchedule]:
    """Сетки, у которых первый порог выше нуля."""
    return {
        SaleType.DEED: CommissionSchedule.from_pairs([(100_000, 3.0), (200_000, 4.5)]),
        SaleType.TRUST: CommissionSchedule.from_pairs([(50_000, 2.0), (75_000, 100.0)]),
    }


# =============================================================================
# TIER RESOLUTION
# =============================================================================


class TestResolveTierRate:
    """Тесты для resolve_tier_rate"""

    def test_below_first_threshold_uses_base_rate(self, offset_schedules) -> None:
        """Объём ниже первого порога → ставка первой ступени"""
        assert resolve_tier_rate(offset_schedules[SaleType.DEED], 0.0) == 3.0
        assert resolve_tier_rate(offset_schedules[SaleType.DEED], 99_999.99) == 3.0

    def test_threshold_is_inclusive(self, offset_schedules) -> None:
        """Порог, равный объёму, уже действует"""
        assert resolve_tier_rate(offset_schedules[SaleType.DEED], 200_000.0) == 4.5

    def test_highest_threshold_not_exceeding(self) -> None:
        schedule = CommissionSchedule.from_pairs([(0, 1.0), (10, 2.0), (20, 3.0)])
        assert resolve_tier_rate(schedule, 15.0) == 2.0
        assert resolve_tier_rate(schedule, 1e12) == 3.0


class TestTotalCommissionRate:
    """Тесты для total_commission_rate с сеткой по умолчанию"""

    @pytest.mark.parametrize(
        "prior_volume,expected",
        [
            (0, 6.0),
            (499_999.99, 6.0),
            (500_000, 7.0),
            (1_500_000, 8.0),
            (2_000_000, 9.0),
            (10_000_000, 9.0),
        ],
    )
    def test_deed_tiers(self, prior_volume: float, expected: float) -> None:
        assert total_commission_rate(1000, prior_volume, SaleType.DEED) == expected

    @pytest.mark.parametrize(
        "prior_volume,expected",
        [(0, 4.0), (750_000, 5.0), (1_000_000, 6.0), (3_000_000, 7.0)],
    )
    def test_trust_tiers(self, prior_volume: float, expected: float) -> None:
        assert total_commission_rate(1000, prior_volume, SaleType.TRUST) == expected

    def test_sale_amount_does_not_affect_tier(self) -> None:
        """Сумма продажи не влияет на выбор ступени"""
        assert total_commission_rate(1e9, 0, SaleType.DEED) == 6.0
        assert total_commission_rate(0, 0, SaleType.DEED) == 6.0

    def test_sale_amount_not_added_to_prior_volume(self) -> None:
        """450k до продажи + продажа 100k: всё ещё первая ступень"""
        assert total_commission_rate(100_000, 450_000, SaleType.DEED) == 6.0

    @pytest.mark.parametrize("prior_volume", ["abc", "", None, -100, float("nan"), float("-inf")])
    def test_invalid_prior_volume_treated_as_zero(self, prior_volume) -> None:
        assert total_commission_rate(1000, prior_volume, SaleType.DEED) == 6.0

    def test_raw_string_inputs(self) -> None:
        """Сырые строки формы"""
        assert total_commission_rate("2500.005", "600000", "TRUST") == 5.0

    def test_sale_type_case_insensitive(self) -> None:
        assert total_commission_rate(1000, 0, "trust") == 4.0
        assert total_commission_rate(1000, 0, " Deed ") == 6.0

    def test_unknown_sale_type_falls_back_to_deed(self, caplog) -> None:
        """Неизвестный тип → DEED с предупреждением"""
        with caplog.at_level(logging.WARNING):
            assert total_commission_rate(1000, 0, "LEASE") == 6.0
        assert "Unknown sale type" in caplog.text

    def test_alternate_schedules(self, offset_schedules) -> None:
        """Инжектированные сетки используются вместо дефолтных"""
        assert total_commission_rate(1000, 0, "DEED", schedules=offset_schedules) == 3.0
        assert total_commission_rate(1000, 80_000, "TRUST", schedules=offset_schedules) == 100.0

    @pytest.mark.parametrize("sale_type", list(SaleType))
    def test_non_decreasing_and_bounded(self, sale_type: SaleType) -> None:
        """Ставка не убывает по объёму и лежит в [0, 100]"""
        volumes = [v * 25_000.0 for v in range(0, 200)]
        rates = [total_commission_rate(5000, v, sale_type) for v in volumes]

        for prev, curr in zip(rates, rates[1:]):
            assert curr >= prev
        assert all(0.0 <= r <= 100.0 for r in rates)

    def test_result_has_two_decimal_precision(self) -> None:
        schedule = CommissionSchedule.from_pairs([(0, 6.125)])
        rate = total_commission_rate(1000, 0, "DEED", schedules={SaleType.DEED: schedule})
        assert rate == 6.13


# =============================================================================
# COMMISSION AMOUNT
# =============================================================================


class TestCommissionAmount:
    """Тесты для commission_amount"""

    def test_basic(self) -> None:
        assert commission_amount(10_000, 7.5) == 750.0
        assert commission_amount(1234.56, 6.5) == 80.25

    def test_example_scenario_deed_base_tier(self) -> None:
        """DEED, "2500.005", объём 0 → 2500.01 × 6% = 150.00"""
        amount = normalize_money("2500.005")
        rate = total_commission_rate("2500.005", 0, SaleType.DEED)

        assert amount == 2500.01
        assert rate == 6.0
        assert commission_amount(amount, rate) == 150.0
        assert commission_amount("2500.005", rate) == 150.0

    def test_invalid_inputs(self) -> None:
        assert commission_amount("", 6.0) == 0.0
        assert commission_amount(-500, 6.0) == 0.0
        assert commission_amount(1000, "abc") == 0.0
        assert commission_amount(1000, -5) == 0.0

    def test_rate_clamped_to_hundred(self) -> None:
        assert commission_amount(1000, 150) == 1000.0

    @pytest.mark.parametrize(
        "raw_amount,prior_volume,sale_type",
        [
            ("2500.005", 0, SaleType.DEED),
            ("19999.999", 600_000, SaleType.TRUST),
            ("33333.335", 1_250_000, SaleType.DEED),
            ("0.015", 2_500_000, SaleType.TRUST),
        ],
    )
    def test_recompute_from_stored_values_is_idempotent(
        self, raw_amount: str, prior_volume: float, sale_type: SaleType
    ) -> None:
        """Пересчёт из сохранённых округлённых значений даёт ту же сумму"""
        amount = normalize_money(raw_amount)
        rate = total_commission_rate(amount, prior_volume, sale_type)
        original = commission_amount(amount, rate)

        stored_amount = f"{amount:.2f}"
        stored_rate = f"{rate:.2f}"

        assert commission_amount(stored_amount, stored_rate) == original
        assert commission_amount(round_money(amount), round_money(rate)) == original
        assert commission_amount(amount, rate) == original
