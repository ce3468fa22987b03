"""
Commission schedules & FDI policy: конфигурационные модели

Immutable Pydantic модели тарифной сетки комиссий и политики FDI баллов.
Таблицы и ставки не зашиты в логику расчёта: калькулятор получает их
через конфигурацию, тесты подставляют альтернативные сетки.

Значения по умолчанию объявлены как Final-константы модуля и должны
сверяться с действующей тарифной сеткой.
"""

from typing import Final

from pydantic import BaseModel, Field, field_validator

from .sale import SaleType


# =============================================================================
# DEFAULT SCHEDULES
# =============================================================================

# (порог накопленного объёма продаж USD, ставка комиссии %)
DEED_COMMISSION_TIERS: Final[tuple[tuple[float, float], ...]] = (
    (0.0, 6.0),
    (500_000.0, 7.0),
    (1_000_000.0, 8.0),
    (2_000_000.0, 9.0),
)

TRUST_COMMISSION_TIERS: Final[tuple[tuple[float, float], ...]] = (
    (0.0, 4.0),
    (500_000.0, 5.0),
    (1_000_000.0, 6.0),
    (2_000_000.0, 7.0),
)

# FDI баллы, начисляемые за каждый доллар продажи
FDI_POINTS_PER_DOLLAR: Final[float] = 0.05

# Стоимость (USD) каждого балла, выданного сверх доступного лимита
FDI_EXCESS_POINT_COST_USD: Final[float] = 0.10

# Верхняя граница ставки комиссии (%)
MAX_COMMISSION_RATE_PCT: Final[float] = 100.0


# =============================================================================
# COMMISSION SCHEDULE
# =============================================================================


class CommissionTier(BaseModel):
    """Ступень тарифной сетки: начиная с volume_threshold действует rate_pct."""

    volume_threshold: float = Field(
        ..., ge=0, description="Порог накопленного объёма продаж (USD)"
    )
    rate_pct: float = Field(
        ..., ge=0, le=MAX_COMMISSION_RATE_PCT, description="Ставка комиссии (%)"
    )

    model_config = {"frozen": True}


class CommissionSchedule(BaseModel):
    """
    Тарифная сетка комиссий для одного типа продажи.

    Ступени упорядочены строго по возрастанию порога, ставки не убывают.
    Ступень выбирается по объёму, накопленному ДО текущей продажи: берётся
    наибольший порог, не превышающий этот объём. Если объём ниже первого
    порога, действует ставка первой ступени.
    """

    tiers: tuple[CommissionTier, ...] = Field(..., min_length=1)

    model_config = {"frozen": True}

    @field_validator("tiers")
    @classmethod
    def validate_ascending(cls, v: tuple[CommissionTier, ...]) -> tuple[CommissionTier, ...]:
        """Пороги должны строго возрастать, ставки не убывать."""
        for prev, curr in zip(v, v[1:]):
            if curr.volume_threshold <= prev.volume_threshold:
                raise ValueError(
                    f"tier thresholds must be strictly ascending: "
                    f"{prev.volume_threshold} followed by {curr.volume_threshold}"
                )
            if curr.rate_pct < prev.rate_pct:
                raise ValueError(
                    f"tier rates must not decrease: "
                    f"{prev.rate_pct}% at {prev.volume_threshold} followed by "
                    f"{curr.rate_pct}% at {curr.volume_threshold}"
                )
        return v

    @classmethod
    def from_pairs(cls, pairs: "tuple[tuple[float, float], ...] | list") -> "CommissionSchedule":
        """
        Построение сетки из пар (порог, ставка).

        Args:
            pairs: Последовательность (volume_threshold, rate_pct)

        Raises:
            ValidationError: Если сетка некорректна
        """
        return cls(
            tiers=tuple(
                CommissionTier(volume_threshold=threshold, rate_pct=rate)
                for threshold, rate in pairs
            )
        )

    @property
    def thresholds(self) -> list[float]:
        return [tier.volume_threshold for tier in self.tiers]

    @property
    def base_rate_pct(self) -> float:
        """Ставка первой (базовой) ступени."""
        return self.tiers[0].rate_pct


# =============================================================================
# FDI POLICY
# =============================================================================


class FDIPolicy(BaseModel):
    """
    Политика FDI баллов.

    points_available = sale_amount × points_per_dollar
    discount_cost = max(redeemed - available, 0) × excess_point_cost_usd
    """

    points_per_dollar: float = Field(
        default=FDI_POINTS_PER_DOLLAR, ge=0, description="FDI баллов на 1 USD продажи"
    )
    excess_point_cost_usd: float = Field(
        default=FDI_EXCESS_POINT_COST_USD,
        ge=0,
        description="Стоимость балла сверх доступного лимита (USD)",
    )

    model_config = {"frozen": True}


# =============================================================================
# DEFAULT INSTANCES
# =============================================================================

DEFAULT_DEED_SCHEDULE: Final[CommissionSchedule] = CommissionSchedule.from_pairs(
    DEED_COMMISSION_TIERS
)
DEFAULT_TRUST_SCHEDULE: Final[CommissionSchedule] = CommissionSchedule.from_pairs(
    TRUST_COMMISSION_TIERS
)
DEFAULT_SCHEDULES: Final[dict[SaleType, CommissionSchedule]] = {
    SaleType.DEED: DEFAULT_DEED_SCHEDULE,
    SaleType.TRUST: DEFAULT_TRUST_SCHEDULE,
}
DEFAULT_FDI_POLICY: Final[FDIPolicy] = FDIPolicy()
