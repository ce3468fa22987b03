"""
Commission: ставка и сумма комиссии по тарифной сетке

Ставка определяется типом продажи (DEED/TRUST) и объёмом продаж,
накопленным ДО текущей продажи. Сумма текущей продажи к объёму
не прибавляется: граница ступени проверяется по prior_volume,
а найденная ставка применяется к новой сумме продажи.

ИНВАРИАНТЫ:
1. Ставка не убывает с ростом prior_volume (проверяется CommissionSchedule)
2. Ставка всегда в [0, 100] и округлена до 2 знаков
3. Функции тотальны: невалидный вход → 0, исключений нет
"""

import logging
from bisect import bisect_right
from collections.abc import Mapping
from typing import Any

from sale_economics.core.domain.sale import SaleType
from sale_economics.core.domain.schedule import (
    DEFAULT_SCHEDULES,
    MAX_COMMISSION_RATE_PCT,
    CommissionSchedule,
)
from sale_economics.core.math.numerical_safeguards import (
    clamp,
    multiply_money,
    normalize_amount,
    normalize_money,
    round_money,
)

logger = logging.getLogger(__name__)


def resolve_tier_rate(schedule: CommissionSchedule, prior_volume: float) -> float:
    """
    Ставка ступени для заданного накопленного объёма.

    Наибольший порог, не превышающий prior_volume; ниже первого порога
    действует базовая ставка.

    Args:
        schedule: Тарифная сетка
        prior_volume: Нормализованный накопленный объём (USD)

    Returns:
        rate_pct найденной ступени (без clamp/округления)
    """
    idx = bisect_right(schedule.thresholds, prior_volume) - 1
    tier = schedule.tiers[max(idx, 0)]
    return tier.rate_pct


def total_commission_rate(
    sale_amount: Any,
    prior_volume: Any,
    sale_type: Any,
    schedules: Mapping[SaleType, CommissionSchedule] | None = None,
) -> float:
    """
    Итоговая ставка комиссии (%) для продажи.

    sale_amount принимается и нормализуется, но на выбор ступени
    сейчас не влияет: параметр сохранён в сигнатуре под надбавки,
    зависящие от суммы.

    Args:
        sale_amount: Сумма текущей продажи (сырое значение)
        prior_volume: Объём продаж до текущей продажи (сырое значение)
        sale_type: SaleType или строка "DEED"/"TRUST"
        schedules: Сетки по типам продажи (default: DEFAULT_SCHEDULES)

    Returns:
        Ставка в процентах, [0, 100], 2 знака

    Examples:
        >>> total_commission_rate("2500.005", 0, "DEED")
        6.0
        >>> total_commission_rate(1000, 750_000, SaleType.TRUST)
        5.0
    """
    schedules = schedules if schedules is not None else DEFAULT_SCHEDULES

    amount = normalize_money(sale_amount)
    volume = normalize_amount(prior_volume, non_negative=True)
    kind = SaleType.coerce(sale_type)

    rate = resolve_tier_rate(schedules[kind], volume)
    result = round_money(clamp(rate, min_value=0.0, max_value=MAX_COMMISSION_RATE_PCT))

    logger.debug(
        "Commission rate resolved: sale_type=%s amount=%.2f prior_volume=%.2f rate=%.2f",
        kind.value,
        amount,
        volume,
        result,
    )
    return result


def commission_amount(sale_amount: Any, rate: Any) -> float:
    """
    Сумма комиссии: sale_amount × rate / 100, округление до центов.

    Оба входа нормализуются: сумма к неотрицательной и округлённой до центов,
    ставка к [0, 100]. Пересчёт из уже округлённых сохранённых значений
    даёт ту же сумму.

    Examples:
        >>> commission_amount(2500.01, 6.0)
        150.0
        >>> commission_amount("", 6.0)
        0.0
    """
    amount = normalize_money(sale_amount)
    rate_pct = clamp(
        normalize_amount(rate, non_negative=True),
        min_value=0.0,
        max_value=MAX_COMMISSION_RATE_PCT,
    )
    return multiply_money(amount, rate_pct, divisor=100)
