"""
FDI: доступные баллы и стоимость выдачи сверх лимита

Каждая продажа даёт лимит FDI баллов, пропорциональный сумме продажи.
Баллы в пределах лимита бесплатны; за каждый балл сверх лимита
начисляется стоимость по ставке политики.

Ненулевая стоимость является предупреждением для оператора, не ошибкой:
сигнал передаётся только возвращаемым значением (cost > 0).
"""

import logging
from typing import Any

from sale_economics.core.domain.schedule import DEFAULT_FDI_POLICY, FDIPolicy
from sale_economics.core.math.numerical_safeguards import (
    MONEY_CONTEXT,
    multiply_money,
    normalize_amount,
    normalize_money,
    round_money,
    to_decimal,
)

logger = logging.getLogger(__name__)


def fdi_available_points(sale_amount: Any, policy: FDIPolicy | None = None) -> float:
    """
    Доступные FDI баллы для суммы продажи.

    points = round2(sale_amount × points_per_dollar). Монотонно не убывает
    по сумме; нулевая сумма даёт ноль баллов.

    Examples:
        >>> fdi_available_points(10_000)
        500.0
        >>> fdi_available_points("")
        0.0
    """
    policy = policy if policy is not None else DEFAULT_FDI_POLICY
    amount = normalize_money(sale_amount)
    return multiply_money(amount, policy.points_per_dollar)


def fdi_discount_cost(
    points_redeemed: Any,
    points_available: Any,
    policy: FDIPolicy | None = None,
) -> float:
    """
    Стоимость FDI баллов, выданных сверх доступного лимита.

    Args:
        points_redeemed: Выданные баллы (сырое значение, пусто → 0)
        points_available: Доступные баллы
        policy: Политика FDI (default: DEFAULT_FDI_POLICY)

    Returns:
        0.0 если redeemed ≤ available, иначе excess × excess_point_cost_usd (USD, 2 знака)

    Examples:
        >>> fdi_discount_cost("", 500.0)
        0.0
        >>> fdi_discount_cost(600, 500.0)
        10.0
    """
    policy = policy if policy is not None else DEFAULT_FDI_POLICY
    redeemed = round_money(normalize_amount(points_redeemed, non_negative=True))
    available = round_money(normalize_amount(points_available, non_negative=True))

    if redeemed <= available:
        return 0.0

    excess = MONEY_CONTEXT.subtract(to_decimal(redeemed), to_decimal(available))
    cost = multiply_money(excess, policy.excess_point_cost_usd)

    if cost > 0:
        logger.info(
            "FDI points over allotment: redeemed=%.2f available=%.2f cost=%.2f",
            redeemed,
            available,
            cost,
        )
    return cost
