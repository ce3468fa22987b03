"""
Productivity: daily VPG (volume per guest)

daily_vpg = sale_amount / tour_count. Ноль туров даёт 0, а не Inf и не ошибку.
"""

from typing import Any

from sale_economics.core.math.numerical_safeguards import (
    normalize_count,
    normalize_money,
    round_money,
    safe_divide,
)


def daily_productivity_metric(sale_amount: Any, tour_count: Any) -> float:
    """
    Объём продаж на один тур, округлённый до центов.

    Examples:
        >>> daily_productivity_metric(1000, 4)
        250.0
        >>> daily_productivity_metric(5000, 0)
        0.0
    """
    amount = normalize_money(sale_amount)
    tours = normalize_count(tour_count)
    return round_money(safe_divide(amount, float(tours), fallback=0.0))
