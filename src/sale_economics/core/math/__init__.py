"""
Core math modules для sale_economics

Чистые функции расчёта: нормализация ввода, комиссия, FDI, продуктивность.
"""

# Numerical Safeguards
from sale_economics.core.math.numerical_safeguards import (
    MONEY_CONTEXT,
    MONEY_PLACES,
    clamp,
    is_valid_float,
    multiply_money,
    normalize_amount,
    normalize_count,
    normalize_money,
    parse_number,
    round_money,
    safe_divide,
    sanitize_float,
    to_decimal,
)

# Commission
from sale_economics.core.math.commission import (
    commission_amount,
    resolve_tier_rate,
    total_commission_rate,
)

# FDI
from sale_economics.core.math.fdi import (
    fdi_available_points,
    fdi_discount_cost,
)

# Productivity
from sale_economics.core.math.productivity import daily_productivity_metric

__all__ = [
    # Numerical Safeguards: Constants
    "MONEY_CONTEXT",
    "MONEY_PLACES",
    # Numerical Safeguards: Normalization
    "parse_number",
    "normalize_amount",
    "normalize_count",
    "normalize_money",
    # Numerical Safeguards: Rounding
    "round_money",
    "multiply_money",
    "to_decimal",
    # Numerical Safeguards: Utilities
    "clamp",
    "is_valid_float",
    "safe_divide",
    "sanitize_float",
    # Commission
    "commission_amount",
    "resolve_tier_rate",
    "total_commission_rate",
    # FDI
    "fdi_available_points",
    "fdi_discount_cost",
    # Productivity
    "daily_productivity_metric",
]
