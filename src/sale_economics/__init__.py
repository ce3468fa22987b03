"""
sale_economics: financial rules for timeshare sale records.

Pure, stateless calculations of commission rate and amount, FDI points
and discount cost, and daily VPG from raw sales-form inputs.
"""

from sale_economics.calculator import SaleEconomicsCalculator, SaleEconomicsConfig
from sale_economics.core.domain import (
    CommissionSchedule,
    CommissionTier,
    FDIPolicy,
    SaleEconomics,
    SaleInput,
    SaleRecord,
    SaleType,
)
from sale_economics.core.math import (
    commission_amount,
    daily_productivity_metric,
    fdi_available_points,
    fdi_discount_cost,
    normalize_amount,
    total_commission_rate,
)

__version__ = "1.0.0"

__all__ = [
    # Calculator
    "SaleEconomicsCalculator",
    "SaleEconomicsConfig",
    # Models
    "SaleType",
    "SaleInput",
    "SaleEconomics",
    "SaleRecord",
    "CommissionTier",
    "CommissionSchedule",
    "FDIPolicy",
    # Entry points
    "total_commission_rate",
    "commission_amount",
    "fdi_available_points",
    "fdi_discount_cost",
    "daily_productivity_metric",
    "normalize_amount",
]
