"""
Domain models and value objects.

Contains sale records (raw input, derived economics, persisted record)
and the commission / FDI configuration models.
"""

from sale_economics.core.domain.sale import (
    SaleEconomics,
    SaleInput,
    SaleRecord,
    SaleType,
)
from sale_economics.core.domain.schedule import (
    DEED_COMMISSION_TIERS,
    DEFAULT_DEED_SCHEDULE,
    DEFAULT_FDI_POLICY,
    DEFAULT_SCHEDULES,
    DEFAULT_TRUST_SCHEDULE,
    FDI_EXCESS_POINT_COST_USD,
    FDI_POINTS_PER_DOLLAR,
    MAX_COMMISSION_RATE_PCT,
    TRUST_COMMISSION_TIERS,
    CommissionSchedule,
    CommissionTier,
    FDIPolicy,
)

__all__ = [
    # Sale models
    "SaleType",
    "SaleInput",
    "SaleEconomics",
    "SaleRecord",
    # Schedule constants
    "DEED_COMMISSION_TIERS",
    "TRUST_COMMISSION_TIERS",
    "FDI_POINTS_PER_DOLLAR",
    "FDI_EXCESS_POINT_COST_USD",
    "MAX_COMMISSION_RATE_PCT",
    # Schedule models
    "CommissionTier",
    "CommissionSchedule",
    "FDIPolicy",
    "DEFAULT_DEED_SCHEDULE",
    "DEFAULT_TRUST_SCHEDULE",
    "DEFAULT_SCHEDULES",
    "DEFAULT_FDI_POLICY",
]
