"""
Contract Validation Module

Валидация JSON контрактов формы продаж и сохраняемых записей.
"""

from .validators import (
    ContractValidator,
    SaleInputValidator,
    SaleRecordValidator,
    SchemaLoader,
    validate_sale_input,
    validate_sale_record,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "SaleInputValidator",
    "SaleRecordValidator",
    # Functions
    "validate_sale_input",
    "validate_sale_record",
]
