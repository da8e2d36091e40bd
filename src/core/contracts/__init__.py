"""
Contract Validation Module

Модуль для валидации сериализованных форм BigDecimal и DecimalConfig.
"""

from .validators import (
    BigDecimalValidator,
    ContractValidator,
    DecimalConfigValidator,
    SchemaLoader,
    validate_big_decimal,
    validate_decimal_config,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "BigDecimalValidator",
    "DecimalConfigValidator",
    # Functions
    "validate_big_decimal",
    "validate_decimal_config",
]
