"""
Contract Validation Module

Модуль для валидации JSON контрактов (записи истории расчётов).
"""

from .validators import (
    ContractValidator,
    HistoryRecordValidator,
    SchemaLoader,
    validate_history_record,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "HistoryRecordValidator",
    # Functions
    "validate_history_record",
]
