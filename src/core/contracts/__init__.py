"""
Contract Validation Module

Модуль для валидации JSON контрактов эмитента (записи журнала, снапшоты).
"""

from .validators import (
    EVENT_SCHEMAS,
    ContractValidator,
    EmergencyWithdrawalValidator,
    IssuerSnapshotValidator,
    MintedValidator,
    RedeemedValidator,
    SchemaLoader,
    TokensBurnedValidator,
    validate_event_record,
    validate_issuer_snapshot,
    validate_minted,
    validate_redeemed,
    validate_tokens_burned,
)

__all__ = [
    # Classes
    "SchemaLoader",
    "ContractValidator",
    "MintedValidator",
    "RedeemedValidator",
    "TokensBurnedValidator",
    "EmergencyWithdrawalValidator",
    "IssuerSnapshotValidator",
    # Constants
    "EVENT_SCHEMAS",
    # Functions
    "validate_event_record",
    "validate_minted",
    "validate_redeemed",
    "validate_tokens_burned",
    "validate_issuer_snapshot",
]
