"""Issuance — mint/redeem эмитента, обеспеченного collateral по фиксированному курсу.

Фасад CollateralizedIssuer живёт в src.issuance.issuer (импортирует
src.health, поэтому здесь не реэкспортируется).
"""

from .errors import (
    AmountTooSmall,
    InsufficientAllowance,
    InsufficientBalance,
    InsufficientReserves,
    InvalidAmount,
    InvalidTarget,
    IssuanceError,
    MigrationError,
    NotPaused,
    Paused,
    Unauthorized,
    ZeroAddress,
)
from .reserve_ledger import ReserveLedger
from .fungible_supply import FungibleSupply
from .collateral import CollateralAsset, InMemoryCollateralAsset
from .access import AccessGate, IssuerState
from .settings import IssuerSettings, settings_from_mapping
from .event_log import EventLog
from .state_machine import MintRedeemStateMachine
from .migrations import migrate, redenominate_collateral

__all__ = [
    # Errors
    "IssuanceError",
    "InvalidAmount",
    "AmountTooSmall",
    "InsufficientBalance",
    "InsufficientAllowance",
    "InsufficientReserves",
    "Paused",
    "NotPaused",
    "Unauthorized",
    "ZeroAddress",
    "InvalidTarget",
    "MigrationError",
    # State
    "ReserveLedger",
    "FungibleSupply",
    "CollateralAsset",
    "InMemoryCollateralAsset",
    "AccessGate",
    "IssuerState",
    "EventLog",
    # Config
    "IssuerSettings",
    "settings_from_mapping",
    # Transitions
    "MintRedeemStateMachine",
    "migrate",
    "redenominate_collateral",
]
