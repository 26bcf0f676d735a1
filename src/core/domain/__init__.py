"""
Domain models and value objects.

Contains issuer variants, base-unit helpers, journal records and snapshots.
"""

from src.core.domain.events import (
    EmergencyWithdrawal,
    IssuanceEvent,
    Minted,
    Redeemed,
    TokensBurned,
)
from src.core.domain.snapshot import CURRENT_SNAPSHOT_VERSION, IssuerSnapshot
from src.core.domain.units import (
    ISSUED_DECIMALS,
    MAX_COLLATERAL_DECIMALS,
    WAD,
    decimal_scale,
    format_amount,
    from_base_units,
    to_base_units,
)
from src.core.domain.variants import (
    EUR_VARIANT,
    EUR_VARIANT_V2,
    GOLD_VARIANT,
    USD_VARIANT,
    VARIANTS,
    AssetFeeModel,
    ConversionRate,
    IssuerVariant,
    get_variant,
)

__all__ = [
    # Units module
    "ISSUED_DECIMALS",
    "WAD",
    "MAX_COLLATERAL_DECIMALS",
    "decimal_scale",
    "to_base_units",
    "from_base_units",
    "format_amount",
    # Variants
    "ConversionRate",
    "AssetFeeModel",
    "IssuerVariant",
    "EUR_VARIANT",
    "EUR_VARIANT_V2",
    "USD_VARIANT",
    "GOLD_VARIANT",
    "VARIANTS",
    "get_variant",
    # Journal records
    "Minted",
    "Redeemed",
    "TokensBurned",
    "EmergencyWithdrawal",
    "IssuanceEvent",
    # Snapshot
    "IssuerSnapshot",
    "CURRENT_SNAPSHOT_VERSION",
]
