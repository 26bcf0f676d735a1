"""
IssuerSnapshot — Персистентное состояние эмитента

Immutable Pydantic модель, представляющая снапшот ledger + supply.
Совместима с JSON Schema (contracts/schema/issuer_snapshot.json).

Версии схемы:
- "1": без collateral_decimals и allowances
- "2": текущая (миграция в src/issuance/migrations.py)
"""

from typing import Annotated, Final

from pydantic import BaseModel, Field, model_validator

CURRENT_SNAPSHOT_VERSION: Final[str] = "2"

NonNegativeAmount = Annotated[int, Field(ge=0)]


class IssuerSnapshot(BaseModel):
    """
    Снапшот состояния эмитента.

    Инварианты:
    - total_supply == sum(balances)
    - reserves == total_deposited - total_withdrawn
    """

    schema_version: str = Field(..., pattern="^2$", description="Версия схемы")
    variant: str = Field(..., min_length=1, description="Ключ IssuerVariant")
    collateral_decimals: int = Field(..., ge=0, le=18)
    owner: str = Field(..., min_length=1)
    paused: bool = Field(default=False)

    reserves: NonNegativeAmount = Field(..., description="Резервы (collateral units)")
    total_deposited: NonNegativeAmount = Field(default=0)
    total_withdrawn: NonNegativeAmount = Field(default=0)

    total_supply: NonNegativeAmount = Field(..., description="Issued supply (18 decimals)")
    balances: dict[str, NonNegativeAmount] = Field(default_factory=dict)
    allowances: dict[str, dict[str, NonNegativeAmount]] = Field(default_factory=dict)

    model_config = {"frozen": True}

    @model_validator(mode="after")
    def _check_invariants(self) -> "IssuerSnapshot":
        if sum(self.balances.values()) != self.total_supply:
            raise ValueError(
                f"total_supply {self.total_supply} != sum(balances) "
                f"{sum(self.balances.values())}"
            )
        if self.total_deposited - self.total_withdrawn != self.reserves:
            raise ValueError(
                f"reserves {self.reserves} != deposited - withdrawn "
                f"({self.total_deposited} - {self.total_withdrawn})"
            )
        return self
