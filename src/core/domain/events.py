"""
Issuance Events — Записи, эмитируемые операциями эмитента

Immutable Pydantic модели. Полная совместимость с JSON Schema
(contracts/schema/*.json): model_dump(mode="json") каждой записи
проходит валидацию соответствующего контракта.
"""

from typing import Literal, Union

from pydantic import BaseModel, Field


# =============================================================================
# EVENT MODELS
# =============================================================================


class Minted(BaseModel):
    """
    Mint завершён.

    amount_in: номинал, указанный вызывающим;
    net_received: фактически удержанный collateral (после комиссии актива).
    """

    event: Literal["Minted"] = "Minted"
    seq: int = Field(..., ge=0, description="Порядковый номер записи в журнале")
    caller: str = Field(..., min_length=1, description="Адрес вызывающего")
    amount_in: int = Field(..., gt=0, description="Номинал collateral (base units)")
    issued_amount: int = Field(..., gt=0, description="Выпущено issued units")
    net_received: int = Field(..., gt=0, description="Удержано collateral (base units)")

    model_config = {"frozen": True}


class Redeemed(BaseModel):
    """
    Redeem завершён.

    collateral_out: gross списание из резервов;
    collateral_delivered: сколько фактически получил вызывающий.
    """

    event: Literal["Redeemed"] = "Redeemed"
    seq: int = Field(..., ge=0)
    caller: str = Field(..., min_length=1)
    issued_amount_in: int = Field(..., gt=0)
    collateral_out: int = Field(..., gt=0)
    collateral_delivered: int = Field(..., ge=0)

    model_config = {"frozen": True}


class TokensBurned(BaseModel):
    """Burn без возврата collateral."""

    event: Literal["TokensBurned"] = "TokensBurned"
    seq: int = Field(..., ge=0)
    caller: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0)

    model_config = {"frozen": True}


class EmergencyWithdrawal(BaseModel):
    """Owner-only rescue актива с адреса эмитента."""

    event: Literal["EmergencyWithdrawal"] = "EmergencyWithdrawal"
    seq: int = Field(..., ge=0)
    caller: str = Field(..., min_length=1)
    asset_symbol: str = Field(..., min_length=1)
    amount: int = Field(..., gt=0)
    is_collateral: bool = Field(..., description="True если выведен collateral эмитента")

    model_config = {"frozen": True}


IssuanceEvent = Union[Minted, Redeemed, TokensBurned, EmergencyWithdrawal]
