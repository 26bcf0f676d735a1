"""ReserveHealthMonitor — read-only метрики обеспечения.

Формулы:
    reserves_in_issued = issued_from_collateral(reserves)
    reserve_ratio      = reserves_in_issued * WAD / total_supply   (WAD если supply == 0)
    excess_reserves    = collateral_from_issued(reserves_in_issued - total_supply)

Инварианты:
- Только mint/redeem: reserve_ratio == WAD (ровно 1.0)
- Burn: reserve_ratio строго растёт (резервы не меняются, supply падает)
- Пустая система: reserve_ratio == WAD, без деления на ноль
"""

from typing import NamedTuple, Optional

from pydantic import BaseModel, Field

from src.core.math.conversion import ConversionEngine
from src.core.math.fixed_point import ONE_WAD, ratio_wad
from src.issuance.collateral import CollateralAsset
from src.issuance.fungible_supply import FungibleSupply
from src.issuance.reserve_ledger import ReserveLedger


class OverCollateralization(NamedTuple):
    """Результат check_over_collateralization (excess в collateral units)."""

    is_over: bool
    excess_reserves: int


class ReserveReport(BaseModel):
    """
    Снапшот здоровья резервов.

    holdings: фактический баланс collateral на адресе эмитента;
    holdings_shortfall > 0 означает, что holdings ниже учтённых резервов
    (например, после rescue collateral owner'ом).
    """

    reserves: int = Field(..., ge=0, description="Учтённые резервы (collateral units)")
    reserves_in_issued: int = Field(..., ge=0, description="Резервы в issued units")
    total_supply: int = Field(..., ge=0)
    reserve_ratio_wad: int = Field(..., ge=0, description="Reserve ratio, WAD fixed-point")
    is_over_collateralized: bool
    excess_reserves: int = Field(..., ge=0)
    holdings: Optional[int] = Field(None, ge=0)
    holdings_shortfall: int = Field(default=0, ge=0)

    model_config = {"frozen": True}

    @property
    def fully_backed(self) -> bool:
        return self.reserve_ratio_wad >= ONE_WAD and self.holdings_shortfall == 0


class ReserveHealthMonitor:
    """Read-only метрики поверх ReserveLedger и FungibleSupply."""

    def __init__(
        self,
        engine: ConversionEngine,
        ledger: ReserveLedger,
        supply: FungibleSupply,
        collateral: Optional[CollateralAsset] = None,
        address: Optional[str] = None,
    ):
        self.engine = engine
        self.ledger = ledger
        self.supply = supply
        self.collateral = collateral
        self.address = address

    def reserves_in_issued(self) -> int:
        return self.engine.issued_from_collateral(self.ledger.balance())

    def reserve_ratio(self) -> int:
        """
        Reserve ratio в WAD. При нулевом supply ровно 1.0 по соглашению.
        """
        return ratio_wad(self.reserves_in_issued(), self.supply.total_supply, fallback=ONE_WAD)

    def check_over_collateralization(self) -> OverCollateralization:
        """
        (is_over, excess_reserves): сколько collateral owner мог бы вывести,
        не нарушая 1:1 обеспечения оставшегося supply.
        """
        in_issued = self.reserves_in_issued()
        total_supply = self.supply.total_supply
        if in_issued <= total_supply:
            return OverCollateralization(is_over=False, excess_reserves=0)

        excess = self.engine.collateral_from_issued(in_issued - total_supply)
        return OverCollateralization(is_over=True, excess_reserves=excess)

    def holdings(self) -> Optional[int]:
        if self.collateral is None or self.address is None:
            return None
        return self.collateral.balance_of(self.address)

    def report(self) -> ReserveReport:
        over = self.check_over_collateralization()
        holdings = self.holdings()
        shortfall = 0
        if holdings is not None and holdings < self.ledger.balance():
            shortfall = self.ledger.balance() - holdings

        return ReserveReport(
            reserves=self.ledger.balance(),
            reserves_in_issued=self.reserves_in_issued(),
            total_supply=self.supply.total_supply,
            reserve_ratio_wad=self.reserve_ratio(),
            is_over_collateralized=over.is_over,
            excess_reserves=over.excess_reserves,
            holdings=holdings,
            holdings_shortfall=shortfall,
        )
