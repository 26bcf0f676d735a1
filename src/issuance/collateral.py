"""Collateral Assets — внешний fungible актив, обеспечивающий выпуск.

CollateralAsset: протокол, потребляемый эмитентом (balance, transfer,
transfer_from). InMemoryCollateralAsset: реализация для тестов и
симуляций: опциональная комиссия на каждый transfer (сжигается, как у
PAXG) и on_transfer hook, вызываемый внутри transfer (моделирует
произвольную вторичную логику актива, в т.ч. re-entrancy).
"""

import logging
from typing import Callable, Optional, Protocol, runtime_checkable

from src.core.domain.variants import AssetFeeModel
from src.core.math.fixed_point import validate_amount
from src.issuance.errors import InsufficientBalance
from src.issuance.fungible_supply import FungibleSupply

logger = logging.getLogger(__name__)


@runtime_checkable
class CollateralAsset(Protocol):
    """Минимальный интерфейс collateral актива."""

    symbol: str
    decimals: int

    def balance_of(self, account: str) -> int: ...

    def transfer(self, sender: str, recipient: str, amount: int) -> None: ...

    def transfer_from(self, spender: str, sender: str, recipient: str, amount: int) -> None: ...


TransferHook = Callable[["InMemoryCollateralAsset", str, str, int], None]


class InMemoryCollateralAsset:
    """
    In-memory fungible актив с опциональной fee-on-transfer семантикой.

    Каждый transfer атомарен: если hook бросает исключение, балансы актива
    возвращаются к состоянию до transfer и исключение пробрасывается.
    """

    def __init__(
        self,
        symbol: str,
        decimals: int,
        fee_model: Optional[AssetFeeModel] = None,
        on_transfer: Optional[TransferHook] = None,
    ):
        self.symbol = symbol
        self.decimals = decimals
        self.fee_model = fee_model
        self.on_transfer = on_transfer
        self._ledger = FungibleSupply(symbol=symbol, decimals=decimals)

    @property
    def total_supply(self) -> int:
        return self._ledger.total_supply

    def balance_of(self, account: str) -> int:
        return self._ledger.balance_of(account)

    def allowance(self, owner: str, spender: str) -> int:
        return self._ledger.allowance(owner, spender)

    def mint(self, to: str, amount: int) -> None:
        """Faucet: выпуск актива на адрес (только для тестов/симуляций)."""
        self._ledger.mint(to, amount)

    def approve(self, owner: str, spender: str, amount: int) -> None:
        self._ledger.approve(owner, spender, amount)

    def fee_on(self, amount: int) -> int:
        return self.fee_model.fee_on(amount) if self.fee_model is not None else 0

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        self._move(sender, recipient, amount)

    def transfer_from(self, spender: str, sender: str, recipient: str, amount: int) -> None:
        validate_amount(amount)
        state = self._ledger.snapshot()
        try:
            if self._ledger.balance_of(sender) < amount:
                raise InsufficientBalance(
                    f"{self.symbol}: transfer amount exceeds balance "
                    f"({self._ledger.balance_of(sender)} < {amount})"
                )
            self._ledger.spend_allowance(sender, spender, amount)
            self._move(sender, recipient, amount)
        except Exception:
            self._ledger.restore(state)
            raise

    def _move(self, sender: str, recipient: str, amount: int) -> None:
        validate_amount(amount)
        state = self._ledger.snapshot()
        try:
            fee = self.fee_on(amount)
            self._ledger.transfer(sender, recipient, amount - fee)
            if fee > 0:
                self._ledger.burn(sender, fee)
                logger.debug("%s fee %d burned on transfer %s -> %s", self.symbol, fee, sender, recipient)

            if self.on_transfer is not None:
                self.on_transfer(self, sender, recipient, amount)
        except Exception:
            self._ledger.restore(state)
            raise
