"""ReserveLedger — единственный счётчик удерживаемого collateral.

Инвариант: reserves >= 0 и reserves == total_deposited - total_withdrawn.
Изменяется только MintRedeemStateMachine.
"""

from src.core.math.fixed_point import validate_amount
from src.issuance.errors import InsufficientReserves


class ReserveLedger:
    """Резервы в collateral units."""

    def __init__(self, reserves: int = 0, total_deposited: int | None = None, total_withdrawn: int = 0):
        validate_amount(reserves, "reserves")
        validate_amount(total_withdrawn, "total_withdrawn")
        if total_deposited is None:
            total_deposited = reserves + total_withdrawn
        validate_amount(total_deposited, "total_deposited")
        if total_deposited - total_withdrawn != reserves:
            raise ValueError(
                f"reserves {reserves} != deposited - withdrawn "
                f"({total_deposited} - {total_withdrawn})"
            )

        self._reserves = reserves
        self._total_deposited = total_deposited
        self._total_withdrawn = total_withdrawn

    @property
    def reserves(self) -> int:
        return self._reserves

    @property
    def total_deposited(self) -> int:
        return self._total_deposited

    @property
    def total_withdrawn(self) -> int:
        return self._total_withdrawn

    def balance(self) -> int:
        return self._reserves

    def deposit(self, amount: int) -> None:
        validate_amount(amount)
        self._reserves += amount
        self._total_deposited += amount

    def withdraw(self, amount: int) -> None:
        """
        Списание из резервов.

        Raises:
            InsufficientReserves: Если reserves < amount
        """
        validate_amount(amount)
        if self._reserves < amount:
            raise InsufficientReserves(
                f"Insufficient reserves: requested {amount}, available {self._reserves}"
            )
        self._reserves -= amount
        self._total_withdrawn += amount

    # Используется для атомарного отката операции
    def snapshot(self) -> tuple[int, int, int]:
        return (self._reserves, self._total_deposited, self._total_withdrawn)

    def restore(self, state: tuple[int, int, int]) -> None:
        self._reserves, self._total_deposited, self._total_withdrawn = state
