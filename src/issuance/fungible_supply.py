"""FungibleSupply — стандартный учёт fungible актива.

Одна реализация для issued токена и для in-memory collateral актива
(композиция, а не наследование).

Инвариант: total_supply == sum(balances).
"""

from src.core.math.fixed_point import validate_amount
from src.issuance.errors import InsufficientAllowance, InsufficientBalance, ZeroAddress


def _require_address(address: str, role: str) -> None:
    if not address:
        raise ZeroAddress(f"{role} address cannot be empty")


class FungibleSupply:
    """Балансы, allowances и total supply."""

    def __init__(self, symbol: str = "", decimals: int = 18):
        self.symbol = symbol
        self.decimals = decimals
        self._balances: dict[str, int] = {}
        self._allowances: dict[str, dict[str, int]] = {}
        self._total_supply = 0

    # -------------------------------------------------------------------------
    # Чтение
    # -------------------------------------------------------------------------

    @property
    def total_supply(self) -> int:
        return self._total_supply

    def balance_of(self, account: str) -> int:
        return self._balances.get(account, 0)

    def allowance(self, owner: str, spender: str) -> int:
        return self._allowances.get(owner, {}).get(spender, 0)

    def holders(self) -> dict[str, int]:
        """Копия ненулевых балансов."""
        return {account: amount for account, amount in self._balances.items() if amount > 0}

    def allowances(self) -> dict[str, dict[str, int]]:
        return {
            owner: {spender: amount for spender, amount in spenders.items() if amount > 0}
            for owner, spenders in self._allowances.items()
            if any(amount > 0 for amount in spenders.values())
        }

    # -------------------------------------------------------------------------
    # Supply
    # -------------------------------------------------------------------------

    def mint(self, to: str, amount: int) -> None:
        _require_address(to, "recipient")
        validate_amount(amount)
        self._balances[to] = self.balance_of(to) + amount
        self._total_supply += amount

    def burn(self, account: str, amount: int) -> None:
        """
        Raises:
            InsufficientBalance: Если баланс account < amount
        """
        validate_amount(amount)
        balance = self.balance_of(account)
        if balance < amount:
            raise InsufficientBalance(
                f"Insufficient {self.symbol or 'token'} balance: "
                f"{account} has {balance}, requested {amount}"
            )
        self._balances[account] = balance - amount
        self._total_supply -= amount

    # -------------------------------------------------------------------------
    # Transfers
    # -------------------------------------------------------------------------

    def transfer(self, sender: str, recipient: str, amount: int) -> None:
        _require_address(recipient, "recipient")
        validate_amount(amount)
        balance = self.balance_of(sender)
        if balance < amount:
            raise InsufficientBalance(
                f"Insufficient {self.symbol or 'token'} balance: "
                f"{sender} has {balance}, requested {amount}"
            )
        self._balances[sender] = balance - amount
        self._balances[recipient] = self.balance_of(recipient) + amount

    def approve(self, owner: str, spender: str, amount: int) -> None:
        _require_address(spender, "spender")
        validate_amount(amount)
        self._allowances.setdefault(owner, {})[spender] = amount

    def spend_allowance(self, owner: str, spender: str, amount: int) -> None:
        """
        Raises:
            InsufficientAllowance: Если allowance < amount
        """
        current = self.allowance(owner, spender)
        if current < amount:
            raise InsufficientAllowance(
                f"Insufficient allowance: {spender} may spend {current} of {owner}, "
                f"requested {amount}"
            )
        self._allowances[owner][spender] = current - amount

    def transfer_from(self, spender: str, sender: str, recipient: str, amount: int) -> None:
        validate_amount(amount)
        # Проверка баланса до списания allowance: отказ не оставляет следов
        if self.balance_of(sender) < amount:
            raise InsufficientBalance(
                f"Insufficient {self.symbol or 'token'} balance: "
                f"{sender} has {self.balance_of(sender)}, requested {amount}"
            )
        self.spend_allowance(sender, spender, amount)
        self.transfer(sender, recipient, amount)

    # -------------------------------------------------------------------------
    # Snapshot / restore
    # -------------------------------------------------------------------------

    def snapshot(self) -> tuple[dict[str, int], dict[str, dict[str, int]], int]:
        return (
            dict(self._balances),
            {owner: dict(spenders) for owner, spenders in self._allowances.items()},
            self._total_supply,
        )

    def restore(self, state: tuple[dict[str, int], dict[str, dict[str, int]], int]) -> None:
        balances, allowances, total_supply = state
        self._balances = dict(balances)
        self._allowances = {owner: dict(spenders) for owner, spenders in allowances.items()}
        self._total_supply = total_supply

    @classmethod
    def from_balances(
        cls,
        balances: dict[str, int],
        allowances: dict[str, dict[str, int]] | None = None,
        symbol: str = "",
        decimals: int = 18,
    ) -> "FungibleSupply":
        supply = cls(symbol=symbol, decimals=decimals)
        for account, amount in balances.items():
            supply.mint(account, amount)
        for owner, spenders in (allowances or {}).items():
            for spender, amount in spenders.items():
                supply.approve(owner, spender, amount)
        return supply
