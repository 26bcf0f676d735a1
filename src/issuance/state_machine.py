"""MintRedeemStateMachine — deposit→mint и redeem→withdraw переходы.

Композиция ConversionEngine + ReserveLedger + FungibleSupply под AccessGate:
- Состояния ACTIVE / PAUSED (из gate)
- Каждая операция атомарна: при любом исключении ledger, supply и журнал
  возвращаются к состоянию до операции
- Checks-effects-interactions: в redeem вся внутренняя мутация (supply,
  ledger) завершается ДО исходящего transfer collateral. Re-entrant вызов
  из transfer видит полностью обновлённое состояние
- Единая точка сериализации: RLock на всё время операции (re-entrant
  вызовы из того же потока допускаются и видят актуальное состояние)
"""

import logging
import threading
from contextlib import contextmanager
from typing import Iterator, Optional

from src.core.domain.events import EmergencyWithdrawal, Minted, Redeemed, TokensBurned
from src.core.domain.units import format_amount
from src.core.domain.variants import AssetFeeModel, IssuerVariant
from src.core.math.conversion import ConversionEngine
from src.core.math.fixed_point import validate_amount
from src.issuance.access import AccessGate, IssuerState
from src.issuance.collateral import CollateralAsset
from src.issuance.errors import (
    AmountTooSmall,
    InsufficientBalance,
    InsufficientReserves,
    InvalidAmount,
    InvalidTarget,
    ZeroAddress,
)
from src.issuance.event_log import EventLog
from src.issuance.fungible_supply import FungibleSupply
from src.issuance.reserve_ledger import ReserveLedger
from src.issuance.settings import IssuerSettings

logger = logging.getLogger(__name__)


def _same_fee(left: Optional[AssetFeeModel], right: Optional[AssetFeeModel]) -> bool:
    """Совпадение эффективных ставок; None и rate=0 эквивалентны."""
    left_rate, left_den = (left.rate, left.denominator) if left is not None else (0, 1)
    right_rate, right_den = (right.rate, right.denominator) if right is not None else (0, 1)
    return left_rate * right_den == right_rate * left_den


class MintRedeemStateMachine:
    """
    Оркестрация mint / redeem / burn.

    Порядок проверок каждой операции:
    1. Pause guard (gate)
    2. Нулевая сумма → InvalidAmount
    3. Баланс / резервы / округление в ноль
    4. Effects (ledger, supply)
    5. Interaction (collateral transfer)
    6. Запись в журнал
    """

    def __init__(
        self,
        variant: IssuerVariant,
        collateral: CollateralAsset,
        address: str,
        gate: AccessGate,
        ledger: Optional[ReserveLedger] = None,
        supply: Optional[FungibleSupply] = None,
        events: Optional[EventLog] = None,
        settings: Optional[IssuerSettings] = None,
    ):
        """
        Args:
            variant: параметры выпуска (курс, точность, fee model)
            collateral: внешний collateral актив
            address: адрес эмитента в collateral активе
            gate: owner/pause capability
            ledger: резервы (по умолчанию пустые)
            supply: issued supply (по умолчанию пустой)
            events: журнал записей
            settings: конфигурация поведения
        """
        if not address:
            raise ZeroAddress("issuer address cannot be empty")
        if collateral.decimals != variant.collateral_decimals:
            raise ValueError(
                f"{collateral.symbol} has {collateral.decimals} decimals, "
                f"variant {variant.key} expects {variant.collateral_decimals}"
            )
        if hasattr(collateral, "fee_model") and not _same_fee(collateral.fee_model, variant.fee_model):
            raise ValueError(
                f"{collateral.symbol} fee model {collateral.fee_model} does not match "
                f"variant {variant.key} fee model {variant.fee_model}"
            )

        self.variant = variant
        self.engine = ConversionEngine(variant)
        self.collateral = collateral
        self.address = address
        self.gate = gate
        self.settings = settings or IssuerSettings()
        self.ledger = ledger if ledger is not None else ReserveLedger()
        self.supply = supply if supply is not None else FungibleSupply(symbol=variant.symbol, decimals=18)
        self.events = events if events is not None else EventLog(validate=self.settings.validate_records)

        self._lock = threading.RLock()

    @property
    def state(self) -> IssuerState:
        return self.gate.state

    @property
    def lock(self) -> threading.RLock:
        """Точка сериализации доступа к (ledger, supply)."""
        return self._lock

    # -------------------------------------------------------------------------
    # Атомарность
    # -------------------------------------------------------------------------

    @contextmanager
    def _atomic(self, operation: str) -> Iterator[None]:
        """Эксклюзивный доступ к (ledger, supply, events) + откат при ошибке."""
        with self._lock:
            ledger_state = self.ledger.snapshot()
            supply_state = self.supply.snapshot()
            events_mark = self.events.mark()
            try:
                yield
            except Exception as e:
                self.ledger.restore(ledger_state)
                self.supply.restore(supply_state)
                self.events.rollback_to(events_mark)
                logger.info("%s rejected: %s: %s", operation, type(e).__name__, e)
                raise

    @staticmethod
    def _require_caller(caller: str) -> None:
        if not caller:
            raise ZeroAddress("caller address cannot be empty")

    @staticmethod
    def _require_nonzero(amount: int) -> None:
        validate_amount(amount)
        if amount == 0:
            raise InvalidAmount("Amount must be positive")

    # -------------------------------------------------------------------------
    # Mint
    # -------------------------------------------------------------------------

    def mint(self, caller: str, collateral_amount_in: int) -> Minted:
        """
        Deposit collateral → mint issued.

        Все расчёты ведутся от net суммы, фактически удержанной после комиссии
        актива, а не от номинала вызывающего.

        Raises:
            Paused, InvalidAmount, AmountTooSmall, InsufficientBalance,
            InsufficientAllowance
        """
        with self._atomic("mint"):
            self.gate.require_active()
            self._require_caller(caller)
            self._require_nonzero(collateral_amount_in)

            # Округление в ноль известно заранее: средства не забираются
            net_amount = self.engine.net_after_asset_fee(collateral_amount_in)
            issued_amount = self.engine.issued_from_collateral(net_amount)
            if issued_amount == 0:
                raise AmountTooSmall(
                    f"Amount too small: {collateral_amount_in} {self.variant.collateral_symbol} "
                    f"units convert to 0 {self.variant.symbol}"
                )

            self.collateral.transfer_from(self.address, caller, self.address, collateral_amount_in)

            self.ledger.deposit(net_amount)
            self.supply.mint(caller, issued_amount)

            record = self.events.append(
                Minted(
                    seq=self.events.next_seq,
                    caller=caller,
                    amount_in=collateral_amount_in,
                    issued_amount=issued_amount,
                    net_received=net_amount,
                )
            )

        logger.debug(
            "mint %s: %s -> %s",
            caller,
            format_amount(net_amount, self.variant.collateral_decimals, self.variant.collateral_symbol),
            format_amount(issued_amount, 18, self.variant.symbol),
        )
        return record

    # -------------------------------------------------------------------------
    # Redeem
    # -------------------------------------------------------------------------

    def redeem(self, caller: str, issued_amount_in: int) -> Redeemed:
        """
        Burn issued → withdraw collateral.

        Effects (burn + ledger.withdraw) строго до transfer collateral.
        collateral_out: gross списание из резервов; вызывающий может
        получить меньше, если актив берёт комиссию.

        Raises:
            Paused, InvalidAmount, InsufficientBalance, AmountTooSmall,
            InsufficientReserves
        """
        with self._atomic("redeem"):
            self.gate.require_active()
            self._require_caller(caller)
            self._require_nonzero(issued_amount_in)

            balance = self.supply.balance_of(caller)
            if balance < issued_amount_in:
                raise InsufficientBalance(
                    f"Insufficient {self.variant.symbol} balance: "
                    f"has {balance}, requested {issued_amount_in}"
                )

            collateral_out = self.engine.collateral_from_issued(issued_amount_in)
            if collateral_out == 0:
                raise AmountTooSmall(
                    f"Amount too small: {issued_amount_in} {self.variant.symbol} "
                    f"units convert to 0 {self.variant.collateral_symbol}"
                )

            if self.ledger.balance() < collateral_out:
                raise InsufficientReserves(
                    f"Insufficient reserves: requested {collateral_out}, "
                    f"available {self.ledger.balance()}"
                )

            # Effects
            self.supply.burn(caller, issued_amount_in)
            self.ledger.withdraw(collateral_out)

            # Interaction
            self.collateral.transfer(self.address, caller, collateral_out)
            delivered = self.engine.net_after_asset_fee(collateral_out)

            record = self.events.append(
                Redeemed(
                    seq=self.events.next_seq,
                    caller=caller,
                    issued_amount_in=issued_amount_in,
                    collateral_out=collateral_out,
                    collateral_delivered=delivered,
                )
            )

        return record

    # -------------------------------------------------------------------------
    # Burn
    # -------------------------------------------------------------------------

    def burn(self, caller: str, issued_amount_in: int) -> TokensBurned:
        """
        Burn без возврата collateral. Резервы не меняются, поэтому reserve
        ratio оставшихся держателей строго растёт.

        Raises:
            Paused (если settings.burn_requires_active), InvalidAmount,
            InsufficientBalance
        """
        with self._atomic("burn"):
            if self.settings.burn_requires_active:
                self.gate.require_active()
            self._require_caller(caller)
            self._require_nonzero(issued_amount_in)

            self.supply.burn(caller, issued_amount_in)

            record = self.events.append(
                TokensBurned(seq=self.events.next_seq, caller=caller, amount=issued_amount_in)
            )

        return record

    # -------------------------------------------------------------------------
    # Emergency withdraw
    # -------------------------------------------------------------------------

    def emergency_withdraw(
        self, caller: str, asset: Optional[CollateralAsset], amount: int
    ) -> EmergencyWithdrawal:
        """
        Owner-only rescue актива с адреса эмитента на адрес owner.

        Вывод собственного collateral разрешён (если allow_collateral_rescue),
        но ReserveLedger не меняется: после такого вывода фактические
        holdings могут оказаться ниже учтённых резервов.

        Raises:
            Unauthorized, ZeroAddress, InvalidAmount, InvalidTarget,
            InsufficientBalance
        """
        with self._atomic("emergency_withdraw"):
            self.gate.require_owner(caller)
            if asset is None:
                raise ZeroAddress("asset address cannot be empty")
            self._require_nonzero(amount)

            is_collateral = asset is self.collateral
            if is_collateral and not self.settings.allow_collateral_rescue:
                raise InvalidTarget(
                    f"Rescue of issuer collateral {asset.symbol} is disabled"
                )

            held = asset.balance_of(self.address)
            if held == 0:
                raise InvalidTarget(f"Issuer holds no {asset.symbol}")
            if held < amount:
                raise InsufficientBalance(
                    f"Issuer holds {held} {asset.symbol}, requested {amount}"
                )

            asset.transfer(self.address, caller, amount)

            record = self.events.append(
                EmergencyWithdrawal(
                    seq=self.events.next_seq,
                    caller=caller,
                    asset_symbol=asset.symbol,
                    amount=amount,
                    is_collateral=is_collateral,
                )
            )

        if is_collateral:
            logger.warning(
                "Collateral rescued by owner: %d %s; holdings %d vs ledger reserves %d",
                amount,
                asset.symbol,
                asset.balance_of(self.address),
                self.ledger.balance(),
            )
        return record
