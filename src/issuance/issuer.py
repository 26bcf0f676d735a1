"""CollateralizedIssuer — внешние операции эмитента.

Фасад над MintRedeemStateMachine, ConversionEngine и ReserveHealthMonitor:
- mint / redeem / burn
- calculate_issued_amount / calculate_collateral_amount (без состояния)
- get_reserve_ratio / check_over_collateralization / reserve_report
- pause / unpause / emergency_withdraw (owner-only)
- ERC20-поверхность issued токена
- snapshot / from_snapshot (персистентное состояние)

Identity вызывающего и флаг паузы поставляет внешний слой (caller
передаётся явно в каждую операцию).
"""

import logging
from typing import Optional

from src.core.contracts import validate_issuer_snapshot
from src.core.domain.snapshot import CURRENT_SNAPSHOT_VERSION, IssuerSnapshot
from src.core.domain.units import ISSUED_DECIMALS
from src.core.domain.variants import IssuerVariant, get_variant
from src.core.math.conversion import CollateralQuote
from src.health.monitor import OverCollateralization, ReserveHealthMonitor, ReserveReport
from src.issuance.access import AccessGate, IssuerState
from src.issuance.collateral import CollateralAsset
from src.issuance.event_log import EventLog
from src.issuance.fungible_supply import FungibleSupply
from src.issuance.reserve_ledger import ReserveLedger
from src.issuance.settings import IssuerSettings
from src.issuance.state_machine import MintRedeemStateMachine

logger = logging.getLogger(__name__)


class CollateralizedIssuer:
    """Fixed-rate, полностью обеспеченный эмитент одного варианта."""

    def __init__(
        self,
        variant: IssuerVariant,
        collateral: CollateralAsset,
        owner: str,
        address: str,
        settings: Optional[IssuerSettings] = None,
        gate: Optional[AccessGate] = None,
        ledger: Optional[ReserveLedger] = None,
        supply: Optional[FungibleSupply] = None,
    ):
        self.variant = variant
        self.settings = settings or IssuerSettings()
        self.gate = gate if gate is not None else AccessGate(owner)
        self.machine = MintRedeemStateMachine(
            variant=variant,
            collateral=collateral,
            address=address,
            gate=self.gate,
            ledger=ledger,
            supply=supply,
            events=EventLog(validate=self.settings.validate_records),
            settings=self.settings,
        )
        self.monitor = ReserveHealthMonitor(
            engine=self.machine.engine,
            ledger=self.machine.ledger,
            supply=self.machine.supply,
            collateral=collateral,
            address=address,
        )
        logger.info(
            "Issuer %s created at %s (collateral %s, rate %d/%d, scale %d)",
            variant.symbol,
            address,
            collateral.symbol,
            variant.rate.numerator,
            variant.rate.denominator,
            variant.decimal_scale,
        )

    # -------------------------------------------------------------------------
    # Метаданные
    # -------------------------------------------------------------------------

    @property
    def name(self) -> str:
        return self.variant.name

    @property
    def symbol(self) -> str:
        return self.variant.symbol

    @property
    def decimals(self) -> int:
        return ISSUED_DECIMALS

    @property
    def address(self) -> str:
        return self.machine.address

    @property
    def collateral(self) -> CollateralAsset:
        return self.machine.collateral

    @property
    def owner(self) -> str:
        return self.gate.owner

    @property
    def paused(self) -> bool:
        return self.gate.paused

    @property
    def state(self) -> IssuerState:
        return self.machine.state

    @property
    def events(self) -> EventLog:
        return self.machine.events

    def get_conversion_rate(self) -> tuple[int, int]:
        return self.variant.rate.as_tuple()

    # -------------------------------------------------------------------------
    # Операции
    # -------------------------------------------------------------------------

    def mint(self, caller: str, collateral_amount_in: int) -> int:
        """Deposit collateral, вернуть выпущенную сумму issued."""
        return self.machine.mint(caller, collateral_amount_in).issued_amount

    def redeem(self, caller: str, issued_amount_in: int) -> int:
        """Redeem issued, вернуть gross collateral, списанный из резервов."""
        return self.machine.redeem(caller, issued_amount_in).collateral_out

    def burn(self, caller: str, issued_amount_in: int) -> None:
        self.machine.burn(caller, issued_amount_in)

    # -------------------------------------------------------------------------
    # Котировки
    # -------------------------------------------------------------------------

    def calculate_issued_amount(self, collateral_amount_in: int) -> int:
        """Issued за номинал collateral (с учётом входящей комиссии актива)."""
        return self.machine.engine.quote_issued(collateral_amount_in)

    def calculate_collateral_amount(self, issued_amount_in: int) -> CollateralQuote:
        """(nominal, net): списание из резервов и сумма после комиссии актива."""
        return self.machine.engine.quote_collateral(issued_amount_in)

    # -------------------------------------------------------------------------
    # Здоровье резервов
    # -------------------------------------------------------------------------

    @property
    def total_reserves(self) -> int:
        return self.machine.ledger.balance()

    def collateral_balance(self) -> int:
        """Фактический баланс collateral на адресе эмитента."""
        return self.collateral.balance_of(self.address)

    def get_reserve_ratio(self) -> int:
        return self.monitor.reserve_ratio()

    def check_over_collateralization(self) -> OverCollateralization:
        return self.monitor.check_over_collateralization()

    def reserve_report(self) -> ReserveReport:
        return self.monitor.report()

    # -------------------------------------------------------------------------
    # Администрирование
    # -------------------------------------------------------------------------

    def pause(self, caller: str) -> None:
        self.gate.pause(caller)

    def unpause(self, caller: str) -> None:
        self.gate.unpause(caller)

    def transfer_ownership(self, caller: str, new_owner: str) -> None:
        self.gate.transfer_ownership(caller, new_owner)

    def emergency_withdraw(self, caller: str, asset: Optional[CollateralAsset], amount: int) -> None:
        self.machine.emergency_withdraw(caller, asset, amount)

    # -------------------------------------------------------------------------
    # ERC20 поверхность issued токена
    # -------------------------------------------------------------------------

    @property
    def total_supply(self) -> int:
        return self.machine.supply.total_supply

    def balance_of(self, account: str) -> int:
        return self.machine.supply.balance_of(account)

    def allowance(self, owner: str, spender: str) -> int:
        return self.machine.supply.allowance(owner, spender)

    def transfer(self, caller: str, recipient: str, amount: int) -> None:
        with self.machine.lock:
            self.machine.supply.transfer(caller, recipient, amount)

    def approve(self, caller: str, spender: str, amount: int) -> None:
        with self.machine.lock:
            self.machine.supply.approve(caller, spender, amount)

    def transfer_from(self, caller: str, sender: str, recipient: str, amount: int) -> None:
        with self.machine.lock:
            self.machine.supply.transfer_from(caller, sender, recipient, amount)

    # -------------------------------------------------------------------------
    # Персистентность
    # -------------------------------------------------------------------------

    def snapshot(self) -> IssuerSnapshot:
        """Снапшот ledger + supply в текущей версии схемы."""
        ledger = self.machine.ledger
        supply = self.machine.supply
        snapshot = IssuerSnapshot(
            schema_version=CURRENT_SNAPSHOT_VERSION,
            variant=self.variant.key,
            collateral_decimals=self.variant.collateral_decimals,
            owner=self.owner,
            paused=self.paused,
            reserves=ledger.balance(),
            total_deposited=ledger.total_deposited,
            total_withdrawn=ledger.total_withdrawn,
            total_supply=supply.total_supply,
            balances=supply.holders(),
            allowances=supply.allowances(),
        )
        if self.settings.validate_records:
            validate_issuer_snapshot(snapshot.model_dump(mode="json"))
        return snapshot

    @classmethod
    def from_snapshot(
        cls,
        snapshot: IssuerSnapshot,
        collateral: CollateralAsset,
        address: str,
        settings: Optional[IssuerSettings] = None,
    ) -> "CollateralizedIssuer":
        """
        Восстановление эмитента из снапшота текущей версии.

        Raises:
            KeyError: Если вариант снапшота неизвестен
            ValueError: Если точность снапшота не совпадает с вариантом
        """
        variant = get_variant(snapshot.variant)
        if snapshot.collateral_decimals != variant.collateral_decimals:
            raise ValueError(
                f"Snapshot collateral decimals {snapshot.collateral_decimals} do not match "
                f"variant {variant.key} ({variant.collateral_decimals})"
            )

        ledger = ReserveLedger(
            reserves=snapshot.reserves,
            total_deposited=snapshot.total_deposited,
            total_withdrawn=snapshot.total_withdrawn,
        )
        supply = FungibleSupply.from_balances(
            snapshot.balances,
            snapshot.allowances,
            symbol=variant.symbol,
            decimals=ISSUED_DECIMALS,
        )
        return cls(
            variant=variant,
            collateral=collateral,
            owner=snapshot.owner,
            address=address,
            settings=settings,
            gate=AccessGate(snapshot.owner, paused=snapshot.paused),
            ledger=ledger,
            supply=supply,
        )


def create_issuer(
    variant: IssuerVariant | str,
    collateral: CollateralAsset,
    owner: str,
    address: str,
    settings: Optional[IssuerSettings] = None,
) -> CollateralizedIssuer:
    """Эмитент с пустыми ledger/supply (начальное состояние системы)."""
    if isinstance(variant, str):
        variant = get_variant(variant)
    return CollateralizedIssuer(variant, collateral, owner, address, settings=settings)
