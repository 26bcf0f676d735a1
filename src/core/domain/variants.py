"""
IssuerVariant — Неизменяемые параметры выпуска

Каждый вариант задаёт только:
- ConversionRate (рациональный курс, фиксируется при создании)
- DecimalScale (через точность collateral)
- AssetFeeModel (опционально, комиссия самого collateral актива)

Курсы постоянны. Price discovery и рыночные курсы не поддерживаются.
"""

from dataclasses import dataclass
from types import MappingProxyType
from typing import Mapping, Optional

from src.core.domain.units import decimal_scale


# =============================================================================
# VALUE OBJECTS
# =============================================================================


@dataclass(frozen=True)
class ConversionRate:
    """
    Курс collateral → issued как рациональная пара.

    issued = collateral * scale * numerator / denominator
    """

    numerator: int
    denominator: int

    def __post_init__(self) -> None:
        for name in ("numerator", "denominator"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                raise ValueError(f"{name} must be int, got {value!r}")
            if value <= 0:
                raise ValueError(f"{name} must be positive, got {value}")

    def as_tuple(self) -> tuple[int, int]:
        return (self.numerator, self.denominator)


@dataclass(frozen=True)
class AssetFeeModel:
    """
    Пропорциональная комиссия collateral актива на каждый transfer.

    fee = floor(amount * rate / denominator). Не контролируется эмитентом.
    """

    rate: int
    denominator: int

    def __post_init__(self) -> None:
        if self.denominator <= 0:
            raise ValueError(f"fee denominator must be positive, got {self.denominator}")
        if self.rate < 0 or self.rate >= self.denominator:
            raise ValueError(
                f"fee rate must be in [0, {self.denominator}), got {self.rate}"
            )

    def fee_on(self, amount: int) -> int:
        return amount * self.rate // self.denominator


@dataclass(frozen=True)
class IssuerVariant:
    """Параметры одного эмитента (токен + collateral + курс)."""

    key: str
    name: str
    symbol: str
    collateral_symbol: str
    collateral_decimals: int
    rate: ConversionRate
    fee_model: Optional[AssetFeeModel] = None
    upgradeable: bool = False

    def __post_init__(self) -> None:
        # Валидация точности при создании, а не при первом расчёте
        decimal_scale(self.collateral_decimals)

    @property
    def decimal_scale(self) -> int:
        return decimal_scale(self.collateral_decimals)

    @property
    def fee_bearing(self) -> bool:
        return self.fee_model is not None and self.fee_model.rate > 0


# =============================================================================
# РЕЕСТР ВАРИАНТОВ
# =============================================================================

# EUR-peg: 1 EURC = 1.95583 NBGN
EUR_VARIANT = IssuerVariant(
    key="eur",
    name="New Bulgarian Lev",
    symbol="NBGN",
    collateral_symbol="EURC",
    collateral_decimals=6,
    rate=ConversionRate(numerator=195583, denominator=100000),
    upgradeable=True,
)

# Тот же EUR-peg после перехода на 18-decimal EURe (scale = 1)
EUR_VARIANT_V2 = IssuerVariant(
    key="eur-v2",
    name="New Bulgarian Lev",
    symbol="NBGN",
    collateral_symbol="EURe",
    collateral_decimals=18,
    rate=ConversionRate(numerator=195583, denominator=100000),
    upgradeable=True,
)

# USD-peg: 0.60 USDC за 1 DBGN (USDC_PER_DBGN = 0.6e18)
USD_VARIANT = IssuerVariant(
    key="usd",
    name="DBGN Token",
    symbol="DBGN",
    collateral_symbol="USDC",
    collateral_decimals=6,
    rate=ConversionRate(numerator=10**18, denominator=6 * 10**17),
)

# Gold-peg: 5600 GBGN за 1 PAXG, PAXG берёт 0.02% с каждого transfer
GOLD_VARIANT = IssuerVariant(
    key="gold",
    name="GBGN Token",
    symbol="GBGN",
    collateral_symbol="PAXG",
    collateral_decimals=18,
    rate=ConversionRate(numerator=5600, denominator=1),
    fee_model=AssetFeeModel(rate=20, denominator=100000),
)

VARIANTS: Mapping[str, IssuerVariant] = MappingProxyType(
    {
        variant.key: variant
        for variant in (EUR_VARIANT, EUR_VARIANT_V2, USD_VARIANT, GOLD_VARIANT)
    }
)


def get_variant(key: str) -> IssuerVariant:
    """
    Поиск варианта по ключу (регистр не важен).

    Raises:
        KeyError: Если вариант неизвестен
    """
    try:
        return VARIANTS[key.lower()]
    except KeyError:
        raise KeyError(
            f"Unknown issuer variant {key!r}, expected one of {sorted(VARIANTS)}"
        ) from None
