"""
ConversionEngine — Конверсия collateral ↔ issued

Чистые функции без состояния поверх IssuerVariant:

    issued     = floor(collateral * scale * numerator / denominator)
    collateral = floor(issued * denominator / (numerator * scale))
    net        = amount - floor(amount * fee_rate / fee_denominator)

Округление всегда floor: эмитент не может выпустить или выплатить больше,
чем обеспечено. Потерянные на округлении единицы остаются в резервах как
surplus (см. src/health/monitor.py).

Нулевой результат возвращается как 0; вызывающий код обязан трактовать
его как AmountTooSmall, а не как валидную нулевую операцию.
"""

from typing import NamedTuple

from src.core.domain.variants import IssuerVariant
from src.core.math.fixed_point import mul_div_floor, validate_amount


class CollateralQuote(NamedTuple):
    """Котировка redeem: gross из резервов и net после комиссии актива."""

    nominal: int
    net: int


class ConversionEngine:
    """
    Конверсия по неизменяемому курсу варианта.

    Для 18-decimal collateral scale == 1 и формула вырождается
    в floor(amount * numerator / denominator).
    """

    def __init__(self, variant: IssuerVariant):
        self.variant = variant
        self._numerator = variant.rate.numerator
        self._denominator = variant.rate.denominator
        self._scale = variant.decimal_scale
        self._fee_model = variant.fee_model

    @property
    def scale(self) -> int:
        return self._scale

    @property
    def fee_bearing(self) -> bool:
        return self.variant.fee_bearing

    # -------------------------------------------------------------------------
    # Курс
    # -------------------------------------------------------------------------

    def issued_from_collateral(self, amount: int) -> int:
        """
        Collateral units → issued units (floor).

        Args:
            amount: Сумма collateral (base units, >= 0)

        Returns:
            Сумма issued (18 decimals); 0 для слишком малых входов
        """
        validate_amount(amount)
        return mul_div_floor(amount * self._scale, self._numerator, self._denominator)

    def collateral_from_issued(self, amount: int) -> int:
        """
        Issued units → collateral units (floor), обратная к issued_from_collateral.

        Args:
            amount: Сумма issued (18 decimals, >= 0)

        Returns:
            Сумма collateral (base units); 0 для слишком малых входов
        """
        validate_amount(amount)
        return mul_div_floor(amount, self._denominator, self._numerator * self._scale)

    # -------------------------------------------------------------------------
    # Комиссия collateral актива
    # -------------------------------------------------------------------------

    def asset_fee(self, amount: int) -> int:
        """Комиссия актива на transfer суммы amount (0 без fee model)."""
        validate_amount(amount)
        if self._fee_model is None:
            return 0
        return self._fee_model.fee_on(amount)

    def net_after_asset_fee(self, amount: int) -> int:
        """amount - floor(amount * f / F): сколько дойдёт до получателя."""
        return amount - self.asset_fee(amount)

    # -------------------------------------------------------------------------
    # Котировки (без состояния)
    # -------------------------------------------------------------------------

    def quote_issued(self, collateral_in: int) -> int:
        """
        Сколько issued будет выпущено за номинал collateral_in.

        Учитывает входящую комиссию актива: курс применяется к net.
        """
        return self.issued_from_collateral(self.net_after_asset_fee(collateral_in))

    def quote_collateral(self, issued_in: int) -> CollateralQuote:
        """
        Сколько collateral спишется из резервов и сколько получит вызывающий.
        """
        nominal = self.collateral_from_issued(issued_in)
        return CollateralQuote(nominal=nominal, net=self.net_after_asset_fee(nominal))
