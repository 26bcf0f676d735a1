"""
TokenUnits — Централизованный модуль конверсии единиц токенов

Единственный допустимый способ преобразований между:
- base units (целые, минимальные единицы актива)
- human amounts (Decimal, для отображения и ввода)
- 18-decimal шкалой выпускаемого токена

ЗАПРЕЩЕНО смешивать collateral units и issued units без явного конвертера.
Float на входе не принимается: все суммы int или Decimal.
"""

from decimal import ROUND_DOWN, Decimal, InvalidOperation, localcontext
from typing import Final


# =============================================================================
# КОНСТАНТЫ ТОЧНОСТИ
# =============================================================================

# Точность выпускаемого токена (фиксированная)
ISSUED_DECIMALS: Final[int] = 18

# Fixed-point 1.0 (используется для reserve ratio)
WAD: Final[int] = 10**ISSUED_DECIMALS

# Максимальная поддерживаемая точность collateral
MAX_COLLATERAL_DECIMALS: Final[int] = ISSUED_DECIMALS


# =============================================================================
# ШКАЛА
# =============================================================================


def decimal_scale(collateral_decimals: int) -> int:
    """
    DecimalScale: 10^(18 - Dc).

    Переводит collateral units в 18-decimal термины до применения курса.
    Для 18-decimal collateral возвращает 1 (no-op).

    Args:
        collateral_decimals: Точность collateral актива (Dc)

    Returns:
        Множитель шкалы (int >= 1)

    Raises:
        ValueError: Если Dc отрицательный или больше 18
    """
    if isinstance(collateral_decimals, bool) or not isinstance(collateral_decimals, int):
        raise ValueError(f"decimals must be int, got {collateral_decimals!r}")

    if collateral_decimals < 0 or collateral_decimals > MAX_COLLATERAL_DECIMALS:
        raise ValueError(
            f"collateral decimals must be in [0, {MAX_COLLATERAL_DECIMALS}], "
            f"got {collateral_decimals}"
        )

    return 10 ** (ISSUED_DECIMALS - collateral_decimals)


# =============================================================================
# КОНВЕРТЕРЫ BASE UNITS ↔ HUMAN AMOUNTS
# =============================================================================


def to_base_units(value: int | str | Decimal, decimals: int) -> int:
    """
    Конверсия: human amount → base units.

    Лишняя точность отбрасывается (округление к нулю), как при
    parseUnits с последующим floor.

    Args:
        value: Сумма ("1.5", Decimal("0.9998"), 100)
        decimals: Точность актива

    Returns:
        Сумма в base units

    Raises:
        ValueError: Для float, NaN/Inf, отрицательных и нечисловых значений

    Examples:
        >>> to_base_units("60", 6)
        60000000
        >>> to_base_units("0.9998", 18)
        999800000000000000
    """
    if isinstance(value, float):
        raise ValueError("float amounts are not accepted, use str or Decimal")
    if isinstance(value, bool):
        raise ValueError(f"invalid amount: {value!r}")
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    try:
        amount = Decimal(value)
    except (InvalidOperation, TypeError) as e:
        raise ValueError(f"invalid amount: {value!r}") from e

    if not amount.is_finite():
        raise ValueError(f"amount must be finite, got {value!r}")
    if amount < 0:
        raise ValueError(f"amount cannot be negative: {value!r}")

    # Точность контекста Decimal (28) недостаточна для 18-decimal сумм
    with localcontext() as ctx:
        ctx.prec = 96
        scaled = amount.scaleb(decimals).to_integral_value(rounding=ROUND_DOWN)
    return int(scaled)


def from_base_units(amount: int, decimals: int) -> Decimal:
    """
    Конверсия: base units → human amount (точная).

    Args:
        amount: Сумма в base units
        decimals: Точность актива

    Returns:
        Decimal без потери точности
    """
    if decimals < 0:
        raise ValueError(f"decimals must be non-negative, got {decimals}")

    with localcontext() as ctx:
        ctx.prec = 96
        return Decimal(amount).scaleb(-decimals)


def format_amount(amount: int, decimals: int, symbol: str = "") -> str:
    """Форматирование суммы для логов ("195.583 NBGN")."""
    with localcontext() as ctx:
        ctx.prec = 96
        text = format(from_base_units(amount, decimals).normalize(), "f")
    return f"{text} {symbol}".rstrip()
