"""
Fixed-Point — Целочисленная арифметика с округлением вниз

Модуль обеспечивает детерминированную арифметику для base units:
- Умножение до деления (без ранней потери точности)
- Округление только floor (к нулю для неотрицательных)
- Безопасное деление с fallback при нулевом знаменателе
- Валидация целочисленных сумм

КРИТИЧЕСКИЕ ИНВАРИАНТЫ:
1. Промежуточные произведения не усекаются (int Python произвольной ширины)
2. Float никогда не участвует в расчётах сумм
3. Деление на ноль никогда не происходит (возвращается fallback)
4. Все операции детерминированы и воспроизводимы
"""

from typing import Final

from src.core.domain.units import WAD

# Fixed-point 1.0 для ratio
ONE_WAD: Final[int] = WAD


# =============================================================================
# ВАЛИДАЦИЯ
# =============================================================================


def validate_amount(value: int, name: str = "amount") -> int:
    """
    Проверка, что сумма является неотрицательным int.

    bool отклоняется явно (bool является подклассом int).

    Raises:
        ValueError: Для не-int и отрицательных значений
    """
    if isinstance(value, bool) or not isinstance(value, int):
        raise ValueError(f"{name} must be int, got {type(value).__name__}")

    if value < 0:
        raise ValueError(f"{name} must be non-negative, got {value}")

    return value


def validate_positive_int(value: int, name: str = "value") -> int:
    """Проверка, что значение строго положительный int."""
    validate_amount(value, name)
    if value == 0:
        raise ValueError(f"{name} must be positive, got 0")
    return value


# =============================================================================
# MUL-DIV
# =============================================================================


def mul_div_floor(a: int, b: int, denominator: int) -> int:
    """
    floor(a * b / denominator) без промежуточного усечения.

    Args:
        a: Первый множитель (>= 0)
        b: Второй множитель (>= 0)
        denominator: Делитель (> 0)

    Returns:
        Округлённый вниз результат

    Examples:
        >>> mul_div_floor(60_000_000 * 10**12, 10**18, 6 * 10**17)
        100000000000000000000
        >>> mul_div_floor(7, 1, 2)
        3
    """
    validate_amount(a, "a")
    validate_amount(b, "b")
    validate_positive_int(denominator, "denominator")

    return (a * b) // denominator


def ratio_wad(numerator: int, denominator: int, fallback: int = ONE_WAD) -> int:
    """
    Отношение numerator / denominator в WAD (floor).

    При denominator == 0 возвращает fallback (по умолчанию 1.0).

    Examples:
        >>> ratio_wad(2, 1)
        2000000000000000000
        >>> ratio_wad(0, 0)
        1000000000000000000
    """
    validate_amount(numerator, "numerator")
    validate_amount(denominator, "denominator")

    if denominator == 0:
        return fallback

    return numerator * ONE_WAD // denominator


def wad_to_str(value: int, places: int = 6) -> str:
    """Форматирование WAD значения для логов (2000000000000000000 → '2.000000')."""
    whole, frac = divmod(value, ONE_WAD)
    frac_digits = str(frac).rjust(18, "0")[:places]
    return f"{whole}.{frac_digits}" if places > 0 else str(whole)
