"""
Issuance Errors — Таксономия отказов эмитента

Каждый отказ жёсткий: операция откатывается целиком, повторов внутри
нет. Повтор (например, с другой суммой) выполняет вызывающий.

Ошибки программиста (отрицательные суммы, неверная точность) остаются
ValueError, как и во всём core.
"""


# =============================================================================
# EXCEPTIONS
# =============================================================================


class IssuanceError(Exception):
    """Базовый отказ операции эмитента. code: стабильный идентификатор."""

    code = "issuance_error"


class InvalidAmount(IssuanceError):
    """Нулевая сумма на входе."""

    code = "invalid_amount"


class AmountTooSmall(IssuanceError):
    """Сумма округляется в ноль на выходе конверсии."""

    code = "amount_too_small"


class InsufficientBalance(IssuanceError):
    """Недостаточный баланс issued (или collateral) у отправителя."""

    code = "insufficient_balance"


class InsufficientAllowance(IssuanceError):
    """Allowance меньше запрошенной суммы transfer_from."""

    code = "insufficient_allowance"


class InsufficientReserves(IssuanceError):
    """ReserveLedger не покрывает списание."""

    code = "insufficient_reserves"


class Paused(IssuanceError):
    """Операция заблокирована паузой."""

    code = "paused"


class NotPaused(IssuanceError):
    """unpause при активном состоянии."""

    code = "not_paused"


class Unauthorized(IssuanceError):
    """Не-owner вызвал owner-only операцию."""

    code = "unauthorized"


class ZeroAddress(IssuanceError):
    """Пустой адрес / отсутствующий актив."""

    code = "zero_address"


class InvalidTarget(IssuanceError):
    """Недопустимая цель rescue операции."""

    code = "invalid_target"


class MigrationError(IssuanceError):
    """Снапшот не может быть мигрирован."""

    code = "migration_error"
