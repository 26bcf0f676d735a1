"""Migrations — версионная миграция персистентного состояния эмитента.

Вместо подмены кода (upgrade proxy) состояние ledger'а мигрирует явно:

- migrate(data): raw dict снапшота любой известной версии → IssuerSnapshot
  текущей версии. Шаги применяются последовательно (1 → 2 → ...).
- redenominate_collateral(snapshot, variant): перевод резервов в новую
  точность collateral (EURC, 6 decimals → EURe, 18 decimals) без
  изменения issued балансов. Курс обязан совпадать.

Каждый шаг пишется в лог с уровнем WARNING.
"""

import logging
from typing import Any, Callable, Dict

import jsonschema
from pydantic import ValidationError

from src.core.contracts import validate_issuer_snapshot
from src.core.domain.snapshot import CURRENT_SNAPSHOT_VERSION, IssuerSnapshot
from src.core.domain.variants import IssuerVariant, get_variant
from src.issuance.errors import MigrationError

logger = logging.getLogger(__name__)

MigrationStep = Callable[[Dict[str, Any]], Dict[str, Any]]


# =============================================================================
# ШАГИ МИГРАЦИИ
# =============================================================================


def _v1_to_v2(data: Dict[str, Any]) -> Dict[str, Any]:
    """
    v1 → v2:
    - collateral_decimals берётся из реестра вариантов
    - allowances (в v1 не сохранялись): пустые
    - total_deposited/total_withdrawn: при отсутствии reserves / 0
    """
    try:
        variant = get_variant(data["variant"])
    except KeyError as e:
        raise MigrationError(f"Cannot migrate snapshot: {e}") from e

    migrated = dict(data)
    migrated["schema_version"] = "2"
    migrated.setdefault("collateral_decimals", variant.collateral_decimals)
    migrated.setdefault("allowances", {})
    migrated.setdefault("paused", False)
    if "total_deposited" not in migrated:
        migrated["total_deposited"] = migrated.get("reserves", 0) + migrated.get("total_withdrawn", 0)
    migrated.setdefault("total_withdrawn", 0)
    return migrated


MIGRATIONS: Dict[str, tuple[str, MigrationStep]] = {
    "1": ("2", _v1_to_v2),
}


# =============================================================================
# API
# =============================================================================


def migrate(data: Dict[str, Any]) -> IssuerSnapshot:
    """
    Миграция raw снапшота до текущей версии схемы.

    Raises:
        MigrationError: Неизвестная версия или невалидный результат
    """
    current = dict(data)
    version = str(current.get("schema_version", "1"))

    while version != CURRENT_SNAPSHOT_VERSION:
        if version not in MIGRATIONS:
            raise MigrationError(f"Unknown snapshot schema version: {version!r}")

        target, step = MIGRATIONS[version]
        logger.warning("Migrating issuer snapshot %s: v%s -> v%s", current.get("variant"), version, target)
        current = step(current)
        version = target

    try:
        validate_issuer_snapshot(current)
        return IssuerSnapshot.model_validate(current)
    except (jsonschema.ValidationError, ValidationError) as e:
        raise MigrationError(f"Migrated snapshot is invalid: {e}") from e


def redenominate_collateral(snapshot: IssuerSnapshot, target: IssuerVariant) -> IssuerSnapshot:
    """
    Перевод резервов снапшота в точность collateral целевого варианта.

    Допускается только повышение точности (деление не выполняется, чтобы
    не терять резервы на округлении). Курс и symbol должны совпадать, и
    целевой вариант должен допускать upgrade.

    Examples:
        EUR_VARIANT (EURC, 6) → EUR_VARIANT_V2 (EURe, 18): reserves *= 10**12

    Raises:
        MigrationError: Несовместимые варианты или понижение точности
    """
    source = get_variant(snapshot.variant)

    if not (source.upgradeable and target.upgradeable):
        raise MigrationError(f"Variant {source.key} -> {target.key} is not upgradeable")
    if source.symbol != target.symbol or source.rate != target.rate:
        raise MigrationError(
            f"Redenomination must keep symbol and rate: "
            f"{source.symbol} {source.rate.as_tuple()} -> {target.symbol} {target.rate.as_tuple()}"
        )
    if target.collateral_decimals < snapshot.collateral_decimals:
        raise MigrationError(
            f"Cannot lower collateral precision {snapshot.collateral_decimals} -> "
            f"{target.collateral_decimals}"
        )

    factor = 10 ** (target.collateral_decimals - snapshot.collateral_decimals)
    logger.warning(
        "Redenominating %s reserves %s -> %s (x%d)",
        source.symbol,
        source.collateral_symbol,
        target.collateral_symbol,
        factor,
    )

    try:
        return IssuerSnapshot.model_validate(
            {
                **snapshot.model_dump(),
                "variant": target.key,
                "collateral_decimals": target.collateral_decimals,
                "reserves": snapshot.reserves * factor,
                "total_deposited": snapshot.total_deposited * factor,
                "total_withdrawn": snapshot.total_withdrawn * factor,
            }
        )
    except ValidationError as e:
        raise MigrationError(f"Redenominated snapshot is invalid: {e}") from e
