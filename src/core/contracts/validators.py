"""
JSON Schema Contract Validators

Модуль для валидации записей журнала эмитента и персистентных снапшотов
согласно формальным JSON Schema контрактам.
Использует библиотеку jsonschema для проверки соответствия данных схемам.

Схемы:
- minted.json
- redeemed.json
- tokens_burned.json
- emergency_withdrawal.json
- issuer_snapshot.json
"""

import json
from pathlib import Path
from typing import Any, Dict, Iterator

import jsonschema
from jsonschema import Draft202012Validator, ValidationError


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class SchemaLoader:
    """
    Загрузчик JSON Schema файлов.

    Автоматически находит схемы в contracts/schema/ относительно корня проекта.
    """

    def __init__(self, schema_dir: Path | None = None):
        # Корень проекта: 4 уровня вверх от этого файла
        self._schema_dir = schema_dir or (
            Path(__file__).parent.parent.parent.parent / "contracts" / "schema"
        )
        if not self._schema_dir.exists():
            raise RuntimeError(f"Schema directory not found: {self._schema_dir}")

        # Кэш загруженных схем
        self._schemas: Dict[str, Dict[str, Any]] = {}

    def load_schema(self, schema_name: str) -> Dict[str, Any]:
        """
        Загрузка JSON Schema файла.

        Args:
            schema_name: Имя схемы без расширения (например, 'minted')

        Returns:
            Загруженная схема как dict

        Raises:
            FileNotFoundError: Если файл схемы не найден
            ValueError: Если схема не проходит meta-validation
        """
        if schema_name in self._schemas:
            return self._schemas[schema_name]

        schema_path = self._schema_dir / f"{schema_name}.json"
        if not schema_path.exists():
            raise FileNotFoundError(f"Schema not found: {schema_path}")

        with open(schema_path, "r", encoding="utf-8") as f:
            schema = json.load(f)

        # Валидируем саму схему (meta-validation)
        try:
            Draft202012Validator.check_schema(schema)
        except jsonschema.SchemaError as e:
            raise ValueError(f"Invalid JSON Schema in {schema_name}.json: {e}") from e

        self._schemas[schema_name] = schema
        return schema


# Глобальный экземпляр загрузчика
_SCHEMA_LOADER = SchemaLoader()


# =============================================================================
# CONTRACT VALIDATORS
# =============================================================================


class ContractValidator:
    """
    Базовый класс для валидаторов контрактов.

    Инкапсулирует логику валидации данных против JSON Schema.
    """

    def __init__(self, schema_name: str):
        self.schema_name = schema_name
        self.schema = _SCHEMA_LOADER.load_schema(schema_name)
        self.validator = Draft202012Validator(self.schema)

    def validate(self, data: Dict[str, Any]) -> None:
        """
        Валидация данных против схемы.

        Raises:
            ValidationError: Если данные не соответствуют схеме
        """
        self.validator.validate(data)

    def is_valid(self, data: Dict[str, Any]) -> bool:
        return self.validator.is_valid(data)

    def iter_errors(self, data: Dict[str, Any]) -> Iterator[ValidationError]:
        return self.validator.iter_errors(data)


class MintedValidator(ContractValidator):
    def __init__(self):
        super().__init__("minted")


class RedeemedValidator(ContractValidator):
    def __init__(self):
        super().__init__("redeemed")


class TokensBurnedValidator(ContractValidator):
    def __init__(self):
        super().__init__("tokens_burned")


class EmergencyWithdrawalValidator(ContractValidator):
    def __init__(self):
        super().__init__("emergency_withdrawal")


class IssuerSnapshotValidator(ContractValidator):
    """Валидатор персистентного снапшота (текущая версия схемы)."""

    def __init__(self):
        super().__init__("issuer_snapshot")


# Событие → имя схемы
EVENT_SCHEMAS: Dict[str, str] = {
    "Minted": "minted",
    "Redeemed": "redeemed",
    "TokensBurned": "tokens_burned",
    "EmergencyWithdrawal": "emergency_withdrawal",
}

_EVENT_VALIDATORS: Dict[str, ContractValidator] = {}


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================


def validate_event_record(data: Dict[str, Any]) -> None:
    """
    Валидация записи журнала по её полю "event".

    Raises:
        ValidationError: Если запись не соответствует схеме
        KeyError: Если тип события неизвестен
    """
    event = data.get("event")
    if event not in EVENT_SCHEMAS:
        raise KeyError(f"Unknown event type: {event!r}")

    validator = _EVENT_VALIDATORS.get(event)
    if validator is None:
        validator = ContractValidator(EVENT_SCHEMAS[event])
        _EVENT_VALIDATORS[event] = validator
    validator.validate(data)


def validate_minted(data: Dict[str, Any]) -> None:
    MintedValidator().validate(data)


def validate_redeemed(data: Dict[str, Any]) -> None:
    RedeemedValidator().validate(data)


def validate_tokens_burned(data: Dict[str, Any]) -> None:
    TokensBurnedValidator().validate(data)


def validate_issuer_snapshot(data: Dict[str, Any]) -> None:
    """
    Валидация снапшота эмитента.

    Raises:
        ValidationError: Если данные не соответствуют схеме
    """
    IssuerSnapshotValidator().validate(data)
