"""Настройки эмитента.

Frozen dataclass, как и остальные конфигурации компонентов.
"""

from dataclasses import dataclass, fields
from typing import Any, Mapping


@dataclass(frozen=True)
class IssuerSettings:
    """Конфигурация поведения эмитента.

    - burn_requires_active: burn блокируется паузой, как mint/redeem
    - allow_collateral_rescue: emergency_withdraw может выводить collateral
      эмитента (по умолчанию разрешено, сопровождается WARNING)
    - validate_records: проверять каждую запись журнала JSON Schema контрактом
    """

    burn_requires_active: bool = True
    allow_collateral_rescue: bool = True
    validate_records: bool = True


def settings_from_mapping(data: Mapping[str, Any]) -> IssuerSettings:
    """
    Построение IssuerSettings из dict (например, из загруженного TOML/JSON).

    Raises:
        ValueError: При неизвестных ключах или не-bool значениях
    """
    known = {f.name for f in fields(IssuerSettings)}
    unknown = set(data) - known
    if unknown:
        raise ValueError(f"Unknown issuer settings: {sorted(unknown)}")

    for key, value in data.items():
        if not isinstance(value, bool):
            raise ValueError(f"Setting {key!r} must be bool, got {value!r}")

    return IssuerSettings(**data)
