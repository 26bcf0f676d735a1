"""Тесты для IssuerSettings."""

from dataclasses import FrozenInstanceError

import pytest

from src.issuance.settings import IssuerSettings, settings_from_mapping


class TestIssuerSettings:
    def test_defaults(self) -> None:
        settings = IssuerSettings()
        assert settings.burn_requires_active
        assert settings.allow_collateral_rescue
        assert settings.validate_records

    def test_frozen(self) -> None:
        with pytest.raises(FrozenInstanceError):
            IssuerSettings().burn_requires_active = False


class TestSettingsFromMapping:
    def test_partial_mapping(self) -> None:
        settings = settings_from_mapping({"allow_collateral_rescue": False})
        assert not settings.allow_collateral_rescue
        assert settings.burn_requires_active

    def test_empty_mapping(self) -> None:
        assert settings_from_mapping({}) == IssuerSettings()

    def test_unknown_key(self) -> None:
        with pytest.raises(ValueError, match="Unknown issuer settings"):
            settings_from_mapping({"max_supply": 10})

    def test_non_bool_value(self) -> None:
        with pytest.raises(ValueError, match="must be bool"):
            settings_from_mapping({"burn_requires_active": "yes"})
