"""
Tests for JSON Schema Contract Validators

Комплексное тестирование JSON Schema валидаторов:
- Валидность самих схем
- Валидация правильных записей журнала и снапшотов
- Детекция нарушений required полей
- Детекция нарушений типов и constraints
- Интеграция с Pydantic моделями
"""

import json

import pytest
from jsonschema import ValidationError

from src.core.contracts import (
    EVENT_SCHEMAS,
    EmergencyWithdrawalValidator,
    IssuerSnapshotValidator,
    MintedValidator,
    RedeemedValidator,
    SchemaLoader,
    TokensBurnedValidator,
    validate_event_record,
    validate_issuer_snapshot,
    validate_minted,
    validate_redeemed,
    validate_tokens_burned,
)
from src.core.domain import EmergencyWithdrawal, IssuerSnapshot, Minted, Redeemed, TokensBurned


# =============================================================================
# FIXTURES - VALID DATA SAMPLES
# =============================================================================


@pytest.fixture
def valid_minted():
    """Валидная запись Minted (1 PAXG → 5598.88 GBGN)."""
    return {
        "event": "Minted",
        "seq": 0,
        "caller": "0xalice",
        "amount_in": 10**18,
        "issued_amount": 5598_880_000_000_000_000_000,
        "net_received": 999_800_000_000_000_000,
    }


@pytest.fixture
def valid_redeemed():
    return {
        "event": "Redeemed",
        "seq": 1,
        "caller": "0xalice",
        "issued_amount_in": 5598_880_000_000_000_000_000,
        "collateral_out": 999_800_000_000_000_000,
        "collateral_delivered": 999_600_040_000_000_000,
    }


@pytest.fixture
def valid_snapshot():
    return {
        "schema_version": "2",
        "variant": "usd",
        "collateral_decimals": 6,
        "owner": "0xowner",
        "paused": False,
        "reserves": 60_000_000,
        "total_deposited": 60_000_000,
        "total_withdrawn": 0,
        "total_supply": 100 * 10**18,
        "balances": {"0xalice": 100 * 10**18},
        "allowances": {},
    }


# =============================================================================
# SCHEMA LOADER
# =============================================================================


class TestSchemaLoader:
    def test_all_schemas_load(self):
        loader = SchemaLoader()
        for name in [*EVENT_SCHEMAS.values(), "issuer_snapshot"]:
            schema = loader.load_schema(name)
            assert schema["$schema"] == "https://json-schema.org/draft/2020-12/schema"

    def test_schema_cached(self):
        loader = SchemaLoader()
        assert loader.load_schema("minted") is loader.load_schema("minted")

    def test_missing_schema(self):
        with pytest.raises(FileNotFoundError):
            SchemaLoader().load_schema("upgrade_authorization")

    def test_missing_directory(self, tmp_path):
        with pytest.raises(RuntimeError, match="Schema directory not found"):
            SchemaLoader(tmp_path / "absent")

    def test_invalid_schema_rejected(self, tmp_path):
        (tmp_path / "broken.json").write_text(json.dumps({"type": 12}), encoding="utf-8")
        with pytest.raises(ValueError, match="Invalid JSON Schema"):
            SchemaLoader(tmp_path).load_schema("broken")


# =============================================================================
# EVENT RECORDS
# =============================================================================


class TestMintedContract:
    def test_valid(self, valid_minted):
        validate_minted(valid_minted)
        assert MintedValidator().is_valid(valid_minted)

    def test_missing_field(self, valid_minted):
        del valid_minted["net_received"]
        with pytest.raises(ValidationError, match="net_received"):
            validate_minted(valid_minted)

    def test_zero_issued_rejected(self, valid_minted):
        valid_minted["issued_amount"] = 0
        with pytest.raises(ValidationError):
            validate_minted(valid_minted)

    def test_string_amount_rejected(self, valid_minted):
        valid_minted["amount_in"] = "1000000000000000000"
        assert not MintedValidator().is_valid(valid_minted)

    def test_extra_field_rejected(self, valid_minted):
        valid_minted["price"] = 1
        with pytest.raises(ValidationError):
            validate_minted(valid_minted)


class TestRedeemedContract:
    def test_valid(self, valid_redeemed):
        validate_redeemed(valid_redeemed)
        assert RedeemedValidator().is_valid(valid_redeemed)

    def test_delivered_may_be_zero(self, valid_redeemed):
        valid_redeemed["collateral_delivered"] = 0
        validate_redeemed(valid_redeemed)

    def test_wrong_event_name(self, valid_redeemed):
        valid_redeemed["event"] = "Minted"
        with pytest.raises(ValidationError):
            validate_redeemed(valid_redeemed)


class TestOtherRecords:
    def test_tokens_burned(self):
        validate_tokens_burned({"event": "TokensBurned", "seq": 3, "caller": "0xalice", "amount": 1})

    def test_emergency_withdrawal_requires_flag(self):
        record = {
            "event": "EmergencyWithdrawal",
            "seq": 0,
            "caller": "0xowner",
            "asset_symbol": "DAI",
            "amount": 1,
        }
        errors = list(EmergencyWithdrawalValidator().iter_errors(record))
        assert len(errors) == 1
        assert "is_collateral" in errors[0].message

    def test_dispatch_by_event(self, valid_minted, valid_redeemed):
        validate_event_record(valid_minted)
        validate_event_record(valid_redeemed)

    def test_dispatch_unknown_event(self):
        with pytest.raises(KeyError, match="Unknown event type"):
            validate_event_record({"event": "Upgraded"})


# =============================================================================
# SNAPSHOT
# =============================================================================


class TestSnapshotContract:
    def test_valid(self, valid_snapshot):
        validate_issuer_snapshot(valid_snapshot)
        assert IssuerSnapshotValidator().is_valid(valid_snapshot)

    def test_v1_snapshot_rejected(self, valid_snapshot):
        """Снапшот v1 должен пройти migrate() до валидации"""
        valid_snapshot["schema_version"] = "1"
        del valid_snapshot["collateral_decimals"]
        del valid_snapshot["allowances"]
        errors = list(IssuerSnapshotValidator().iter_errors(valid_snapshot))
        assert len(errors) == 3

    def test_negative_balance(self, valid_snapshot):
        valid_snapshot["balances"]["0xbob"] = -1
        with pytest.raises(ValidationError):
            validate_issuer_snapshot(valid_snapshot)

    def test_decimals_out_of_range(self, valid_snapshot):
        valid_snapshot["collateral_decimals"] = 19
        with pytest.raises(ValidationError):
            validate_issuer_snapshot(valid_snapshot)


# =============================================================================
# PYDANTIC INTEGRATION
# =============================================================================


class TestPydanticIntegration:
    """model_dump(mode="json") каждой модели проходит свой контракт"""

    def test_minted_model(self):
        record = Minted(seq=0, caller="0xalice", amount_in=1, issued_amount=5600, net_received=1)
        MintedValidator().validate(record.model_dump(mode="json"))

    def test_redeemed_model(self):
        record = Redeemed(
            seq=0, caller="0xalice", issued_amount_in=5600, collateral_out=1, collateral_delivered=1
        )
        RedeemedValidator().validate(record.model_dump(mode="json"))

    def test_burned_model(self):
        record = TokensBurned(seq=0, caller="0xalice", amount=1)
        TokensBurnedValidator().validate(record.model_dump(mode="json"))

    def test_emergency_model(self):
        record = EmergencyWithdrawal(
            seq=0, caller="0xowner", asset_symbol="EURC", amount=1, is_collateral=True
        )
        EmergencyWithdrawalValidator().validate(record.model_dump(mode="json"))

    def test_snapshot_model(self, valid_snapshot):
        snapshot = IssuerSnapshot.model_validate(valid_snapshot)
        IssuerSnapshotValidator().validate(snapshot.model_dump(mode="json"))

    def test_snapshot_model_checks_supply(self, valid_snapshot):
        """Pydantic модель проверяет инвариант, который JSON Schema выразить не может"""
        valid_snapshot["total_supply"] += 1
        validate_issuer_snapshot(valid_snapshot)
        with pytest.raises(ValueError, match="total_supply"):
            IssuerSnapshot.model_validate(valid_snapshot)

    def test_snapshot_model_checks_reserves(self, valid_snapshot):
        valid_snapshot["total_withdrawn"] = 1
        with pytest.raises(ValueError, match="reserves"):
            IssuerSnapshot.model_validate(valid_snapshot)
