"""
Тесты для миграций персистентного состояния

Покрытие:
- v1 → v2 (collateral_decimals, allowances, totals)
- Неизвестные версии
- Редоминация EURC (6) → EURe (18) без изменения issued балансов
- Восстановление эмитента из мигрированного снапшота
"""

import pytest

from src.core.domain.snapshot import CURRENT_SNAPSHOT_VERSION, IssuerSnapshot
from src.core.domain.units import to_base_units
from src.core.domain.variants import (
    EUR_VARIANT,
    EUR_VARIANT_V2,
    USD_VARIANT,
    ConversionRate,
    IssuerVariant,
)
from src.core.math.conversion import ConversionEngine
from src.issuance.collateral import InMemoryCollateralAsset
from src.issuance.errors import MigrationError
from src.issuance.issuer import CollateralizedIssuer, create_issuer
from src.issuance.migrations import migrate, redenominate_collateral

ISSUER = "0xissuer"
OWNER = "0xowner"
ALICE = "0xalice"


@pytest.fixture
def v1_snapshot():
    """Снапшот EUR эмитента в формате v1: 100 EURC → 195.583 NBGN."""
    return {
        "schema_version": "1",
        "variant": "eur",
        "owner": OWNER,
        "paused": False,
        "reserves": 100_000_000,
        "total_supply": to_base_units("195.583", 18),
        "balances": {ALICE: to_base_units("195.583", 18)},
    }


@pytest.fixture
def eur_snapshot(v1_snapshot):
    return migrate(v1_snapshot)


class TestMigrate:
    def test_v1_to_v2(self, v1_snapshot):
        snapshot = migrate(v1_snapshot)

        assert snapshot.schema_version == CURRENT_SNAPSHOT_VERSION
        assert snapshot.collateral_decimals == 6
        assert snapshot.allowances == {}
        assert snapshot.total_deposited == 100_000_000
        assert snapshot.total_withdrawn == 0

    def test_missing_version_treated_as_v1(self, v1_snapshot):
        del v1_snapshot["schema_version"]
        assert migrate(v1_snapshot).schema_version == "2"

    def test_existing_totals_preserved(self, v1_snapshot):
        v1_snapshot["total_withdrawn"] = 5
        snapshot = migrate(v1_snapshot)
        assert snapshot.total_deposited == 100_000_005
        assert snapshot.total_withdrawn == 5

    def test_current_version_passes_through(self, eur_snapshot):
        again = migrate(eur_snapshot.model_dump(mode="json"))
        assert again == eur_snapshot

    def test_input_not_mutated(self, v1_snapshot):
        migrate(v1_snapshot)
        assert "collateral_decimals" not in v1_snapshot

    def test_unknown_version(self, v1_snapshot):
        v1_snapshot["schema_version"] = "9"
        with pytest.raises(MigrationError, match="Unknown snapshot schema version"):
            migrate(v1_snapshot)

    def test_unknown_variant(self, v1_snapshot):
        v1_snapshot["variant"] = "chf"
        with pytest.raises(MigrationError):
            migrate(v1_snapshot)

    def test_inconsistent_supply(self, v1_snapshot):
        v1_snapshot["total_supply"] += 1
        with pytest.raises(MigrationError, match="invalid"):
            migrate(v1_snapshot)

    def test_migration_logged(self, v1_snapshot, caplog):
        with caplog.at_level("WARNING", logger="src.issuance.migrations"):
            migrate(v1_snapshot)
        assert "v1 -> v2" in caplog.text


class TestRedenominate:
    def test_eurc_to_eure(self, eur_snapshot):
        upgraded = redenominate_collateral(eur_snapshot, EUR_VARIANT_V2)

        assert upgraded.variant == "eur-v2"
        assert upgraded.collateral_decimals == 18
        assert upgraded.reserves == to_base_units("100", 18)
        assert upgraded.total_deposited == to_base_units("100", 18)
        assert upgraded.balances == eur_snapshot.balances
        assert upgraded.total_supply == eur_snapshot.total_supply

    def test_backing_preserved(self, eur_snapshot):
        """Резервы в issued terms до и после миграции совпадают"""
        upgraded = redenominate_collateral(eur_snapshot, EUR_VARIANT_V2)
        before = ConversionEngine(EUR_VARIANT).issued_from_collateral(eur_snapshot.reserves)
        after = ConversionEngine(EUR_VARIANT_V2).issued_from_collateral(upgraded.reserves)
        assert before == after == eur_snapshot.total_supply

    def test_lowering_precision_rejected(self, eur_snapshot):
        upgraded = redenominate_collateral(eur_snapshot, EUR_VARIANT_V2)
        with pytest.raises(MigrationError, match="lower collateral precision"):
            redenominate_collateral(upgraded, EUR_VARIANT)

    def test_non_upgradeable_variant(self):
        snapshot = IssuerSnapshot(
            schema_version="2",
            variant="usd",
            collateral_decimals=6,
            owner=OWNER,
            reserves=0,
            total_supply=0,
        )
        with pytest.raises(MigrationError, match="not upgradeable"):
            redenominate_collateral(snapshot, EUR_VARIANT_V2)

    def test_rate_must_match(self, eur_snapshot):
        repegged = IssuerVariant(
            key="eur-repeg",
            name="New Bulgarian Lev",
            symbol="NBGN",
            collateral_symbol="EURe",
            collateral_decimals=18,
            rate=ConversionRate(2, 1),
            upgradeable=True,
        )
        with pytest.raises(MigrationError, match="keep symbol and rate"):
            redenominate_collateral(eur_snapshot, repegged)

    def test_restore_after_upgrade(self, eur_snapshot):
        """Эмитент на EURe продолжает обслуживать redeem старых держателей"""
        upgraded = redenominate_collateral(eur_snapshot, EUR_VARIANT_V2)
        eure = InMemoryCollateralAsset("EURe", 18)
        eure.mint(ISSUER, upgraded.reserves)

        issuer = CollateralizedIssuer.from_snapshot(upgraded, eure, ISSUER)
        collateral_out = issuer.redeem(ALICE, to_base_units("195.583", 18))

        assert collateral_out == to_base_units("100", 18)
        assert eure.balance_of(ALICE) == to_base_units("100", 18)
        assert issuer.total_reserves == 0


class TestRoundTrip:
    def test_live_issuer_snapshot_survives_migrate(self):
        asset = InMemoryCollateralAsset("USDC", 6)
        asset.mint(ALICE, 60_000_000)
        asset.approve(ALICE, ISSUER, 60_000_000)
        issuer = create_issuer(USD_VARIANT, asset, OWNER, ISSUER)
        issuer.mint(ALICE, 60_000_000)

        snapshot = issuer.snapshot()
        assert migrate(snapshot.model_dump(mode="json")) == snapshot
