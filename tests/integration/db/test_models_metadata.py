from __future__ import annotations

from app.models import Base
import app.models  # noqa: F401


def test_model_metadata_contains_target_tables():
    expected = {
        "users",
        "clients",
        "suppliers",
        "authorized_signers",
        "contracts",
        "supplements",
        "documents",
        "notifications",
        "notification_settings",
        "audit_logs",
    }
    assert expected == set(Base.metadata.tables.keys())


def test_history_tables_do_not_reference_contracts():
    for table_name in ("notifications", "audit_logs"):
        assert not Base.metadata.tables[table_name].foreign_keys


def test_supplement_contract_fk_restricts_delete():
    (fk,) = [fk for fk in Base.metadata.tables["supplements"].foreign_keys if fk.column.table.name == "contracts"]
    assert fk.ondelete == "RESTRICT"
