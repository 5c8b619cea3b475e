from __future__ import annotations

from datetime import date, datetime, timezone
from types import SimpleNamespace

import pytest

from app.core.exceptions import ValidationError
from app.services.report_service import (
    REPORT_BUILDERS,
    ReportFilters,
    build_report,
    classify_expiration,
    client_supplier_report,
    expiration_report,
    filter_contracts,
    financial_report,
    modifications_report,
    status_report,
    supplements_report,
    truncate_label,
)

NOW = datetime(2026, 3, 1, tzinfo=timezone.utc)


def _contract(
    contract_id,
    amount=1000,
    status="active",
    contract_type="service",
    client="Acme Corp",
    supplier="Globex Supplies",
    start=date(2026, 1, 10),
    end=date(2026, 12, 31),
):
    return SimpleNamespace(
        id=contract_id,
        contract_number=f"C-{contract_id:03d}",
        title=f"Contract {contract_id}",
        client_name=client,
        supplier_name=supplier,
        status=status,
        type=contract_type,
        start_date=start,
        end_date=end,
        amount=amount,
    )


def _supplement(supplement_id, contract_id, updated_at, status="draft", created_at=None):
    return SimpleNamespace(
        id=supplement_id,
        contract_id=contract_id,
        supplement_number=f"S-{supplement_id}",
        status=status,
        effective_date=date(2026, 2, 1),
        created_at=created_at or updated_at,
        updated_at=updated_at,
    )


def test_empty_inputs_produce_zeroed_reports():
    assert status_report([])["total"] == 0
    assert all(row["percentage"] == 0.0 for row in status_report([])["by_status"])

    financial = financial_report([])
    assert financial["average_value"] == 0.0
    assert financial["max_contract"] is None
    assert financial["by_type"] == []

    assert modifications_report([], [])["average_per_contract"] == 0.0
    assert expiration_report([], now=NOW)["expiring_soon"] == []


def test_status_percentages_sum_to_about_one_hundred():
    contracts = [_contract(1), _contract(2, status="pending"), _contract(3, status="expired")]
    report = status_report(contracts)
    total = sum(row["percentage"] for row in report["by_status"])
    assert abs(total - 100.0) < 0.5
    assert {row["status"]: row["count"] for row in report["by_status"]} == {
        "active": 1,
        "expired": 1,
        "pending": 1,
        "cancelled": 0,
    }


def test_client_totals_and_stable_ties():
    contracts = [
        _contract(1, amount=5000, client="Beta"),
        _contract(2, amount=5000, client="Beta"),
        _contract(3, amount=10000, client="Alpha"),
    ]
    report = client_supplier_report(contracts)

    beta = next(row for row in report["clients"] if row["name"] == "Beta")
    assert beta["count"] == 2
    assert beta["total_value"] == 10000
    assert beta["average_value"] == 5000
    assert [row["name"] for row in report["clients"]] == ["Beta", "Alpha"]
    assert report["total_value"] == 20000


def test_chart_labels_are_truncated():
    long_name = "International Business Partners"
    report = client_supplier_report([_contract(1, client=long_name)])
    assert report["client_chart"][0]["name"] == "International B..."
    assert report["clients"][0]["name"] == long_name
    assert truncate_label("short") == "short"


def test_chart_keeps_top_eight():
    contracts = [_contract(i, amount=i * 100, client=f"Client {i}") for i in range(1, 11)]
    report = client_supplier_report(contracts)
    assert len(report["client_chart"]) == 8
    assert report["client_chart"][0]["name"] == "Client 10"


@pytest.mark.parametrize(
    "days,bucket",
    [(-1, "expired"), (0, "critical"), (7, "critical"), (8, "warning"), (15, "warning"), (16, "attention"), (30, "attention"), (31, "safe"), (60, "safe"), (61, "long_term")],
)
def test_expiration_buckets_partition_days(days, bucket):
    assert classify_expiration(days) == bucket


def test_expiration_report_partitions_active_contracts():
    contracts = [
        _contract(1, end=date(2026, 2, 20), amount=100),
        _contract(2, end=date(2026, 3, 5), amount=200),
        _contract(3, end=date(2026, 3, 20), amount=300),
        _contract(4, end=date(2026, 6, 1), amount=400),
        _contract(5, end=date(2026, 3, 2), status="pending"),
    ]
    report = expiration_report(contracts, now=NOW)

    assert report["active_total"] == 4
    assert sum(len(rows) for rows in report["buckets"].values()) == 4
    assert [row["id"] for row in report["expiring_soon"]] == [1, 2, 3]
    assert report["expiring_soon_value"] == 600


def test_financial_report_groups_by_type_and_month():
    contracts = [
        _contract(1, amount=300, contract_type="lease", start=date(2026, 3, 1)),
        _contract(2, amount=100, contract_type="service", start=date(2025, 12, 5), status="pending"),
        _contract(3, amount=200, contract_type="lease", start=date(2026, 1, 15)),
    ]
    report = financial_report(contracts)

    assert report["total_value"] == 600
    assert report["active_value"] == 500
    assert report["average_value"] == 200
    assert report["max_contract"]["id"] == 1
    assert report["min_contract"]["id"] == 2
    assert {row["type"]: row["amount"] for row in report["by_type"]} == {"service": 100, "lease": 500}
    assert [row["label"] for row in report["monthly"]] == ["Dec 2025", "Jan 2026", "Mar 2026"]


def test_supplement_reports_group_by_contract():
    contracts = [_contract(1), _contract(2)]
    supplements = [
        _supplement(1, 1, datetime(2026, 1, 5, tzinfo=timezone.utc)),
        _supplement(2, 2, datetime(2026, 2, 5, tzinfo=timezone.utc), status="approved"),
        _supplement(3, 1, datetime(2026, 3, 5)),
        _supplement(4, 99, datetime(2026, 1, 1, tzinfo=timezone.utc)),
    ]

    report = supplements_report(supplements, contracts)
    assert report["total_supplements"] == 4
    assert report["by_contract"][0]["contract_id"] == 1
    assert report["by_contract"][0]["count"] == 2
    assert report["by_contract"][-1]["contract_number"] == "Unknown"

    modifications = modifications_report(supplements, contracts)
    assert [row["id"] for row in modifications["recent"]] == [3, 2, 1, 4]
    assert modifications["by_contract"][0]["latest"]["id"] == 3
    assert modifications["average_per_contract"] == 4 / 3


def test_filters_apply_before_building():
    contracts = [
        _contract(1, amount=100, client="Acme Corp"),
        _contract(2, amount=5000, client="Initech", status="pending"),
    ]
    filters = ReportFilters(client="acme", amount_max=1000)
    assert [c.id for c in filter_contracts(contracts, filters)] == [1]

    report = build_report("status", contracts, filters=ReportFilters(status="pending"))
    assert report["report_type"] == "status"
    assert report["data"]["total"] == 1


def test_build_report_rejects_unknown_type():
    with pytest.raises(ValidationError):
        build_report("unknown", [])
    assert set(REPORT_BUILDERS) == {
        "status",
        "financial",
        "expiration",
        "client-supplier",
        "supplements",
        "modifications",
    }


def test_averages_are_exact_when_totals_do_not_divide_evenly():
    contracts = [
        _contract(1, amount=10),
        _contract(2, amount=0),
        _contract(3, amount=0),
    ]

    assert financial_report(contracts)["average_value"] == 10 / 3
    (acme,) = client_supplier_report(contracts)["clients"]
    assert acme["average_value"] == 10 / 3
    assert acme["total_value"] == 10
