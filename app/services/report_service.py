"""Report aggregation over contract and supplement snapshots.

Every function here is a pure function of its inputs: no session access, no
clock reads unless ``now`` is omitted. Grouped rows are sorted with Python's
stable sort so ties keep their first-seen order.
"""

from __future__ import annotations

from collections.abc import Callable, Iterable, Sequence
from dataclasses import dataclass
from datetime import date, datetime, timezone
from typing import Any

from app.core.exceptions import ValidationError
from app.models.enums import ContractStatus, ContractType, SupplementStatus, value_of
from app.utils.dates import as_utc, days_until, month_key, month_label

CHART_LABEL_LIMIT = 15
CHART_PARTY_ROWS = 8
CHART_CONTRACT_LABEL_LIMIT = 10
CHART_MODIFICATION_ROWS = 10
UNKNOWN = "Unknown"

EXPIRATION_BUCKETS: list[tuple[str, str]] = [
    ("expired", "Expired"),
    ("critical", "0-7 Days"),
    ("warning", "8-15 Days"),
    ("attention", "16-30 Days"),
    ("safe", "31-60 Days"),
    ("long_term", "60+ Days"),
]
EXPIRING_SOON_BUCKETS = ("expired", "critical", "warning", "attention")


@dataclass(frozen=True)
class ReportFilters:
    date_from: date | None = None
    date_to: date | None = None
    status: str | None = None
    type: str | None = None
    client: str | None = None
    supplier: str | None = None
    amount_min: float | None = None
    amount_max: float | None = None


def _amount(contract: Any) -> float:
    if contract.amount is None:
        return 0.0
    return float(contract.amount)


def _as_date(value: date | datetime) -> date:
    return value.date() if isinstance(value, datetime) else value


def _percentage(count: int, total: int) -> float:
    if total == 0:
        return 0.0
    return round(count / total * 100, 1)


def _average(total: float, count: int) -> float:
    if count == 0:
        return 0.0
    return total / count


def truncate_label(name: str, limit: int = CHART_LABEL_LIMIT) -> str:
    """Shorten chart labels only; tables keep full names."""
    if len(name) > limit:
        return f"{name[:limit]}..."
    return name


def format_label(value: str) -> str:
    return value.replace("_", " ").title()


def _contract_row(contract: Any, now: datetime | None = None) -> dict[str, Any]:
    row = {
        "id": contract.id,
        "contract_number": contract.contract_number,
        "title": contract.title,
        "client": getattr(contract, "client_name", None),
        "supplier": getattr(contract, "supplier_name", None),
        "status": value_of(contract.status),
        "type": value_of(contract.type),
        "start_date": contract.start_date,
        "end_date": contract.end_date,
        "amount": round(_amount(contract), 2),
    }
    if now is not None:
        row["days_until"] = days_until(contract.end_date, now=now)
    return row


def _supplement_row(supplement: Any) -> dict[str, Any]:
    return {
        "id": supplement.id,
        "contract_id": supplement.contract_id,
        "supplement_number": supplement.supplement_number,
        "status": value_of(supplement.status),
        "effective_date": supplement.effective_date,
        "created_at": supplement.created_at,
        "updated_at": supplement.updated_at,
    }


def filter_contracts(contracts: Iterable[Any], filters: ReportFilters | None) -> list[Any]:
    result = list(contracts)
    if filters is None:
        return result
    if filters.date_from:
        result = [c for c in result if c.start_date >= filters.date_from]
    if filters.date_to:
        result = [c for c in result if c.end_date <= filters.date_to]
    if filters.status and filters.status != "all":
        result = [c for c in result if value_of(c.status) == filters.status]
    if filters.type and filters.type != "all":
        result = [c for c in result if value_of(c.type) == filters.type]
    if filters.client:
        needle = filters.client.lower()
        result = [c for c in result if needle in (getattr(c, "client_name", None) or "").lower()]
    if filters.supplier:
        needle = filters.supplier.lower()
        result = [c for c in result if needle in (getattr(c, "supplier_name", None) or "").lower()]
    if filters.amount_min is not None:
        result = [c for c in result if _amount(c) >= filters.amount_min]
    if filters.amount_max is not None:
        result = [c for c in result if _amount(c) <= filters.amount_max]
    return result


def filter_supplements(supplements: Iterable[Any], filters: ReportFilters | None) -> list[Any]:
    result = list(supplements)
    if filters is None:
        return result
    if filters.date_from:
        result = [s for s in result if _as_date(s.created_at) >= filters.date_from]
    if filters.date_to:
        result = [s for s in result if _as_date(s.created_at) <= filters.date_to]
    return result


def status_report(contracts: Sequence[Any]) -> dict[str, Any]:
    counts = {status.value: 0 for status in ContractStatus}
    for contract in contracts:
        status = value_of(contract.status)
        if status in counts:
            counts[status] += 1
    total = len(contracts)
    return {
        "total": total,
        "by_status": [
            {
                "status": status,
                "label": format_label(status),
                "count": count,
                "percentage": _percentage(count, total),
            }
            for status, count in counts.items()
        ],
        "contracts": [_contract_row(contract) for contract in contracts],
    }


def _group_by_party(contracts: Sequence[Any], name_attr: str) -> list[dict[str, Any]]:
    groups: dict[str, dict[str, Any]] = {}
    for contract in contracts:
        name = getattr(contract, name_attr, None)
        if not name:
            continue
        group = groups.setdefault(name, {"name": name, "count": 0, "total_value": 0.0, "contract_ids": []})
        group["count"] += 1
        group["total_value"] += _amount(contract)
        group["contract_ids"].append(contract.id)

    rows = sorted(groups.values(), key=lambda row: row["total_value"], reverse=True)
    for row in rows:
        row["average_value"] = _average(row["total_value"], row["count"])
        row["total_value"] = round(row["total_value"], 2)
    return rows


def _party_chart(rows: list[dict[str, Any]]) -> list[dict[str, Any]]:
    return [
        {"name": truncate_label(row["name"]), "value": row["total_value"], "count": row["count"]}
        for row in rows[:CHART_PARTY_ROWS]
    ]


def client_supplier_report(contracts: Sequence[Any]) -> dict[str, Any]:
    clients = _group_by_party(contracts, "client_name")
    suppliers = _group_by_party(contracts, "supplier_name")
    return {
        "clients": clients,
        "suppliers": suppliers,
        "client_chart": _party_chart(clients),
        "supplier_chart": _party_chart(suppliers),
        "total_clients": len(clients),
        "total_suppliers": len(suppliers),
        "total_contracts": len(contracts),
        "total_value": round(sum(_amount(contract) for contract in contracts), 2),
    }


def classify_expiration(days: int) -> str:
    """Map days-until-expiration onto exactly one bucket key."""
    if days < 0:
        return "expired"
    if days <= 7:
        return "critical"
    if days <= 15:
        return "warning"
    if days <= 30:
        return "attention"
    if days <= 60:
        return "safe"
    return "long_term"


def expiration_report(contracts: Sequence[Any], now: datetime | None = None) -> dict[str, Any]:
    reference = as_utc(now) if now is not None else datetime.now(timezone.utc)
    active = [c for c in contracts if value_of(c.status) == ContractStatus.ACTIVE.value]

    buckets: dict[str, list[dict[str, Any]]] = {key: [] for key, _ in EXPIRATION_BUCKETS}
    for contract in active:
        row = _contract_row(contract, now=reference)
        buckets[classify_expiration(row["days_until"])].append(row)

    expiring_soon = sorted(
        (row for key in EXPIRING_SOON_BUCKETS for row in buckets[key]),
        key=lambda row: row["end_date"],
    )
    return {
        "active_total": len(active),
        "buckets": buckets,
        "chart": [
            {"bucket": key, "label": label, "count": len(buckets[key])}
            for key, label in EXPIRATION_BUCKETS
        ],
        "expiring_soon": expiring_soon,
        "total_expiring_soon": len(expiring_soon),
        "expiring_soon_value": round(sum(row["amount"] for row in expiring_soon), 2),
    }


def financial_report(contracts: Sequence[Any]) -> dict[str, Any]:
    by_type = {contract_type.value: 0.0 for contract_type in ContractType}
    monthly: dict[tuple[int, int], float] = {}
    for contract in contracts:
        contract_type = value_of(contract.type)
        by_type[contract_type] = by_type.get(contract_type, 0.0) + _amount(contract)
        key = month_key(contract.start_date)
        monthly[key] = monthly.get(key, 0.0) + _amount(contract)

    total_value = sum(_amount(contract) for contract in contracts)
    active_value = sum(
        _amount(contract) for contract in contracts if value_of(contract.status) == ContractStatus.ACTIVE.value
    )
    max_contract = None
    min_contract = None
    for contract in contracts:
        if max_contract is None or _amount(contract) > _amount(max_contract):
            max_contract = contract
        if min_contract is None or _amount(contract) < _amount(min_contract):
            min_contract = contract

    return {
        "count": len(contracts),
        "total_value": round(total_value, 2),
        "active_value": round(active_value, 2),
        "average_value": _average(total_value, len(contracts)),
        "max_value": round(_amount(max_contract), 2) if max_contract is not None else 0.0,
        "min_value": round(_amount(min_contract), 2) if min_contract is not None else 0.0,
        "max_contract": _contract_row(max_contract) if max_contract is not None else None,
        "min_contract": _contract_row(min_contract) if min_contract is not None else None,
        "by_type": [
            {"type": contract_type, "label": format_label(contract_type), "amount": round(amount, 2)}
            for contract_type, amount in by_type.items()
            if amount > 0
        ],
        "monthly": [
            {"year": key[0], "month": key[1], "label": month_label(key), "amount": round(monthly[key], 2)}
            for key in sorted(monthly)
        ],
        "top_contracts": [
            _contract_row(contract) for contract in sorted(contracts, key=_amount, reverse=True)[:10]
        ],
    }


def _group_by_contract(supplements: Sequence[Any], contracts: Sequence[Any]) -> list[dict[str, Any]]:
    contracts_by_id = {contract.id: contract for contract in contracts}
    groups: dict[Any, dict[str, Any]] = {}
    for supplement in supplements:
        group = groups.get(supplement.contract_id)
        if group is None:
            contract = contracts_by_id.get(supplement.contract_id)
            group = {
                "contract_id": supplement.contract_id,
                "contract_number": contract.contract_number if contract is not None else UNKNOWN,
                "contract_title": contract.title if contract is not None else UNKNOWN,
                "supplements": [],
            }
            groups[supplement.contract_id] = group
        group["supplements"].append(supplement)

    rows = sorted(groups.values(), key=lambda row: len(row["supplements"]), reverse=True)
    for row in rows:
        latest = max(row["supplements"], key=lambda s: as_utc(s.updated_at))
        row["count"] = len(row["supplements"])
        row["latest"] = _supplement_row(latest)
        row["supplements"] = [_supplement_row(s) for s in row["supplements"]]
    return rows


def supplements_report(supplements: Sequence[Any], contracts: Sequence[Any]) -> dict[str, Any]:
    counts = {status.value: 0 for status in SupplementStatus}
    monthly: dict[tuple[int, int], int] = {}
    for supplement in supplements:
        status = value_of(supplement.status)
        if status in counts:
            counts[status] += 1
        key = month_key(supplement.created_at)
        monthly[key] = monthly.get(key, 0) + 1

    return {
        "total_supplements": len(supplements),
        "by_status": [
            {"status": status, "label": format_label(status), "count": count}
            for status, count in counts.items()
        ],
        "by_contract": _group_by_contract(supplements, contracts),
        "monthly": [
            {"year": key[0], "month": key[1], "label": month_label(key), "count": monthly[key]}
            for key in sorted(monthly)
        ],
        "supplements": [_supplement_row(s) for s in supplements],
    }


def modifications_report(supplements: Sequence[Any], contracts: Sequence[Any]) -> dict[str, Any]:
    newest_first = sorted(supplements, key=lambda s: as_utc(s.updated_at), reverse=True)
    ranked = _group_by_contract(newest_first, contracts)
    contracts_with_modifications = len(ranked)
    return {
        "total_modifications": len(supplements),
        "contracts_with_modifications": contracts_with_modifications,
        "average_per_contract": _average(len(supplements), contracts_with_modifications),
        "by_contract": ranked,
        "chart": [
            {
                "name": truncate_label(row["contract_number"], CHART_CONTRACT_LABEL_LIMIT),
                "count": row["count"],
            }
            for row in ranked[:CHART_MODIFICATION_ROWS]
        ],
        "recent": [_supplement_row(s) for s in newest_first],
    }


# Builders receive (filtered contracts, filtered supplements, every contract, now).
# Supplement reports resolve parent contracts against the unfiltered list.
ReportBuilder = Callable[[list[Any], list[Any], list[Any], datetime | None], dict[str, Any]]

REPORT_BUILDERS: dict[str, ReportBuilder] = {
    "status": lambda contracts, supplements, everything, now: status_report(contracts),
    "financial": lambda contracts, supplements, everything, now: financial_report(contracts),
    "expiration": lambda contracts, supplements, everything, now: expiration_report(contracts, now=now),
    "client-supplier": lambda contracts, supplements, everything, now: client_supplier_report(contracts),
    "supplements": lambda contracts, supplements, everything, now: supplements_report(supplements, everything),
    "modifications": lambda contracts, supplements, everything, now: modifications_report(supplements, everything),
}


def build_report(
    report_type: str,
    contracts: Iterable[Any],
    supplements: Iterable[Any] = (),
    filters: ReportFilters | None = None,
    now: datetime | None = None,
) -> dict[str, Any]:
    """Filter the snapshots and run the builder registered for ``report_type``."""
    builder = REPORT_BUILDERS.get(report_type)
    if builder is None:
        raise ValidationError(f"Unknown report type: {report_type}")
    all_contracts = list(contracts)
    return {
        "report_type": report_type,
        "data": builder(
            filter_contracts(all_contracts, filters),
            filter_supplements(supplements, filters),
            all_contracts,
            now,
        ),
    }
