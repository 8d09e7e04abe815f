from decimal import Decimal

import pytest

from finops_ui.errors import ApiError
from finops_ui.models.common import PageEnvelope


def _page(service, **params):
    base = {"page": 1, "limit": 20}
    base.update(params)
    return PageEnvelope.from_response(service.list_page(base))


def test_pages_are_disjoint_and_cover_everything(demo_service):
    service = demo_service("transactions")

    pages = [_page(service, page=n) for n in (1, 2, 3)]

    ids = [r["id"] for p in pages for r in p.records]
    assert len(ids) == 45
    assert len(set(ids)) == 45
    assert [len(p.records) for p in pages] == [20, 20, 5]
    assert not pages[-1].pagination.has_next_page


def test_id_filters_and_amount_range(demo_service):
    service = demo_service("transactions")

    envelope = _page(service, bank_ids=[1, 2], min_amount=10000, limit=100)

    assert envelope.records
    assert all(r["bank_id"] in (1, 2) for r in envelope.records)
    assert all(r["transaction_amount"] >= 10000 for r in envelope.records)
    assert envelope.filters_applied == {"bank_ids": [1, 2], "min_amount": 10000}


def test_dashboard_shows_only_active_profiles_with_balance(demo_service):
    service = demo_service("profiler_dashboard")

    envelope = _page(service, limit=100)

    assert envelope.records
    assert all(r["status"] == "active" and r["remaining_balance"] > 0 for r in envelope.records)


def test_profiler_transactions_carry_summary(demo_service):
    service = demo_service("profiler_transactions")
    profile_id = service.records[0]["profile_id"]

    envelope = _page(service, profile_id=profile_id, limit=100)

    rows = envelope.records
    deposits = sum(Decimal(str(r["amount"])) for r in rows if r["transaction_type"] == "deposit")
    assert envelope.summary.total_deposits == deposits
    assert envelope.summary.transaction_count == len(rows)
    assert service.summary(profile_id) == envelope.summary


def test_autocomplete_limits_matches(demo_service):
    service = demo_service("clients")

    response = service.autocomplete("a", 3)

    assert len(response["data"]["data"]) == 3
    assert response["data"]["limit_applied"] == 3


def test_update_unknown_record(demo_service):
    service = demo_service("clients")

    with pytest.raises(ApiError) as info:
        service.update({"id": 404, "name": "Nobody"})
    assert info.value.status_code == 404


def test_unsupported_create(demo_service):
    with pytest.raises(NotImplementedError):
        demo_service("profiler_dashboard").create({})
