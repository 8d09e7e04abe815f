from decimal import Decimal

import pytest

from finops_ui.models.common import AutocompleteResult, PageEnvelope, PaginationInfo, SortConfig
from finops_ui.models.requests import margin_breakdown
from finops_ui.models.resources import RESOURCES, get_resource


@pytest.mark.parametrize(
    "page,pages,has_next,has_previous",
    [(1, 3, True, False), (2, 3, True, True), (3, 3, False, True), (1, 0, False, False)],
)
def test_pagination_flags_follow_page_numbers(page, pages, has_next, has_previous):
    # Server-sent flags are ignored in favour of the page numbers.
    info = PaginationInfo(current_page=page, total_pages=pages, has_next_page=not has_next)

    assert info.has_next_page is has_next
    assert info.has_previous_page is has_previous


def test_pagination_accepts_legacy_names_and_derives_total_pages():
    info = PaginationInfo.from_dict({"current_page": 1, "page_size": 20, "total_records": 45})

    assert info.per_page == 20
    assert info.total_count == 45
    assert info.total_pages == 3
    assert info.has_next_page


def test_total_count_never_goes_negative():
    info = PaginationInfo(total_count=1, total_pages=1)

    assert info.with_total_count(-1).total_count == 0
    assert info.with_total_count(-1).with_total_count(-1).total_count == 0


def test_sort_toggle_alternates_on_same_column():
    sort = SortConfig("amount", "desc")

    first = sort.toggled("amount")
    second = first.toggled("amount")

    assert first == SortConfig("amount", "asc")
    assert second == SortConfig("amount", "desc")
    assert second.toggled("client_name") == SortConfig("client_name", "asc")


def test_envelope_reads_current_shape():
    envelope = PageEnvelope.from_response(
        {
            "success": True,
            "message": "ok",
            "data": {
                "data": [{"id": 1}, {"id": 2}],
                "pagination": {"current_page": 1, "per_page": 2, "total_count": 5, "total_pages": 3},
                "filters_applied": {"bank_ids": [1]},
                "search_applied": "hdfc",
                "sort_applied": {"sort_by": "name", "sort_order": "ASC"},
                "summary": {"total_deposits": "10", "total_withdrawals": "4", "total_charges": "1"},
            },
        }
    )

    assert [r["id"] for r in envelope.records] == [1, 2]
    assert envelope.pagination.has_next_page
    assert envelope.filters_applied == {"bank_ids": [1]}
    assert envelope.search_applied == "hdfc"
    assert envelope.sort_applied == SortConfig("name", "asc")
    assert envelope.summary.net_amount == Decimal("5")


def test_envelope_reads_legacy_shape():
    envelope = PageEnvelope.from_response(
        {
            "success": True,
            "data": {
                "data": [],
                "pagination": {"page": 1, "page_size": 20, "total_records": 0},
                "search_query": "meera",
                "sort_by": "create_date",
                "sort_order": "desc",
            },
        }
    )

    assert envelope.search_applied == "meera"
    assert envelope.sort_applied == SortConfig("create_date", "desc")
    assert envelope.pagination.total_pages == 0
    assert envelope.filters_applied == {}


def test_empty_response_is_unsuccessful():
    assert PageEnvelope.from_response(None).success is False


def test_autocomplete_options_label_profiles_by_client_and_bank():
    result = AutocompleteResult.from_response(
        {
            "data": {
                "data": [
                    {"id": 1, "name": "Meera Iyer"},
                    {"id": 2, "client_name": "Rohan Gupta", "bank_name": "SBI"},
                ],
                "limit_applied": 5,
            }
        }
    )

    assert result.options() == [
        {"label": "Meera Iyer", "value": 1},
        {"label": "Rohan Gupta - SBI", "value": 2},
    ]
    assert result.result_count == 2


def test_resources_are_consistent():
    for spec in RESOURCES.values():
        assert spec.default_sort.sort_by in spec.sort_columns
        assert all(c.sortable == spec.is_sortable(c.key) for c in spec.columns)
    assert get_resource("transactions").default_limit == 20
    assert get_resource("profiler_profiles").default_limit == 50


def test_unknown_resource():
    with pytest.raises(ValueError, match="Unknown resource"):
        get_resource("payroll")


def test_margin_breakdown_charges_gst_on_bank_rate():
    b = margin_breakdown("50,000", "2.2", "1.8", "25")

    assert b.bank_with_gst_percentage == Decimal("2.124")
    assert b.markup_percentage == Decimal("0.076")
    assert b.gross_earnings == Decimal("38.00")
    assert b.payable == Decimal("48900.00")
    assert b.net_profit == Decimal("13.00")


def test_margin_breakdown_clamps_inputs():
    b = margin_breakdown("-100", "150", "", "abc")

    assert b.amount == Decimal("0.00")
    assert b.our_percentage == Decimal("100")
    assert b.bank_percentage == Decimal("0")
    assert b.platform_fee == Decimal("0.00")
    assert b.net_profit == Decimal("0.00")


def test_margin_below_bank_cost_is_a_loss():
    b = margin_breakdown(10000, 1, 1.5, 0)

    assert b.markup_percentage == Decimal("-0.77")
    assert b.net_profit == Decimal("-77.00")
