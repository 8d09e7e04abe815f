from decimal import Decimal

import pytest

from finops_ui.errors import FormValidationError
from finops_ui.models.requests import DEPOSIT, ProfileRequest, charge_breakdown
from finops_ui.views.forms import (
    CREATE_FIELDS,
    INVALID_FORM,
    DepositForm,
    LedgerTransactionForm,
    NamedRecordForm,
    ProfileForm,
    ProfilerBankForm,
    ProfilerClientForm,
    WithdrawForm,
    blank_values,
    build_form,
    submit_form,
)
from finops_ui.views.list_view import ERROR, SUCCESS, ListView, Toast


@pytest.fixture
def view(make_actions, timers, clock):
    return ListView(make_actions("profiler_transactions"), timer_factory=timers, clock=clock)


def test_zero_deposit_is_rejected_without_create(view):
    service = view.actions.service

    created, errors = submit_form(view, DepositForm(profile_id="3", amount="0"))

    assert created is False
    assert errors == {"amount": "Amount must be greater than 0"}
    assert all(name != "create" for name, _ in service.calls)
    assert view.drain_toasts() == [Toast(ERROR, INVALID_FORM)]


@pytest.mark.parametrize(
    "amount,message",
    [("", "Amount is required"), ("abc", "Amount must be a positive number"), ("-5", "Amount must be greater than 0")],
)
def test_amount_messages(amount, message):
    assert DepositForm(profile_id=1, amount=amount).validate() == {"amount": message}


def test_profile_is_required():
    assert DepositForm(amount="10").validate() == {"profile_id": "Profile is required"}


def test_withdraw_breakdown_adds_charge():
    form = WithdrawForm(profile_id=1, amount="1000", charges_percentage="5")

    assert form.breakdown.charge_amount == Decimal("50.00")
    assert form.breakdown.adjusted_amount == Decimal("1050.00")


def test_deposit_side_breakdown_subtracts_charge():
    breakdown = charge_breakdown("1000", "5", DEPOSIT)

    assert breakdown.charge_amount == Decimal("50.00")
    assert breakdown.adjusted_amount == Decimal("950.00")


def test_charges_must_be_a_percentage():
    form = WithdrawForm(profile_id=1, amount="100", charges_percentage="120")

    assert form.validate() == {"charges_percentage": "Charges must be between 0 and 100"}
    with pytest.raises(FormValidationError) as info:
        form.to_request()
    assert info.value.errors == {"charges_percentage": "Charges must be between 0 and 100"}


def test_withdraw_submission_creates_record(view):
    view.load()

    created, errors = submit_form(
        view, WithdrawForm(profile_id="4", amount="1,000", charges_percentage="2.5", notes=" rent ")
    )

    assert (created, errors) == (True, {})
    record = view.state.records[0]
    assert record["profile_id"] == 4
    assert record["amount"] == 1000.0
    assert record["withdraw_charges_percentage"] == 2.5
    assert record["withdraw_charges_amount"] == 25.0
    assert record["notes"] == "rent"
    assert view.drain_toasts() == [Toast(SUCCESS, "Transaction created successfully")]


def test_ledger_withdraw_payload_sends_percentage():
    request = LedgerTransactionForm(
        kind="withdraw", client_id="2", amount="5000", charges_percentage="2", bank_id="", remark=" card bill "
    ).to_request()

    assert request.to_payload() == {
        "transaction_type": 1,
        "client_id": 2,
        "transaction_amount": 5000.0,
        "widthdraw_charges": 2.0,
        "remark": "card bill",
    }


def test_ledger_deposit_ignores_charges():
    form = LedgerTransactionForm(kind="deposit", client_id=2, amount="100", charges_percentage="500")

    assert form.validate() == {}
    assert form.to_request().widthdraw_charges == Decimal("0")


def test_ledger_client_required():
    assert LedgerTransactionForm(amount="100").validate() == {"client_id": "Client is required"}


@pytest.mark.parametrize(
    "resource,form_type",
    [
        ("transactions", LedgerTransactionForm),
        ("clients", NamedRecordForm),
        ("banks", NamedRecordForm),
        ("cards", NamedRecordForm),
        ("profiler_clients", ProfilerClientForm),
        ("profiler_banks", ProfilerBankForm),
        ("profiler_profiles", ProfileForm),
    ],
)
def test_every_create_form_builds_from_blank_values(resource, form_type):
    form = build_form(resource, blank_values(resource))

    assert isinstance(form, form_type)
    assert form.validate()


def test_unknown_resource_has_no_create_form():
    with pytest.raises(ValueError):
        build_form("profiler_dashboard", {})


def test_blank_values_default_to_deposit():
    values = blank_values("transactions")

    assert values["kind"] == "deposit"
    assert values["amount"] == ""
    assert set(values) == {f.key for f in CREATE_FIELDS["transactions"]}


def test_named_record_drops_blank_details():
    form = build_form("clients", {"name": " Ravi ", "email": "ravi@example.com", "contact": "  "})

    assert form.to_request() == {"name": "Ravi", "email": "ravi@example.com"}
    assert NamedRecordForm("Bank name").validate() == {"name": "Bank name is required"}


def test_profiler_client_messages():
    form = ProfilerClientForm(name="R", email="nope", mobile_number="98765", aadhaar_card_number="1234 5678")

    assert form.validate() == {
        "name": "Client name must be at least 2 characters",
        "email": "Invalid email format",
        "mobile_number": "Mobile number must be 10 digits",
        "aadhaar_card_number": "Aadhaar number must be 12 digits",
    }


def test_profiler_client_request_strips_separators():
    form = ProfilerClientForm(name=" Asha ", aadhaar_card_number="1234-5678-9012")

    assert form.to_request() == {
        "name": "Asha",
        "email": None,
        "mobile_number": None,
        "aadhaar_card_number": "123456789012",
        "notes": None,
    }


def test_profiler_bank_name_length():
    assert ProfilerBankForm(bank_name=" ").validate() == {"bank_name": "Bank name is required"}
    assert ProfilerBankForm(bank_name="X").validate() == {
        "bank_name": "Bank name must be at least 2 characters"
    }


def test_profile_form_messages():
    form = ProfileForm(credit_card_number="4111 1111")

    assert form.validate() == {
        "client_id": "Client is required",
        "bank_id": "Bank is required",
        "credit_card_number": "Credit card number must be 15-16 digits",
        "pre_planned_deposit_amount": "Opening balance is required",
    }
    letters = ProfileForm(client_id=1, bank_id=1, credit_card_number="4111-abcd", pre_planned_deposit_amount="10")
    assert letters.validate() == {"credit_card_number": "Credit card number must contain only digits"}


def test_profile_form_builds_request_from_raw_values():
    form = build_form(
        "profiler_profiles",
        {
            "client_id": "3",
            "bank_id": "2",
            "credit_card_number": "4111 1111 1111 1111",
            "pre_planned_deposit_amount": "25,000",
            "carry_forward_enabled": "true",
            "notes": "",
        },
    )

    request = form.to_request()

    assert isinstance(request, ProfileRequest)
    assert request.credit_card_number == "4111111111111111"
    assert request.pre_planned_deposit_amount == Decimal("25000")
    assert request.carry_forward_enabled is True
    assert request.notes is None


def test_client_submission_creates_record(make_actions, timers, clock):
    view = ListView(make_actions("clients"), timer_factory=timers, clock=clock)
    view.load()

    created, errors = submit_form(view, build_form("clients", {"name": "Zoya Khan", "email": ""}))

    assert (created, errors) == (True, {})
    assert ("create", {"name": "Zoya Khan"}) in view.actions.service.calls
    assert view.drain_toasts() == [Toast(SUCCESS, "Client created successfully")]


def test_invalid_profile_is_never_sent(make_actions, timers, clock):
    view = ListView(make_actions("profiler_profiles"), timer_factory=timers, clock=clock)

    created, errors = submit_form(view, build_form("profiler_profiles", blank_values("profiler_profiles")))

    assert created is False
    assert errors["client_id"] == "Client is required"
    assert all(name != "create" for name, _ in view.actions.service.calls)
