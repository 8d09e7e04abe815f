"""
Create forms for every resource that accepts new records.

Each form holds the raw user input, reports field-level errors from
``validate()`` and builds the request payload with ``to_request()``.
``build_form`` maps a resource and its raw input values to the right form,
and ``submit_form`` is what the UI calls: it never reaches the store with an
invalid form.
"""

import re
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Any, Callable, Mapping

from finops_ui.errors import FormValidationError
from finops_ui.models.requests import (
    DEPOSIT,
    WITHDRAW,
    ChargeBreakdown,
    LedgerTransactionRequest,
    ProfilerDepositRequest,
    ProfilerWithdrawRequest,
    ProfileRequest,
    charge_breakdown,
    parse_amount,
)
from finops_ui.views.list_view import ERROR, ListView

INVALID_FORM = "Please fix all validation errors"


def _id(value: Any) -> int | None:
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value or None
    text = str(value).strip()
    return int(text) if text.isdigit() and int(text) else None


def _amount_error(raw: Any) -> str | None:
    if raw is None or not str(raw).strip():
        return "Amount is required"
    value = parse_amount(raw)
    if value is None:
        return "Amount must be a positive number"
    if value <= 0:
        return "Amount must be greater than 0"
    return None


def _charges_error(raw: Any) -> str | None:
    if raw is None or not str(raw).strip():
        return None
    value = parse_amount(raw)
    if value is None or value < 0 or value > 100:
        return "Charges must be between 0 and 100"
    return None


class _Form:
    def validate(self) -> dict[str, str]:
        raise NotImplementedError

    def is_valid(self) -> bool:
        return not self.validate()

    def _check(self) -> None:
        errors = self.validate()
        if errors:
            raise FormValidationError(errors)


@dataclass(slots=True)
class DepositForm(_Form):
    """Deposit into a profiler profile."""

    profile_id: Any = None
    amount: Any = ""
    notes: str = ""

    def validate(self) -> dict[str, str]:
        errors = {}
        if _id(self.profile_id) is None:
            errors["profile_id"] = "Profile is required"
        amount_error = _amount_error(self.amount)
        if amount_error:
            errors["amount"] = amount_error
        return errors

    def to_request(self) -> ProfilerDepositRequest:
        self._check()
        return ProfilerDepositRequest(
            profile_id=_id(self.profile_id),
            amount=parse_amount(self.amount),
            notes=self.notes.strip() or None,
        )


@dataclass(slots=True)
class WithdrawForm(_Form):
    """Withdrawal from a profiler profile with an optional percentage charge."""

    profile_id: Any = None
    amount: Any = ""
    charges_percentage: Any = ""
    notes: str = ""

    @property
    def breakdown(self) -> ChargeBreakdown:
        return charge_breakdown(self.amount or 0, self.charges_percentage or 0, WITHDRAW)

    def validate(self) -> dict[str, str]:
        errors = {}
        if _id(self.profile_id) is None:
            errors["profile_id"] = "Profile is required"
        amount_error = _amount_error(self.amount)
        if amount_error:
            errors["amount"] = amount_error
        charges_error = _charges_error(self.charges_percentage)
        if charges_error:
            errors["charges_percentage"] = charges_error
        return errors

    def to_request(self) -> ProfilerWithdrawRequest:
        self._check()
        return ProfilerWithdrawRequest(
            profile_id=_id(self.profile_id),
            amount=parse_amount(self.amount),
            withdraw_charges_percentage=parse_amount(self.charges_percentage) or Decimal("0"),
            notes=self.notes.strip() or None,
        )


@dataclass(slots=True)
class LedgerTransactionForm(_Form):
    """
    Ledger deposit or withdrawal.

    Attributes:
        kind: ``"deposit"`` or ``"withdraw"``.
        client_id: Selected client.
        amount: Raw amount input.
        charges_percentage: Withdrawal charge in percent; ignored for deposits.
        bank_id: Optional bank.
        card_id: Optional card.
        remark: Free text.
    """

    kind: str = DEPOSIT
    client_id: Any = None
    amount: Any = ""
    charges_percentage: Any = ""
    bank_id: Any = None
    card_id: Any = None
    remark: str = ""

    @property
    def breakdown(self) -> ChargeBreakdown:
        pct = self.charges_percentage if self.kind == WITHDRAW else 0
        return charge_breakdown(self.amount or 0, pct or 0, self.kind)

    def validate(self) -> dict[str, str]:
        errors = {}
        if _id(self.client_id) is None:
            errors["client_id"] = "Client is required"
        amount_error = _amount_error(self.amount)
        if amount_error:
            errors["amount"] = amount_error
        if self.kind == WITHDRAW:
            charges_error = _charges_error(self.charges_percentage)
            if charges_error:
                errors["charges_percentage"] = charges_error
        return errors

    def to_request(self) -> LedgerTransactionRequest:
        self._check()
        charges = parse_amount(self.charges_percentage) if self.kind == WITHDRAW else None
        return LedgerTransactionRequest(
            transaction_type=1 if self.kind == WITHDRAW else 0,
            client_id=_id(self.client_id),
            transaction_amount=parse_amount(self.amount),
            widthdraw_charges=charges or Decimal("0"),
            bank_id=_id(self.bank_id),
            card_id=_id(self.card_id),
            remark=self.remark.strip(),
        )


_EMAIL = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
_SEPARATORS = re.compile(r"[\s\-\u2022\u2013]")


def _name_error(raw: str, label: str, min_length: int = 1) -> str | None:
    text = (raw or "").strip()
    if not text:
        return f"{label} is required"
    if len(text) < min_length:
        return f"{label} must be at least {min_length} characters"
    return None


def _digits(raw: str) -> str:
    return _SEPARATORS.sub("", raw or "")


def _optional(raw: str) -> str | None:
    return (raw or "").strip() or None


@dataclass(slots=True)
class NamedRecordForm(_Form):
    """
    Ledger client, bank or card.

    Only ``name`` is required; ``details`` carries the optional client
    contact fields and is sent with blanks dropped.
    """

    label: str = "Name"
    name: str = ""
    details: dict[str, str] = field(default_factory=dict)

    def validate(self) -> dict[str, str]:
        error = _name_error(self.name, self.label)
        return {"name": error} if error else {}

    def to_request(self) -> dict:
        self._check()
        payload = {key: value.strip() for key, value in self.details.items() if (value or "").strip()}
        return {"name": self.name.strip(), **payload}


@dataclass(slots=True)
class ProfilerClientForm(_Form):
    name: str = ""
    email: str = ""
    mobile_number: str = ""
    aadhaar_card_number: str = ""
    notes: str = ""

    def validate(self) -> dict[str, str]:
        errors = {}
        name_error = _name_error(self.name, "Client name", min_length=2)
        if name_error:
            errors["name"] = name_error
        if self.email.strip() and not _EMAIL.match(self.email.strip()):
            errors["email"] = "Invalid email format"
        mobile = self.mobile_number.strip()
        if mobile and not (mobile.isdigit() and len(mobile) == 10):
            errors["mobile_number"] = "Mobile number must be 10 digits"
        aadhaar = _digits(self.aadhaar_card_number)
        if aadhaar and not aadhaar.isdigit():
            errors["aadhaar_card_number"] = "Aadhaar number must contain only digits"
        elif aadhaar and len(aadhaar) != 12:
            errors["aadhaar_card_number"] = "Aadhaar number must be 12 digits"
        return errors

    def to_request(self) -> dict:
        self._check()
        return {
            "name": self.name.strip(),
            "email": _optional(self.email),
            "mobile_number": _optional(self.mobile_number),
            "aadhaar_card_number": _digits(self.aadhaar_card_number) or None,
            "notes": _optional(self.notes),
        }


@dataclass(slots=True)
class ProfilerBankForm(_Form):
    bank_name: str = ""

    def validate(self) -> dict[str, str]:
        error = _name_error(self.bank_name, "Bank name", min_length=2)
        return {"bank_name": error} if error else {}

    def to_request(self) -> dict:
        self._check()
        return {"bank_name": self.bank_name.strip()}


@dataclass(slots=True)
class ProfileForm(_Form):
    """Profile opened for a profiler client's card at a profiler bank."""

    client_id: Any = None
    bank_id: Any = None
    credit_card_number: str = ""
    pre_planned_deposit_amount: Any = ""
    carry_forward_enabled: bool = False
    notes: str = ""

    def validate(self) -> dict[str, str]:
        errors = {}
        if _id(self.client_id) is None:
            errors["client_id"] = "Client is required"
        if _id(self.bank_id) is None:
            errors["bank_id"] = "Bank is required"
        card = _digits(self.credit_card_number)
        if not card:
            errors["credit_card_number"] = "Credit card number is required"
        elif not card.isdigit():
            errors["credit_card_number"] = "Credit card number must contain only digits"
        elif not 15 <= len(card) <= 16:
            errors["credit_card_number"] = "Credit card number must be 15-16 digits"
        amount = parse_amount(self.pre_planned_deposit_amount)
        if amount is None or amount <= 0:
            errors["pre_planned_deposit_amount"] = "Opening balance is required"
        return errors

    def to_request(self) -> ProfileRequest:
        self._check()
        return ProfileRequest(
            client_id=_id(self.client_id),
            bank_id=_id(self.bank_id),
            credit_card_number=_digits(self.credit_card_number),
            pre_planned_deposit_amount=parse_amount(self.pre_planned_deposit_amount),
            carry_forward_enabled=self.carry_forward_enabled,
            notes=_optional(self.notes),
        )


def _flag(raw: Any) -> bool:
    return str(raw).strip().lower() in {"1", "true", "yes", "on"}


# Raw string values from the UI, keyed by field name, to a form per resource.
CREATE_FORMS: dict[str, Callable[[Mapping[str, Any]], _Form]] = {
    "transactions": lambda v: LedgerTransactionForm(
        kind=v.get("kind") or DEPOSIT,
        client_id=v.get("client_id"),
        amount=v.get("amount", ""),
        charges_percentage=v.get("charges_percentage", ""),
        bank_id=v.get("bank_id"),
        card_id=v.get("card_id"),
        remark=v.get("remark", ""),
    ),
    "clients": lambda v: NamedRecordForm(
        "Client name",
        v.get("name", ""),
        {key: v.get(key, "") for key in ("email", "contact", "address")},
    ),
    "banks": lambda v: NamedRecordForm("Bank name", v.get("name", "")),
    "cards": lambda v: NamedRecordForm("Card name", v.get("name", "")),
    "profiler_clients": lambda v: ProfilerClientForm(
        name=v.get("name", ""),
        email=v.get("email", ""),
        mobile_number=v.get("mobile_number", ""),
        aadhaar_card_number=v.get("aadhaar_card_number", ""),
        notes=v.get("notes", ""),
    ),
    "profiler_banks": lambda v: ProfilerBankForm(bank_name=v.get("bank_name", "")),
    "profiler_profiles": lambda v: ProfileForm(
        client_id=v.get("client_id"),
        bank_id=v.get("bank_id"),
        credit_card_number=v.get("credit_card_number", ""),
        pre_planned_deposit_amount=v.get("pre_planned_deposit_amount", ""),
        carry_forward_enabled=_flag(v.get("carry_forward_enabled", "")),
        notes=v.get("notes", ""),
    ),
}


@dataclass(frozen=True, slots=True)
class FormField:
    """
    One input of a create form.

    Attributes:
        key: Value key passed to the form factory.
        label: Field label.
        kind: ``text``, ``number``, ``textarea``, ``picker``, ``choice`` or ``checkbox``.
        source: Autocomplete resource for pickers.
        only_when: ``(key, value)`` the field depends on, e.g. withdraw-only charges.
    """

    key: str
    label: str
    kind: str = "text"
    source: str | None = None
    only_when: tuple[str, str] | None = None

    @property
    def default(self) -> str:
        if self.kind == "choice":
            return DEPOSIT
        return ""


CREATE_FIELDS: dict[str, tuple[FormField, ...]] = {
    "transactions": (
        FormField("kind", "Type", "choice"),
        FormField("client_id", "Client", "picker", "clients"),
        FormField("amount", "Amount", "number"),
        FormField("charges_percentage", "Charges %", "number", only_when=("kind", WITHDRAW)),
        FormField("bank_id", "Bank", "picker", "banks"),
        FormField("card_id", "Card", "picker", "cards"),
        FormField("remark", "Remark", "textarea"),
    ),
    "clients": (
        FormField("name", "Name"),
        FormField("email", "Email"),
        FormField("contact", "Contact"),
        FormField("address", "Address", "textarea"),
    ),
    "banks": (FormField("name", "Bank name"),),
    "cards": (FormField("name", "Card name"),),
    "profiler_clients": (
        FormField("name", "Name"),
        FormField("email", "Email"),
        FormField("mobile_number", "Mobile number"),
        FormField("aadhaar_card_number", "Aadhaar number"),
        FormField("notes", "Notes", "textarea"),
    ),
    "profiler_banks": (FormField("bank_name", "Bank name"),),
    "profiler_profiles": (
        FormField("client_id", "Client", "picker", "profiler_clients"),
        FormField("bank_id", "Bank", "picker", "profiler_banks"),
        FormField("credit_card_number", "Credit card number"),
        FormField("pre_planned_deposit_amount", "Opening balance", "number"),
        FormField("carry_forward_enabled", "Carry forward balance", "checkbox"),
        FormField("notes", "Notes", "textarea"),
    ),
}


def blank_values(resource: str) -> dict[str, str]:
    return {f.key: f.default for f in CREATE_FIELDS.get(resource, ())}


def build_form(resource: str, values: Mapping[str, Any]) -> _Form:
    """Build the create form for ``resource`` from raw input values."""
    try:
        factory = CREATE_FORMS[resource]
    except KeyError:
        raise ValueError(f"No create form for resource {resource!r}") from None
    return factory(values)


def submit_form(view: ListView, form: _Form) -> tuple[bool, dict[str, str]]:
    """
    Validate ``form`` and create the record through ``view``.

    Returns:
        ``(created, field_errors)``. An invalid form is never sent; server
        failures come back as ``(False, {})`` with the toast queued on the view.
    """
    errors = form.validate()
    if errors:
        view.notify(ERROR, INVALID_FORM)
        return False, errors
    return view.create(form.to_request()), {}
