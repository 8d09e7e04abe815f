"""
Request payloads for create operations and the charge arithmetic shared by
forms and the calculator.

Amounts are handled as ``Decimal`` and quantized to two places; payloads sent to
the API use floats, which is what the server expects in JSON.
"""

from dataclasses import dataclass
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

DEPOSIT = "deposit"
WITHDRAW = "withdraw"

CENTS = Decimal("0.01")
HUNDRED = Decimal("100")


def parse_amount(raw: Any) -> Decimal | None:
    """
    Read a user-typed amount.

    Thousands separators and surrounding spaces are ignored. Returns ``None``
    for blank or unparseable input.
    """
    if raw is None:
        return None
    if isinstance(raw, Decimal):
        return raw
    if isinstance(raw, (int, float)) and not isinstance(raw, bool):
        return Decimal(str(raw))
    text = str(raw).replace(",", "").strip()
    if not text:
        return None
    try:
        value = Decimal(text)
    except InvalidOperation:
        return None
    return value if value.is_finite() else None


def quantize(value: Decimal) -> Decimal:
    return value.quantize(CENTS, rounding=ROUND_HALF_UP)


@dataclass(frozen=True, slots=True)
class ChargeBreakdown:
    """
    Charge applied on top of (withdraw) or taken out of (deposit) an amount.

    Attributes:
        amount: Base amount entered by the user.
        percentage: Charge percentage.
        charge_amount: ``amount * percentage / 100``.
        adjusted_amount: ``amount + charge`` for withdrawals, ``amount - charge`` for deposits.
    """

    amount: Decimal
    percentage: Decimal
    charge_amount: Decimal
    adjusted_amount: Decimal


def charge_breakdown(
    amount: Decimal | float | str, percentage: Decimal | float | str, side: str = WITHDRAW
) -> ChargeBreakdown:
    base = parse_amount(amount) or Decimal("0")
    pct = parse_amount(percentage) or Decimal("0")
    charge = quantize(base * pct / HUNDRED)
    adjusted = base + charge if side == WITHDRAW else base - charge
    return ChargeBreakdown(
        amount=quantize(base),
        percentage=pct,
        charge_amount=charge,
        adjusted_amount=quantize(adjusted),
    )


GST_PERCENTAGE = Decimal("18")


def _clamp(value: Decimal | None, upper: Decimal | None = None) -> Decimal:
    value = max(value or Decimal("0"), Decimal("0"))
    return min(value, upper) if upper is not None else value


@dataclass(frozen=True, slots=True)
class MarginBreakdown:
    """
    What a swipe earns once the bank's charge and its GST are paid.

    Percentages are of the swiped amount. ``payable`` is what the customer
    receives after our charge; ``net_profit`` is the markup earned less the
    flat platform fee.
    """

    amount: Decimal
    bank_percentage: Decimal
    gst_on_bank_percentage: Decimal
    bank_with_gst_percentage: Decimal
    our_percentage: Decimal
    markup_percentage: Decimal
    platform_fee: Decimal
    gross_earnings: Decimal
    payable: Decimal
    net_profit: Decimal


def margin_breakdown(
    amount: Any, our_percentage: Any, bank_percentage: Any, platform_fee: Any = 0
) -> MarginBreakdown:
    """
    Simple calculator arithmetic.

    Inputs are clamped: amounts and fees to zero or more, percentages to
    0-100. GST is charged on the bank's percentage.
    """
    base = _clamp(parse_amount(amount))
    ours = _clamp(parse_amount(our_percentage), HUNDRED)
    bank = _clamp(parse_amount(bank_percentage), HUNDRED)
    fee = _clamp(parse_amount(platform_fee))
    gst_on_bank = bank * GST_PERCENTAGE / HUNDRED
    bank_with_gst = bank + gst_on_bank
    markup = ours - bank_with_gst
    gross = quantize(base * markup / HUNDRED)
    return MarginBreakdown(
        amount=quantize(base),
        bank_percentage=bank,
        gst_on_bank_percentage=gst_on_bank,
        bank_with_gst_percentage=bank_with_gst,
        our_percentage=ours,
        markup_percentage=markup,
        platform_fee=quantize(fee),
        gross_earnings=gross,
        payable=charge_breakdown(base, ours, DEPOSIT).adjusted_amount,
        net_profit=gross - quantize(fee),
    )


@dataclass(frozen=True, slots=True)
class LedgerTransactionRequest:
    """Body of ``POST /api/v1/transactions``."""

    transaction_type: int
    client_id: int
    transaction_amount: Decimal
    widthdraw_charges: Decimal = Decimal("0")
    bank_id: int | None = None
    card_id: int | None = None
    remark: str = ""

    def to_payload(self) -> dict:
        payload = {
            "transaction_type": self.transaction_type,
            "client_id": self.client_id,
            "transaction_amount": float(self.transaction_amount),
            "widthdraw_charges": float(self.widthdraw_charges),
            "remark": self.remark,
        }
        if self.bank_id is not None:
            payload["bank_id"] = self.bank_id
        if self.card_id is not None:
            payload["card_id"] = self.card_id
        return payload


@dataclass(frozen=True, slots=True)
class ProfilerDepositRequest:
    """Body of ``POST /api/v2/profiler/transactions/deposit``."""

    profile_id: int
    amount: Decimal
    notes: str | None = None

    def to_payload(self) -> dict:
        return {
            "transaction_type": DEPOSIT,
            "profile_id": self.profile_id,
            "amount": float(self.amount),
            "notes": self.notes or None,
        }


@dataclass(frozen=True, slots=True)
class ProfilerWithdrawRequest:
    """Body of ``POST /api/v2/profiler/transactions/withdraw``."""

    profile_id: int
    amount: Decimal
    withdraw_charges_percentage: Decimal = Decimal("0")
    notes: str | None = None

    def to_payload(self) -> dict:
        return {
            "transaction_type": WITHDRAW,
            "profile_id": self.profile_id,
            "amount": float(self.amount),
            "withdraw_charges_percentage": float(self.withdraw_charges_percentage),
            "notes": self.notes or None,
        }


@dataclass(frozen=True, slots=True)
class ProfileRequest:
    """Body of ``POST /api/v2/profiler/profiles``."""

    client_id: int
    bank_id: int
    credit_card_number: str
    pre_planned_deposit_amount: Decimal
    carry_forward_enabled: bool = False
    notes: str | None = None

    def to_payload(self) -> dict:
        return {
            "client_id": self.client_id,
            "bank_id": self.bank_id,
            "credit_card_number": self.credit_card_number,
            "pre_planned_deposit_amount": float(self.pre_planned_deposit_amount),
            "carry_forward_enabled": self.carry_forward_enabled,
            "notes": self.notes or None,
        }


@dataclass(frozen=True, slots=True)
class ReportRequest:
    """Body of ``POST /api/v1/transactions/report``."""

    start_date: date | str
    end_date: date | str
    client_id: int | None = None

    def to_payload(self) -> dict:
        return {
            "startDate": _iso(self.start_date),
            "endDate": _iso(self.end_date),
            "clientId": self.client_id,
        }


def to_payload(payload: Any) -> dict:
    """Accept either a request dataclass or a plain mapping."""
    if hasattr(payload, "to_payload"):
        return payload.to_payload()
    return dict(payload)


def _iso(value: date | str) -> str:
    return value.isoformat() if isinstance(value, date) else value
