"""
Deterministic demo records for every resource.

Records are generated from a fixed seed so that a demo session (and the tests)
always see the same data. Profiler profiles and their transactions share
clients and banks so that names line up across screens.
"""

import random
from datetime import datetime, timedelta
from functools import cache

_SEED = 20240105
_BASE_TIME = datetime(2024, 1, 5, 9, 30, 0)

_CLIENT_NAMES = (
    "Aarav Shah", "Meera Iyer", "Rohan Gupta", "Ananya Rao", "Vikram Nair",
    "Priya Menon", "Kabir Singh", "Isha Patel", "Arjun Desai", "Nisha Kapoor",
    "Dev Malhotra", "Sara Thomas",
)
_BANK_NAMES = ("HDFC", "ICICI", "SBI", "Axis", "Kotak", "Yes Bank")
_CARD_NAMES = ("Visa Gold", "Visa Platinum", "Mastercard World", "RuPay Select",
               "Amex Gold", "Diners Black", "Visa Signature", "Mastercard Titanium")
_REMARKS = ("Monthly settlement", "Advance", "Refund adjustment", "Card bill", "", "Cash deposit")


def _stamp(offset_minutes: int) -> datetime:
    return _BASE_TIME + timedelta(minutes=offset_minutes)


def _named(names: tuple[str, ...], counter: str) -> list[dict]:
    rng = random.Random(f"{_SEED}-{counter}")
    records = []
    for index, name in enumerate(names, start=1):
        created = _stamp(index * 97)
        records.append(
            {
                "id": index,
                "name": name,
                "transaction_count": rng.randint(0, 40),
                "create_date": created.date().isoformat(),
                "create_time": created.time().isoformat(),
            }
        )
    return records


def _clients() -> list[dict]:
    records = _named(_CLIENT_NAMES, "clients")
    for record in records:
        slug = record["name"].lower().replace(" ", ".")
        record.update(
            email=f"{slug}@example.com",
            contact=f"98{record['id']:08d}",
            address=f"{record['id']} MG Road, Pune",
        )
    return records


def _transactions(count: int = 45) -> list[dict]:
    rng = random.Random(f"{_SEED}-transactions")
    records = []
    for index in range(1, count + 1):
        client_id = rng.randint(1, len(_CLIENT_NAMES))
        bank_id = rng.randint(1, len(_BANK_NAMES))
        card_id = rng.randint(1, len(_CARD_NAMES))
        kind = rng.choice((0, 1))
        amount = rng.randrange(500, 250000, 50)
        created = _stamp(index * 53)
        records.append(
            {
                "id": index,
                "transaction_type": kind,
                "client_id": client_id,
                "client_name": _CLIENT_NAMES[client_id - 1],
                "transaction_amount": float(amount),
                "widthdraw_charges": rng.choice((0.0, 1.0, 2.0, 2.5)) if kind else 0.0,
                "bank_id": bank_id,
                "bank_name": _BANK_NAMES[bank_id - 1],
                "card_id": card_id,
                "card_name": _CARD_NAMES[card_id - 1],
                "remark": rng.choice(_REMARKS),
                "create_date": created.date().isoformat(),
                "create_time": created.time().isoformat(),
            }
        )
    return records


def _profiler_clients() -> list[dict]:
    rng = random.Random(f"{_SEED}-profiler-clients")
    records = []
    for index, name in enumerate(_CLIENT_NAMES[:10], start=1):
        records.append(
            {
                "id": index,
                "name": name,
                "email": f"{name.split()[0].lower()}@example.com",
                "mobile_number": f"97{index:08d}",
                "aadhaar_card_number": f"{rng.randint(1000, 9999)} {rng.randint(1000, 9999)} {rng.randint(1000, 9999)}",
                "notes": "",
                "profile_count": 0,
                "created_at": _stamp(index * 71).isoformat(),
            }
        )
    return records


def _profiler_banks() -> list[dict]:
    return [
        {
            "id": index,
            "bank_name": name,
            "profile_count": 0,
            "created_at": _stamp(index * 83).isoformat(),
        }
        for index, name in enumerate(_BANK_NAMES[:5], start=1)
    ]


def _profiles(count: int = 24) -> list[dict]:
    rng = random.Random(f"{_SEED}-profiles")
    clients = _profiler_clients()
    banks = _profiler_banks()
    records = []
    for index in range(1, count + 1):
        client = rng.choice(clients)
        bank = rng.choice(banks)
        planned = float(rng.randrange(50000, 500000, 5000))
        balance = round(planned * rng.uniform(0.2, 1.0), 2)
        withdrawn = round(balance * rng.uniform(0.0, 1.0), 2)
        done = rng.random() < 0.2
        records.append(
            {
                "id": index,
                "client_id": client["id"],
                "client_name": client["name"],
                "bank_id": bank["id"],
                "bank_name": bank["bank_name"],
                "credit_card_number": f"XXXX-XXXX-XXXX-{rng.randint(1000, 9999)}",
                "pre_planned_deposit_amount": planned,
                "current_balance": balance,
                "total_withdrawn_amount": withdrawn,
                "remaining_balance": round(balance - withdrawn, 2),
                "carry_forward_enabled": rng.random() < 0.5,
                "status": "done" if done else "active",
                "notes": "",
                "marked_done_at": _stamp(index * 61 + 600).isoformat() if done else None,
                "created_at": _stamp(index * 61).isoformat(),
            }
        )
    return records


def _profiler_transactions(count: int = 60) -> list[dict]:
    rng = random.Random(f"{_SEED}-profiler-transactions")
    profiles = _profiles()
    records = []
    for index in range(1, count + 1):
        profile = rng.choice(profiles)
        kind = rng.choice(("deposit", "withdraw"))
        amount = float(rng.randrange(1000, 100000, 500))
        pct = rng.choice((0.0, 1.0, 2.0, 2.5)) if kind == "withdraw" else 0.0
        records.append(
            {
                "id": index,
                "profile_id": profile["id"],
                "client_name": profile["client_name"],
                "bank_name": profile["bank_name"],
                "credit_card_number": profile["credit_card_number"],
                "transaction_type": kind,
                "amount": amount,
                "withdraw_charges_percentage": pct,
                "withdraw_charges_amount": round(amount * pct / 100, 2),
                "notes": rng.choice(_REMARKS),
                "created_at": _stamp(index * 47).isoformat(),
            }
        )
    return records


_BUILDERS = {
    "transactions": _transactions,
    "clients": _clients,
    "banks": lambda: _named(_BANK_NAMES, "banks"),
    "cards": lambda: _named(_CARD_NAMES, "cards"),
    "profiler_clients": _profiler_clients,
    "profiler_banks": _profiler_banks,
    "profiler_profiles": _profiles,
    "profiler_dashboard": _profiles,
    "profiler_transactions": _profiler_transactions,
}


def demo_records(resource: str) -> list[dict]:
    """Return a fresh list of demo records for ``resource``."""
    try:
        builder = _BUILDERS[resource]
    except KeyError:
        raise ValueError(f"No demo data for resource {resource!r}") from None
    return builder()


@cache
def shared_demo_records(resource: str) -> list[dict]:
    """
    Demo records shared by every demo service in the process.

    The dashboard and the profiles screen read the same list so that marking
    a profile done shows up on both.
    """
    if resource == "profiler_dashboard":
        return shared_demo_records("profiler_profiles")
    return demo_records(resource)
