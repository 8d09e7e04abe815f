"""
Hashing and JSON helpers.

``hash`` gives stable cache keys for request parameters; ``to_json`` renders
payloads and dataclasses for log lines.
"""

import hashlib
import json
from dataclasses import asdict, is_dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any


def hash(obj: Any) -> str:
    """
    Return a stable sha256 hex digest of a JSON-serializable object.

    Keys are sorted so two mappings with the same content hash the same
    regardless of insertion order.
    """
    payload = json.dumps(obj, sort_keys=True, default=_default_serializer)
    return hashlib.sha256(payload.encode("utf-8")).hexdigest()


def to_json(obj: Any, indent: int | None = None) -> str:
    """Serialize ``obj`` to JSON, converting dataclasses and dates on the way."""
    if is_dataclass(obj) and not isinstance(obj, type):
        obj = asdict(obj)
    return json.dumps(obj, default=_default_serializer, indent=indent)


def _default_serializer(obj: Any) -> Any:
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, (datetime, date)):
        return obj.isoformat()
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, (set, frozenset)):
        return sorted(obj)
    if hasattr(obj, "to_dict"):
        return obj.to_dict()
    return str(obj)
