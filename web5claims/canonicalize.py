"""
RFC 8785 JSON Canonicalization Scheme (JCS) for claims and certificates.

Certificates are hashed (``certificate_hash``) and signed over their
canonical bytes, and proof envelopes are fingerprinted the same way, so
the serialization must not depend on dict ordering or serializer quirks.

Rules applied (RFC 8785 §3):
  1. Object keys sorted by code point, recursively.
  2. No insignificant whitespace.
  3. Integers as-is; floats in shortest round-trip form, integral floats
     without a fraction.
  4. Only the mandatory string escapes.

Beyond plain JSON values this also accepts pydantic models, enums,
datetimes (RFC 3339, UTC-normalised) and bytes (as an array of ints, the
wire form of ``proof_bytes``).
"""

from __future__ import annotations

import math
from datetime import datetime, timezone
from enum import Enum
from typing import Any

_ESCAPES = {
    '"': '\\"',
    '\\': '\\\\',
    '\b': '\\b',
    '\f': '\\f',
    '\n': '\\n',
    '\r': '\\r',
    '\t': '\\t',
}


def _string(s: str) -> str:
    out = []
    for ch in s:
        if ch in _ESCAPES:
            out.append(_ESCAPES[ch])
        elif ord(ch) < 0x20:
            out.append(f'\\u{ord(ch):04x}')
        else:
            out.append(ch)
    return '"' + ''.join(out) + '"'


def _float(n: float) -> str:
    if math.isnan(n) or math.isinf(n):
        raise ValueError("NaN/Infinity cannot be canonicalized")
    if n.is_integer() and abs(n) < 2**53:
        return str(int(n))
    r = repr(n).lower()
    if 'e' not in r and '.' in r:
        r = r.rstrip('0').rstrip('.') or '0'
    return r


def _datetime(dt: datetime) -> str:
    if dt.tzinfo is None:
        dt = dt.replace(tzinfo=timezone.utc)
    return dt.astimezone(timezone.utc).isoformat().replace('+00:00', 'Z')


def to_jsonable(obj: Any) -> Any:
    """Lower models, enums, datetimes and bytes to plain JSON values."""
    if hasattr(obj, 'model_dump'):
        return to_jsonable(obj.model_dump(mode='json'))
    if isinstance(obj, Enum):
        return to_jsonable(obj.value)
    if isinstance(obj, datetime):
        return _datetime(obj)
    if isinstance(obj, (bytes, bytearray)):
        return list(obj)
    if isinstance(obj, dict):
        return {str(k): to_jsonable(v) for k, v in obj.items()}
    if isinstance(obj, (list, tuple)):
        return [to_jsonable(v) for v in obj]
    return obj


def _encode(obj: Any) -> str:
    if obj is None:
        return 'null'
    if obj is True:
        return 'true'
    if obj is False:
        return 'false'
    if isinstance(obj, int):
        return str(obj)
    if isinstance(obj, float):
        return _float(obj)
    if isinstance(obj, str):
        return _string(obj)
    if isinstance(obj, list):
        return '[' + ','.join(_encode(v) for v in obj) + ']'
    if isinstance(obj, dict):
        members = (f'{_string(k)}:{_encode(obj[k])}' for k in sorted(obj))
        return '{' + ','.join(members) + '}'
    raise TypeError(f"Cannot canonicalize type {type(obj)}")


def canonicalize_json(obj: Any) -> str:
    """Return the JCS canonical string of *obj*."""
    return _encode(to_jsonable(obj))


def canonicalize(obj: Any) -> bytes:
    """Return the JCS canonical UTF-8 bytes of *obj*."""
    return canonicalize_json(obj).encode('utf-8')
