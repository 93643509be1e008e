"""
Deterministic canonical encoding primitives.

Used for deriving account identifiers (pool, stake, escrow vaults) and for
serializing notification records to JSON lines.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


def _reject_surrogates(s: str) -> None:
    # Surrogate code points are not valid Unicode scalar values and lead to
    # implementation-defined behavior across JSON encoders/UTF-8 encoders.
    for ch in s:
        o = ord(ch)
        if 0xD800 <= o <= 0xDFFF:
            raise TypeError("surrogate code points are not allowed in canonical encoding")


def _reject_floats(value: Any) -> None:
    if isinstance(value, float):
        raise TypeError("floats are not allowed in canonical encoding")
    if isinstance(value, str):
        _reject_surrogates(value)
    if isinstance(value, dict):
        for k in value.keys():
            if not isinstance(k, str):
                raise TypeError("dict keys must be str for canonical encoding")
        for k, v in value.items():
            _reject_surrogates(k)
            _reject_floats(v)
        return
    if isinstance(value, (list, tuple)):
        for item in value:
            _reject_floats(item)
        return


def canonical_json_bytes(value: Any) -> bytes:
    """
    Canonical JSON encoding.

    Rules:
    - UTF-8
    - sort_keys=True
    - separators=(',', ':') (no whitespace)
    - allow_nan=False
    - floats rejected (to avoid representation ambiguity)
    """
    _reject_floats(value)
    text = json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    )
    return text.encode("utf-8")


def sha256_hex(data: bytes) -> str:
    return "0x" + hashlib.sha256(data).hexdigest()


def domain_sep_bytes(label: str, version: int = 1) -> bytes:
    """
    Create a domain separation prefix.

    The output is ASCII-only and NUL-terminated to make concatenation unambiguous.
    """
    if not isinstance(label, str) or not label:
        raise TypeError("label must be a non-empty str")
    if "\x00" in label:
        raise ValueError("label must not contain NUL")
    try:
        label_bytes = label.encode("ascii")
    except UnicodeEncodeError as exc:
        raise ValueError("label must be ASCII") from exc
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError("version must be a positive int")
    return b"vestamm:" + label_bytes + b":v" + str(version).encode("ascii") + b"\x00"


def encode_uvarint(value: int) -> bytes:
    """Unsigned LEB128."""
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValueError(f"uvarint must be a non-negative int, got {value!r}")
    out = bytearray()
    n = value
    while True:
        byte = n & 0x7F
        n >>= 7
        if n:
            out.append(byte | 0x80)
        else:
            out.append(byte)
            break
    return bytes(out)


def encode_str(value: str) -> bytes:
    if not isinstance(value, str):
        raise TypeError("value must be a str")
    _reject_surrogates(value)
    raw = value.encode("utf-8")
    return encode_uvarint(len(raw)) + raw


def derive_id(label: str, *parts: str | int) -> str:
    """
    Deterministic identifier: sha256(domain_sep(label) || length-prefixed parts).

    String parts are length-prefixed UTF-8; int parts are uvarints, so
    ("ab", "c") and ("a", "bc") never collide.
    """
    buf = bytearray(domain_sep_bytes(label))
    for part in parts:
        if isinstance(part, bool):
            raise TypeError("bool parts are not allowed")
        if isinstance(part, int):
            buf += b"\x01" + encode_uvarint(part)
        elif isinstance(part, str):
            buf += b"\x02" + encode_str(part)
        else:
            raise TypeError(f"unsupported id part: {type(part).__name__}")
    return sha256_hex(bytes(buf))
