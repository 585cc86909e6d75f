"""
Canonical byte encoding for persisted pair snapshots.

A snapshot hashes to the same commitment on every host, so the encoding admits
only JSON values with one textual form: ints, strings, bools, null, lists and
str-keyed objects.
"""

from __future__ import annotations

import hashlib
import json
from typing import Any


def _is_surrogate(text: str) -> bool:
    return any(0xD800 <= ord(ch) <= 0xDFFF for ch in text)


def _check_encodable(value: Any, path: str = "$") -> None:
    if isinstance(value, float):
        raise TypeError(f"{path}: float has no canonical form")
    if isinstance(value, str):
        if _is_surrogate(value):
            raise TypeError(f"{path}: lone surrogate in string")
    elif isinstance(value, dict):
        for key, item in value.items():
            if not isinstance(key, str):
                raise TypeError(f"{path}: object keys must be str, got {type(key).__name__}")
            if _is_surrogate(key):
                raise TypeError(f"{path}: lone surrogate in key")
            _check_encodable(item, f"{path}.{key}")
    elif isinstance(value, (list, tuple)):
        for i, item in enumerate(value):
            _check_encodable(item, f"{path}[{i}]")


def encode_canonical(value: Any) -> bytes:
    """UTF-8 JSON with sorted keys and no whitespace; floats and NaN are refused."""
    _check_encodable(value)
    return json.dumps(
        value,
        sort_keys=True,
        separators=(",", ":"),
        ensure_ascii=False,
        allow_nan=False,
    ).encode("utf-8")


def domain_prefix(label: str, version: int = 1) -> bytes:
    """
    Tag bytes that keep commitments of different record kinds apart.

    Layout: ``pairswap:<label>:v<version>`` followed by a NUL byte.
    """
    if not isinstance(label, str) or not label.isascii() or not label:
        raise ValueError(f"label must be a non-empty ASCII string: {label!r}")
    if "\x00" in label or ":" in label:
        raise ValueError(f"label must not contain NUL or ':': {label!r}")
    if not isinstance(version, int) or isinstance(version, bool) or version <= 0:
        raise ValueError(f"version must be a positive int: {version!r}")
    return f"pairswap:{label}:v{version}".encode("ascii") + b"\x00"


def sha256_hex(data: bytes) -> str:
    return "0x" + hashlib.sha256(data).hexdigest()
