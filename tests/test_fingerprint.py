from __future__ import annotations

from destructure.fingerprint import (
    EMPTY_FINGERPRINT,
    FINGERPRINT_BITS,
    fingerprint_hex,
    fingerprint_keys,
    string_hash,
)


def test_fingerprint_is_order_independent() -> None:
    assert fingerprint_keys(["a", "b"]) == fingerprint_keys(["b", "a"])
    assert fingerprint_keys({"x", "y", "z"}) == fingerprint_keys(("z", "x", "y"))


def test_fingerprint_detects_changed_key_set() -> None:
    assert fingerprint_keys(["a", "b"]) != fingerprint_keys(["a", "c"])
    assert fingerprint_keys(["a"]) != fingerprint_keys(["a", "b"])


def test_fingerprint_of_empty_key_set_is_zero() -> None:
    assert fingerprint_keys([]) == EMPTY_FINGERPRINT


def test_fingerprint_is_deterministic_and_fixed_width() -> None:
    first = string_hash("firstName")
    second = string_hash("firstName")
    assert first == second
    assert 0 <= first < 2**FINGERPRINT_BITS
    assert len(fingerprint_hex(fingerprint_keys(["a", "b"]))) == FINGERPRINT_BITS // 4


def test_fingerprint_accepts_fresh_key_views() -> None:
    record = {"firstName": "John", "lastName": "Doe"}
    rebuilt = dict(reversed(list(record.items())))
    assert fingerprint_keys(record.keys()) == fingerprint_keys(rebuilt.keys())
