"""Order-independent fingerprints over record key sets.

Enumerating the keys of a mapping yields a fresh list on every call, so the
list itself is useless as a memo dependency, and comparing the lists element
by element costs more than the reconciliation it would guard. A fingerprint
folds one hash per key with XOR, so any permutation of the same keys produces
the same integer and two key sets compare in constant time.
"""

from __future__ import annotations

import hashlib
from collections.abc import Iterable
from functools import reduce
from operator import xor

FINGERPRINT_DIGEST_SIZE = 8
FINGERPRINT_BITS = FINGERPRINT_DIGEST_SIZE * 8
EMPTY_FINGERPRINT = 0


def string_hash(value: str) -> int:
    digest = hashlib.blake2b(
        value.encode("utf-8"),
        digest_size=FINGERPRINT_DIGEST_SIZE,
    ).digest()
    return int.from_bytes(digest, "big")


def fingerprint_keys(keys: Iterable[str]) -> int:
    # Keys of a mapping are unique; a repeated key would cancel itself out.
    return reduce(xor, (string_hash(key) for key in keys), EMPTY_FINGERPRINT)


def fingerprint_hex(fingerprint: int) -> str:
    return f"{fingerprint:0{FINGERPRINT_DIGEST_SIZE * 2}x}"
