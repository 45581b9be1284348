"""Stable per-element and per-field accessors derived from one whole-value setter."""

from destructure.destructuring import destructure, destructure_fixed
from destructure.exceptions import UsageError
from destructure.fingerprint import fingerprint_keys
from destructure.host import StateCell
from destructure.site import AccessorSlot, SiteRegistry

__all__ = [
    "__version__",
    "AccessorSlot",
    "SiteRegistry",
    "StateCell",
    "UsageError",
    "destructure",
    "destructure_fixed",
    "fingerprint_keys",
]

__version__ = "0.1.0"
