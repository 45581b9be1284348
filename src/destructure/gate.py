from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Generic, TypeVar

from destructure.accessor_contract import CacheEventCallback

ValueT = TypeVar("ValueT")

_NOTHING = object()


@dataclass
class RecomputationGate(Generic[ValueT]):
    """Memo boundary deciding whether a call-site reconciles at all.

    ``identity_inputs`` are compared with ``is`` (composite references) and
    ``value_inputs`` with ``==`` (setters, fingerprints, naming). The gate
    recomputes when any tracked input differs from the previous call and
    otherwise returns the previous output object untouched. Two composites
    with equal contents but different identity still recompute.
    """

    _identity_inputs: tuple[object, ...] = ()
    _value_inputs: tuple[object, ...] = ()
    _value: object = field(default=_NOTHING)
    hits: int = 0
    misses: int = 0

    def derive(
        self,
        *,
        identity_inputs: tuple[object, ...],
        value_inputs: tuple[object, ...],
        compute_fn: Callable[[], ValueT],
        on_cache_event: CacheEventCallback | None = None,
    ) -> ValueT:
        if self._value is not _NOTHING and self._unchanged(
            identity_inputs, value_inputs
        ):
            self.hits += 1
            if on_cache_event is not None:
                on_cache_event("gate:hit", None)
            return self._value  # type: ignore[return-value]
        self.misses += 1
        if on_cache_event is not None:
            on_cache_event("gate:miss", None)
        value = compute_fn()
        self._identity_inputs = identity_inputs
        self._value_inputs = value_inputs
        self._value = value
        return value

    def clear(self) -> None:
        self._identity_inputs = ()
        self._value_inputs = ()
        self._value = _NOTHING

    def _unchanged(
        self,
        identity_inputs: tuple[object, ...],
        value_inputs: tuple[object, ...],
    ) -> bool:
        if len(identity_inputs) != len(self._identity_inputs):
            return False
        if len(value_inputs) != len(self._value_inputs):
            return False
        for previous, current in zip(self._identity_inputs, identity_inputs):
            if previous is not current:
                return False
        for previous, current in zip(self._value_inputs, value_inputs):
            if previous is not current and previous != current:
                return False
        return True
